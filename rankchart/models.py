from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass

from rankchart.errors import MalformedObservationError


@dataclass(frozen=True)
class RankObservation:
    day: dt.date
    rank: int | float

    def __post_init__(self) -> None:
        if isinstance(self.day, dt.datetime) or not isinstance(self.day, dt.date):
            raise MalformedObservationError(f"day must be a calendar date, got {self.day!r}")
        if isinstance(self.rank, bool) or not isinstance(self.rank, (int, float)):
            raise MalformedObservationError(f"rank must be a number, got {self.rank!r}")
        if not math.isfinite(self.rank):
            raise MalformedObservationError(f"rank must be finite, got {self.rank!r}")
        if self.rank <= 0:
            raise MalformedObservationError(f"rank must be > 0, got {self.rank!r}")


@dataclass(frozen=True)
class ChartDomain:
    start: dt.date
    end: dt.date
    min_rank: int | float
    max_rank: int | float

    @classmethod
    def from_sorted(cls, observations: tuple[RankObservation, ...]) -> "ChartDomain":
        if not observations:
            raise ValueError("domain requires at least one observation")
        ranks = [obs.rank for obs in observations]
        return cls(
            start=observations[0].day,
            end=observations[-1].day,
            min_rank=min(ranks),
            max_rank=max(ranks),
        )


@dataclass(frozen=True)
class Margin:
    top: float = 20
    right: float = 20
    bottom: float = 40
    left: float = 45

    def __post_init__(self) -> None:
        for name in ("top", "right", "bottom", "left"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise ValueError(f"Margin.{name} must be a finite number >= 0")


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    margin: Margin = Margin()

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise ValueError(f"Viewport.{name} must be a finite number >= 0")

    @property
    def plot_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    def has_plot_area(self) -> bool:
        return self.plot_width > 0 and self.plot_height > 0
