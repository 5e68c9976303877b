from __future__ import annotations

import dataclasses
import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from rankchart.models import Margin
from rankchart.ticks import format_day_label


@dataclass(frozen=True)
class RankChartConfig:
    margin: Margin = Margin()
    upper_rank_padding: float = 3.0
    lower_rank_padding: float = 10.0
    tick_interval_days: int = 7
    y_tick_count: int = 5
    y_nice_count: int = 10
    x_tick_padding: float = 8.0
    x_label_formatter: Callable[[dt.date], str] = format_day_label

    def __post_init__(self) -> None:
        if not isinstance(self.margin, Margin):
            raise ValueError("RankChartConfig.margin must be a Margin")
        for name in ("upper_rank_padding", "lower_rank_padding", "x_tick_padding"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise ValueError(f"RankChartConfig.{name} must be a finite number >= 0")
        for name in ("tick_interval_days", "y_tick_count", "y_nice_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"RankChartConfig.{name} must be an integer >= 1")
        if not callable(self.x_label_formatter):
            raise ValueError("RankChartConfig.x_label_formatter must be callable")


DEFAULT_CONFIG = RankChartConfig()


def config_from_mapping(overrides: Mapping[str, Any] | None = None) -> RankChartConfig:
    """Merge plain overrides (e.g. parsed JSON) over the default config.

    ``margin`` may be given as a mapping of its sides.
    """
    known = {f.name for f in dataclasses.fields(RankChartConfig)}
    values: dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key not in known:
            raise ValueError(f"Unknown chart config key: {key}")
        values[key] = value
    margin = values.get("margin")
    if isinstance(margin, Mapping):
        sides = {f.name for f in dataclasses.fields(Margin)}
        unknown = set(margin) - sides
        if unknown:
            raise ValueError(f"Unknown margin side(s): {', '.join(sorted(unknown))}")
        values["margin"] = Margin(**margin)
    return dataclasses.replace(DEFAULT_CONFIG, **values)
