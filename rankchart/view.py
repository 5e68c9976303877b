from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from rankchart.adapters import normalize_observations
from rankchart.config import DEFAULT_CONFIG, RankChartConfig
from rankchart.layout import RankChartLayout, build_rank_chart
from rankchart.models import RankObservation, Viewport
from rankchart.voronoi import PointPartitioner


@dataclass
class LayoutCache:
    key: tuple[Any, ...] | None = None
    layout: RankChartLayout | None = None

    def invalidate(self) -> None:
        self.key = None
        self.layout = None


class RankChartView:
    """Holds chart input and rebuilds the layout when data or size changes.

    Size comes from whatever measures the container; the view only reacts to
    ``resize`` and ``set_data`` and recomputes synchronously on ``layout()``.
    """

    def __init__(
        self,
        observations: Iterable[Any] | None = None,
        config: RankChartConfig = DEFAULT_CONFIG,
        partitioner: PointPartitioner | None = None,
        *,
        width: float = 0.0,
        height: float = 0.0,
    ) -> None:
        self.config = config
        self.partitioner = partitioner
        self.width = float(width)
        self.height = float(height)
        self.builds = 0
        self._cache = LayoutCache()
        self._observations: tuple[RankObservation, ...] = ()
        self.set_data(observations)

    def __repr__(self) -> str:
        return (
            f"RankChartView(observations={len(self._observations)}, "
            f"width={self.width}, height={self.height})"
        )

    def set_data(self, observations: Iterable[Any] | None) -> None:
        data = normalize_observations(observations)
        if data != self._observations:
            self._observations = data
            self._cache.invalidate()

    def resize(self, width: float, height: float) -> None:
        if (float(width), float(height)) != (self.width, self.height):
            self.width = float(width)
            self.height = float(height)
            self._cache.invalidate()

    @property
    def observations(self) -> tuple[RankObservation, ...]:
        return self._observations

    @property
    def dirty(self) -> bool:
        return self._cache.layout is None or self._cache.key != self._key()

    def layout(self) -> RankChartLayout:
        if self.dirty:
            viewport = Viewport(width=self.width, height=self.height, margin=self.config.margin)
            self._cache.layout = build_rank_chart(
                self._observations,
                viewport,
                config=self.config,
                partitioner=self.partitioner,
            )
            self._cache.key = self._key()
            self.builds += 1
        return self._cache.layout

    def _key(self) -> tuple[Any, ...]:
        return (self._observations, self.width, self.height)
