from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from rankchart.adapters import normalize_observations
from rankchart.bands import MonthBand, month_bands
from rankchart.config import DEFAULT_CONFIG, RankChartConfig
from rankchart.curve import monotone_x_path
from rankchart.models import ChartDomain, RankObservation, Viewport
from rankchart.scales import LinearScale, TimeScale, build_rank_scale, build_time_scale
from rankchart.ticks import AxisDescription, GridLine, horizontal_gridlines, weekly_tick_values, x_axis, y_axis
from rankchart.voronoi import PointLocator, PointPartitioner, partition_points, polygon_path


LOGGER = logging.getLogger(__name__)

LAYER_ORDER: tuple[str, ...] = ("month-bg", "h-grid", "axis-x", "axis-y", "line", "voronoi")


@dataclass(frozen=True)
class PointRegion:
    index: int
    observation: RankObservation
    polygon: tuple[tuple[float, float], ...]
    path: str


@dataclass(frozen=True)
class RankChartLayout:
    viewport: Viewport
    observations: tuple[RankObservation, ...] = ()
    points: tuple[tuple[float, float], ...] = ()
    domain: ChartDomain | None = None
    x: TimeScale | None = None
    y: LinearScale | None = None
    month_bands: tuple[MonthBand, ...] = ()
    gridlines: tuple[GridLine, ...] = ()
    x_axis: AxisDescription | None = None
    y_axis: AxisDescription | None = None
    curve: str = ""
    regions: tuple[PointRegion, ...] = ()
    locator: PointLocator | None = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def plot_size(self) -> tuple[float, float]:
        return (self.viewport.plot_width, self.viewport.plot_height)

    def layers(self) -> tuple[tuple[str, Any], ...]:
        if self.is_empty:
            return ()
        content = {
            "month-bg": self.month_bands,
            "h-grid": self.gridlines,
            "axis-x": self.x_axis,
            "axis-y": self.y_axis,
            "line": self.curve,
            "voronoi": self.regions,
        }
        return tuple((name, content[name]) for name in LAYER_ORDER)

    def locate(self, x: float, y: float, *, frame: bool = False) -> int | None:
        """Index into ``observations`` of the point nearest to a pointer position.

        Coordinates are plot-relative unless ``frame`` is set, in which case
        they are relative to the outer chart and the margin is removed first.
        """
        if self.locator is None:
            return None
        if frame:
            x -= self.viewport.margin.left
            y -= self.viewport.margin.top
        return self.locator.locate(x, y)

    def observation_at(self, x: float, y: float, *, frame: bool = False) -> RankObservation | None:
        index = self.locate(x, y, frame=frame)
        return None if index is None else self.observations[index]


def build_rank_chart(
    observations: Iterable[Any] | None,
    viewport: Viewport | tuple[float, float],
    *,
    config: RankChartConfig | None = None,
    partitioner: PointPartitioner | None = None,
) -> RankChartLayout:
    """Lay out a rank chart for ``observations`` inside ``viewport``.

    A ``(width, height)`` pair takes its margin from ``config``; a full
    ``Viewport`` keeps its own margin and ``config.margin`` is ignored.
    """
    cfg = config or DEFAULT_CONFIG
    if not isinstance(viewport, Viewport):
        width, height = viewport
        viewport = Viewport(width=width, height=height, margin=cfg.margin)
    elif viewport.margin != cfg.margin:
        LOGGER.debug("viewport margin %s overrides config margin %s", viewport.margin, cfg.margin)

    ingested = normalize_observations(observations)
    if not ingested:
        return RankChartLayout(viewport=viewport)
    if not viewport.has_plot_area():
        LOGGER.warning(
            "viewport %sx%s leaves no plotting area after margins; rendering frame only",
            viewport.width,
            viewport.height,
        )
        return RankChartLayout(viewport=viewport)

    data = tuple(sorted(ingested, key=lambda obs: obs.day))
    domain = ChartDomain.from_sorted(data)
    w = viewport.plot_width
    h = viewport.plot_height
    LOGGER.debug("building rank chart: %d observations, plot %sx%s", len(data), w, h)

    x = build_time_scale(domain.start, domain.end, w)
    y = build_rank_scale(
        domain.min_rank,
        domain.max_rank,
        h,
        upper_padding=cfg.upper_rank_padding,
        lower_padding=cfg.lower_rank_padding,
        nice_count=cfg.y_nice_count,
    )

    tick_values = weekly_tick_values(domain.start, domain.end, cfg.tick_interval_days)
    points = tuple((x(obs.day), y(obs.rank)) for obs in data)
    clip = (0.0, 0.0, w, h)
    cells = partition_points(points, clip, partitioner)
    regions = tuple(
        PointRegion(
            index=cell.index,
            observation=data[cell.index],
            polygon=cell.polygon,
            path=polygon_path(cell.polygon),
        )
        for cell in cells
    )

    return RankChartLayout(
        viewport=viewport,
        observations=data,
        points=points,
        domain=domain,
        x=x,
        y=y,
        month_bands=month_bands(domain.start, domain.end, x, h),
        gridlines=horizontal_gridlines(y, cfg.y_tick_count, w),
        x_axis=x_axis(
            x,
            tick_values,
            plot_height=h,
            formatter=cfg.x_label_formatter,
            tick_padding=cfg.x_tick_padding,
        ),
        y_axis=y_axis(y, cfg.y_tick_count),
        curve=monotone_x_path(points),
        regions=regions,
        locator=PointLocator(points, clip),
    )
