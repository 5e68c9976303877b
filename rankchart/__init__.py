from rankchart.adapters import normalize_observations
from rankchart.bands import MonthBand, month_band_paths, month_bands
from rankchart.config import DEFAULT_CONFIG, RankChartConfig, config_from_mapping
from rankchart.curve import monotone_x_path, rank_curve
from rankchart.errors import ChartDataError, MalformedObservationError
from rankchart.layout import LAYER_ORDER, PointRegion, RankChartLayout, build_rank_chart
from rankchart.models import ChartDomain, Margin, RankObservation, Viewport
from rankchart.scales import LinearScale, TimeScale, build_rank_scale, build_time_scale
from rankchart.svg import RankChartTheme, render_svg, theme_from_mapping, write_svg
from rankchart.ticks import AxisDescription, AxisTick, GridLine, format_day_label, weekly_tick_values
from rankchart.view import RankChartView
from rankchart.voronoi import HalfPlanePartitioner, PointLocator, PointPartitioner, VoronoiCell, locate, partition_points

__all__ = [
    "AxisDescription",
    "AxisTick",
    "ChartDataError",
    "ChartDomain",
    "DEFAULT_CONFIG",
    "GridLine",
    "HalfPlanePartitioner",
    "LAYER_ORDER",
    "LinearScale",
    "MalformedObservationError",
    "Margin",
    "MonthBand",
    "PointLocator",
    "PointPartitioner",
    "PointRegion",
    "RankChartConfig",
    "RankChartLayout",
    "RankChartTheme",
    "RankChartView",
    "RankObservation",
    "TimeScale",
    "Viewport",
    "VoronoiCell",
    "build_rank_chart",
    "build_rank_scale",
    "build_time_scale",
    "config_from_mapping",
    "format_day_label",
    "locate",
    "month_band_paths",
    "month_bands",
    "monotone_x_path",
    "normalize_observations",
    "partition_points",
    "rank_curve",
    "render_svg",
    "theme_from_mapping",
    "weekly_tick_values",
    "write_svg",
]
