from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Literal

from rankchart.dates import month_abbr
from rankchart.scales import LinearScale, TimeScale, format_ticks_for_axis


AxisOrientation = Literal["bottom", "left"]


@dataclass(frozen=True)
class AxisTick:
    value: Any
    offset: float
    label: str


@dataclass(frozen=True)
class AxisDescription:
    orientation: AxisOrientation
    ticks: tuple[AxisTick, ...]
    translate: tuple[float, float] = (0.0, 0.0)
    tick_size: float = 6.0
    tick_padding: float = 3.0


@dataclass(frozen=True)
class GridLine:
    y: float
    x1: float
    x2: float


def format_day_label(day: dt.date) -> str:
    return f"{month_abbr(day)} {day.day:02d}"


def weekly_tick_values(start: dt.date, end: dt.date, interval_days: int = 7) -> tuple[dt.date, ...]:
    """Tick dates anchored at ``end``, stepping back until ``start`` is reached.

    Newest first. ``start`` itself is never labelled.
    """
    if interval_days < 1:
        raise ValueError("interval_days must be >= 1")
    step = dt.timedelta(days=interval_days)
    values: list[dt.date] = []
    cur = end
    while start < cur:
        values.append(cur)
        cur = cur - step
    return tuple(values)


def x_axis(
    x: TimeScale,
    values: tuple[dt.date, ...],
    *,
    plot_height: float,
    formatter: Callable[[dt.date], str] = format_day_label,
    tick_padding: float = 8.0,
) -> AxisDescription:
    ticks = tuple(AxisTick(value=day, offset=x(day), label=formatter(day)) for day in values)
    return AxisDescription(
        orientation="bottom",
        ticks=ticks,
        translate=(0.0, float(plot_height)),
        tick_size=0.0,
        tick_padding=tick_padding,
    )


def y_axis(y: LinearScale, count: int) -> AxisDescription:
    values = y.ticks(count)
    labels = format_ticks_for_axis(values)
    ticks = tuple(
        AxisTick(value=float(v), offset=y(float(v)), label=label)
        for v, label in zip(values.tolist(), labels)
    )
    return AxisDescription(orientation="left", ticks=ticks, tick_size=0.0)


def horizontal_gridlines(y: LinearScale, count: int, width: float) -> tuple[GridLine, ...]:
    return tuple(GridLine(y=y(float(v)), x1=0.0, x2=float(width)) for v in y.ticks(count).tolist())
