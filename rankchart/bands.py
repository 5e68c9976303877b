from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Callable

from rankchart.dates import ONE_DAY, end_of_month
from rankchart.path import format_coord


@dataclass(frozen=True)
class MonthBand:
    x1: float
    x2: float
    height: float
    month_start: dt.date
    start: dt.date
    end: dt.date
    parity: int = 0

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def path(self) -> str:
        x1 = format_coord(self.x1)
        x2 = format_coord(self.x2)
        h = format_coord(self.height)
        return f"M{x1},0L{x2},0L{x2},{h}L{x1},{h}Z"


def month_bands(
    start: dt.date,
    end: dt.date,
    x: Callable[[dt.date], float],
    height: float,
) -> tuple[MonthBand, ...]:
    """Split ``[start, end]`` into one background band per calendar month.

    The month holding ``end`` stops at ``end``; every earlier band runs to the
    first day of the following month so neighbouring bands share an edge.
    """
    bands: list[MonthBand] = []
    cur = start
    while cur < end:
        last = end_of_month(cur)
        first_next = last + ONE_DAY
        right = end if last >= end else first_next
        bands.append(
            MonthBand(
                x1=x(cur),
                x2=x(right),
                height=float(height),
                month_start=cur.replace(day=1),
                start=cur,
                end=right,
                parity=len(bands) % 2,
            )
        )
        cur = first_next
    return tuple(bands)


def month_band_paths(
    start: dt.date,
    end: dt.date,
    x: Callable[[dt.date], float],
    height: float,
) -> list[str]:
    return [band.path for band in month_bands(start, end, x, height)]
