"""Monotone cubic path through points ordered by x.

Tangents follow Steffen's method, so the curve never overshoots the values
of neighbouring points: it has no extrema that the data does not have.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Callable, Iterable, Sequence

from rankchart.models import RankObservation
from rankchart.path import PathBuilder


def _sign(value: float) -> float:
    return -1.0 if value < 0 else 1.0


def _divide(num: float, den: float) -> float:
    # IEEE semantics: x/0 is a signed infinity and 0/0 is nan.
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _secant_den(h: float, other: float) -> float:
    if h:
        return h
    return -0.0 if other < 0 else 0.0


def _interior_slope(x0: float, y0: float, x1: float, y1: float, x2: float, y2: float) -> float:
    h0 = x1 - x0
    h1 = x2 - x1
    s0 = _divide(y1 - y0, _secant_den(h0, h1))
    s1 = _divide(y2 - y1, _secant_den(h1, h0))
    p = _divide(s0 * h1 + s1 * h0, h0 + h1)
    candidates = (abs(s0), abs(s1), 0.5 * abs(p))
    if any(math.isnan(c) for c in candidates):
        return 0.0
    out = (_sign(s0) + _sign(s1)) * min(candidates)
    return 0.0 if math.isnan(out) else out


def _end_slope(x0: float, y0: float, x1: float, y1: float, t: float) -> float:
    h = x1 - x0
    return (3.0 * (y1 - y0) / h - t) / 2.0 if h else t


def _segment(
    builder: PathBuilder, x0: float, y0: float, x1: float, y1: float, t0: float, t1: float
) -> None:
    dx = (x1 - x0) / 3.0
    builder.curve_to(x0 + dx, y0 + dx * t0, x1 - dx, y1 - dx * t1, x1, y1)


def monotone_x_path(points: Iterable[tuple[float, float]]) -> str:
    pts: list[tuple[float, float]] = []
    for x, y in points:
        x = float(x)
        y = float(y)
        if pts and pts[-1] == (x, y):
            continue
        pts.append((x, y))

    builder = PathBuilder()
    if not pts:
        return ""
    builder.move_to(*pts[0])
    if len(pts) == 1:
        return str(builder.close())
    if len(pts) == 2:
        return str(builder.line_to(*pts[1]))

    # slopes[i] is the tangent at pts[i + 1] for interior points.
    slopes = [
        _interior_slope(*pts[i - 1], *pts[i], *pts[i + 1])
        for i in range(1, len(pts) - 1)
    ]
    first = _end_slope(*pts[0], *pts[1], slopes[0])
    _segment(builder, *pts[0], *pts[1], first, slopes[0])
    for i in range(1, len(slopes)):
        _segment(builder, *pts[i], *pts[i + 1], slopes[i - 1], slopes[i])
    last = _end_slope(*pts[-2], *pts[-1], slopes[-1])
    _segment(builder, *pts[-2], *pts[-1], slopes[-1], last)
    return str(builder)


def rank_curve(
    observations: Sequence[RankObservation],
    x: Callable[[dt.date], float],
    y: Callable[[float], float],
) -> str:
    return monotone_x_path((x(obs.day), y(obs.rank)) for obs in observations)
