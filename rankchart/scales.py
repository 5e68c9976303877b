from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


_E10 = math.sqrt(50.0)
_E5 = math.sqrt(10.0)
_E2 = math.sqrt(2.0)


def _interpolate(r0: float, r1: float, t: float) -> float:
    # Exact at both endpoints.
    return r0 * (1.0 - t) + r1 * t


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        span = d1 - d0
        t = (float(value) - d0) / span if span else 0.5
        return _interpolate(self.range[0], self.range[1], t)

    def nice(self, count: int = 10) -> "LinearScale":
        d0, d1 = self.domain
        reverse = d1 < d0
        start, stop = (d1, d0) if reverse else (d0, d1)
        if start == stop or count <= 0:
            return self

        prestep: float | None = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                niced = (stop, start) if reverse else (start, stop)
                return LinearScale(domain=niced, range=self.range)
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        return self

    def ticks(self, count: int = 10) -> np.ndarray:
        lo, hi = sorted(self.domain)
        return generate_nice_ticks(lo, hi, count)

    def tick_step(self, count: int = 10) -> float | None:
        lo, hi = sorted(self.domain)
        if lo == hi or count <= 0:
            return None
        inc = tick_increment(lo, hi, count)
        return inc if inc > 0 else -1.0 / inc


@dataclass(frozen=True)
class TimeScale:
    domain: tuple[dt.date, dt.date]
    range: tuple[float, float]

    def __call__(self, day: dt.date) -> float:
        start, end = self.domain
        span = (end - start).days
        t = (day - start).days / span if span else 0.5
        return _interpolate(self.range[0], self.range[1], t)

    def map_array(self, days: Iterable[dt.date]) -> np.ndarray:
        return np.asarray([self(day) for day in days], dtype=np.float64)


def build_time_scale(start: dt.date, end: dt.date, width: float) -> TimeScale:
    return TimeScale(domain=(start, end), range=(0.0, float(width)))


def build_rank_scale(
    min_rank: float,
    max_rank: float,
    height: float,
    *,
    upper_padding: float = 3.0,
    lower_padding: float = 10.0,
    nice_count: int = 10,
) -> LinearScale:
    """Rank axis: worst rank (plus padding) at the bottom, best rank near the top.

    The upper bound never drops below zero since ranks are positive.
    """
    bottom = float(max_rank) + lower_padding
    top = max(0.0, float(min_rank) - upper_padding)
    scale = LinearScale(domain=(bottom, top), range=(float(height), 0.0))
    return scale.nice(nice_count)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / (10.0**power)
    if error >= _E10:
        factor = 10.0
    elif error >= _E5:
        factor = 5.0
    elif error >= _E2:
        factor = 2.0
    else:
        factor = 1.0

    if power < 0:
        inc = (10.0**-power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = (10.0**power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return int(i1), int(i2), inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """Step between round ticks; negative values encode 1/step for sub-unit steps."""
    if stop <= start or count <= 0:
        return 0.0
    return _tick_spec(float(start), float(stop), float(count))[2]


def generate_nice_ticks(vmin: float, vmax: float, count: int) -> np.ndarray:
    if count <= 0:
        return np.asarray([], dtype=np.float64)
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)
    reverse = vmax < vmin
    lo, hi = (vmax, vmin) if reverse else (vmin, vmax)
    i1, i2, inc = _tick_spec(float(lo), float(hi), float(count))
    if i2 < i1:
        return np.asarray([], dtype=np.float64)
    idx = np.arange(i1, i2 + 1, dtype=np.float64)
    ticks = idx / -inc if inc < 0 else idx * inc
    if reverse:
        ticks = ticks[::-1]
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    """Label a tick with just enough decimals to tell neighbouring ticks apart."""
    if not math.isfinite(value):
        return str(value)
    decimals = _decimals_from_step(step) if step else 6
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size < 2:
        return [format_tick(float(v)) for v in ticks]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _decimals_from_step(step: float) -> int:
    # Steps are 1, 2 or 5 times a power of ten.
    if not math.isfinite(step) or step <= 0:
        return 6
    return min(12, max(0, -math.floor(math.log10(step) + 1e-9)))
