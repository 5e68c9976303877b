"""Nearest-point partition of the plotting rectangle for pointer hit-testing.

Each site's cell is the clip rectangle intersected with the half-planes that
are closer to the site than to every other site. Sites are visited nearest
first; once the next site is more than twice the cell radius away its
bisector cannot reach the cell, so the remaining sites are skipped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np
from scipy.spatial import cKDTree

from rankchart.path import polyline_path


LOGGER = logging.getLogger(__name__)

Point = tuple[float, float]
ClipBox = tuple[float, float, float, float]

_EPS = 1e-9


@dataclass(frozen=True)
class VoronoiCell:
    index: int
    site: Point
    polygon: tuple[Point, ...]

    @property
    def is_degenerate(self) -> bool:
        return len(self.polygon) < 3

    def area(self) -> float:
        if self.is_degenerate:
            return 0.0
        xs = np.asarray([p[0] for p in self.polygon], dtype=np.float64)
        ys = np.asarray([p[1] for p in self.polygon], dtype=np.float64)
        return float(0.5 * abs(np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))))

    def contains(self, x: float, y: float, *, tol: float = 1e-7) -> bool:
        if not self.polygon:
            return False
        if self.is_degenerate:
            return any(math.isclose(x, px, abs_tol=tol) and math.isclose(y, py, abs_tol=tol) for px, py in self.polygon)
        sign = 0.0
        n = len(self.polygon)
        for i in range(n):
            ax, ay = self.polygon[i]
            bx, by = self.polygon[(i + 1) % n]
            cross = (bx - ax) * (y - ay) - (by - ay) * (x - ax)
            if abs(cross) <= tol * max(1.0, math.hypot(bx - ax, by - ay)):
                continue
            if sign == 0.0:
                sign = cross
            elif (cross > 0) != (sign > 0):
                return False
        return True


class PointPartitioner(Protocol):
    def partition(self, points: Sequence[Point], clip: ClipBox) -> tuple[VoronoiCell, ...]:
        ...


def _clip_half_plane(polygon: list[Point], nx: float, ny: float, c: float) -> list[Point]:
    """Keep the part of a convex polygon where ``nx * x + ny * y <= c``."""
    if not polygon:
        return polygon
    norm = math.hypot(nx, ny)
    nx, ny, c = nx / norm, ny / norm, c / norm
    out: list[Point] = []
    n = len(polygon)
    for i in range(n):
        cur = polygon[i]
        nxt = polygon[(i + 1) % n]
        dc = nx * cur[0] + ny * cur[1] - c
        dn = nx * nxt[0] + ny * nxt[1] - c
        cur_in = dc <= _EPS
        nxt_in = dn <= _EPS
        if cur_in:
            out.append(cur)
        if cur_in != nxt_in:
            t = dc / (dc - dn)
            out.append((cur[0] + t * (nxt[0] - cur[0]), cur[1] + t * (nxt[1] - cur[1])))
    return _dedupe(out)


def _dedupe(polygon: list[Point]) -> list[Point]:
    out: list[Point] = []
    for p in polygon:
        if out and math.isclose(p[0], out[-1][0], abs_tol=_EPS) and math.isclose(p[1], out[-1][1], abs_tol=_EPS):
            continue
        out.append(p)
    while len(out) > 1 and math.isclose(out[0][0], out[-1][0], abs_tol=_EPS) and math.isclose(
        out[0][1], out[-1][1], abs_tol=_EPS
    ):
        out.pop()
    return out


class HalfPlanePartitioner:
    def partition(self, points: Sequence[Point], clip: ClipBox) -> tuple[VoronoiCell, ...]:
        if len(points) < 1:
            return ()
        x0, y0, x1, y1 = (float(v) for v in clip)
        if x1 < x0 or y1 < y0:
            raise ValueError("clip box must be (xmin, ymin, xmax, ymax)")
        sites = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        rect: list[Point] = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]

        owner: dict[Point, int] = {}
        cells: list[VoronoiCell] = []
        for i, (sx, sy) in enumerate(sites.tolist()):
            site = (sx, sy)
            if site in owner:
                LOGGER.debug("site %d duplicates site %d at %s", i, owner[site], site)
                cells.append(VoronoiCell(index=i, site=site, polygon=(site,)))
                continue
            owner[site] = i
            cells.append(VoronoiCell(index=i, site=site, polygon=tuple(self._cell(i, sites, rect))))
        return tuple(cells)

    def _cell(self, i: int, sites: np.ndarray, rect: list[Point]) -> list[Point]:
        site = sites[i]
        d2 = np.sum((sites - site) ** 2, axis=1)
        order = np.argsort(d2, kind="stable")
        polygon = list(rect)
        sx, sy = float(site[0]), float(site[1])
        for j in order.tolist():
            if j == i or d2[j] == 0.0:
                continue
            radius2 = max((px - sx) ** 2 + (py - sy) ** 2 for px, py in polygon)
            if d2[j] > 4.0 * radius2:
                break
            ox, oy = float(sites[j][0]), float(sites[j][1])
            nx = ox - sx
            ny = oy - sy
            c = 0.5 * ((ox * ox + oy * oy) - (sx * sx + sy * sy))
            polygon = _clip_half_plane(polygon, nx, ny, c)
            if len(polygon) < 3:
                return []
        return polygon


def partition_points(
    points: Sequence[Point],
    clip: ClipBox,
    partitioner: PointPartitioner | None = None,
) -> tuple[VoronoiCell, ...]:
    return (partitioner or HalfPlanePartitioner()).partition(points, clip)


class PointLocator:
    """Nearest-site lookup for pointer positions, built once per point set."""

    def __init__(self, points: Sequence[Point], clip: ClipBox) -> None:
        self.clip = tuple(float(v) for v in clip)
        self._sites = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        self._tree = cKDTree(self._sites) if len(self._sites) else None

    def locate(self, x: float, y: float) -> int | None:
        """Index of the site owning ``(x, y)``; lowest index wins ties."""
        if self._tree is None:
            return None
        x0, y0, x1, y1 = self.clip
        if not (x0 <= x <= x1 and y0 <= y <= y1):
            return None
        dist, _ = self._tree.query((x, y))
        candidates = np.asarray(self._tree.query_ball_point((x, y), r=dist * (1.0 + 1e-9) + _EPS), dtype=np.intp)
        d2 = (self._sites[candidates, 0] - x) ** 2 + (self._sites[candidates, 1] - y) ** 2
        nearest = candidates[d2 == d2.min()]
        return int(nearest.min())


def locate(points: Sequence[Point], x: float, y: float, clip: ClipBox) -> int | None:
    return PointLocator(points, clip).locate(x, y)


def polygon_path(polygon: Sequence[Point]) -> str:
    return polyline_path(polygon, closed=True)
