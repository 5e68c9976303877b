"""Minimal SVG path-data builder.

Coordinates are written with at most six decimals and without trailing zeros,
so identical geometry always serialises to identical strings.
"""

from __future__ import annotations

from typing import Iterable


def format_coord(value: float) -> str:
    out = f"{float(value):.6f}".rstrip("0").rstrip(".")
    if out in ("-0", ""):
        return "0"
    return out


class PathBuilder:
    def __init__(self) -> None:
        self._parts: list[str] = []

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._parts.append(f"M{format_coord(x)},{format_coord(y)}")
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self._parts.append(f"L{format_coord(x)},{format_coord(y)}")
        return self

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> "PathBuilder":
        coords = ",".join(format_coord(v) for v in (x1, y1, x2, y2, x, y))
        self._parts.append(f"C{coords}")
        return self

    def close(self) -> "PathBuilder":
        self._parts.append("Z")
        return self

    def __str__(self) -> str:
        return "".join(self._parts)


def polyline_path(points: Iterable[tuple[float, float]], *, closed: bool = False) -> str:
    builder = PathBuilder()
    for i, (x, y) in enumerate(points):
        if i == 0:
            builder.move_to(x, y)
        else:
            builder.line_to(x, y)
    path = str(builder)
    if closed and path:
        path += "Z"
    return path
