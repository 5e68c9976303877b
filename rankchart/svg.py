from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from rankchart.layout import RankChartLayout
from rankchart.path import format_coord
from rankchart.ticks import AxisDescription

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS: tuple[str, ...] = (
    "line_color",
    "axis_color",
    "grid_color",
    "month_fill_even",
    "month_fill_odd",
    "region_stroke",
)


@dataclass(frozen=True)
class RankChartTheme:
    line_color: str = "#1c9099"
    line_width: float = 2.0
    axis_color: str = "#676767"
    grid_color: str = "#e1e1e1"
    month_fill_even: str = "#fcfdff"
    month_fill_odd: str = "#f2f4f7"
    region_stroke: str = "#ff0000"
    show_region_outlines: bool = False
    font_family: str = "system-ui"
    font_size_px: float = 10.0


DEFAULT_THEME = RankChartTheme()


def theme_from_mapping(overrides: Mapping[str, Any] | None = None) -> RankChartTheme:
    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    for key in ("line_width", "font_size_px"):
        if not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
    if not isinstance(raw["show_region_outlines"], bool):
        raise ValueError("Token `show_region_outlines` must be a bool")
    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")
    return RankChartTheme(**raw)


def render_svg(layout: RankChartLayout, theme: RankChartTheme | None = None) -> str:
    """Serialise a layout to standalone SVG markup.

    Layers are emitted in ``layout.layers()`` order so the transparent
    voronoi regions end up on top and receive pointer events first.
    """
    th = theme or DEFAULT_THEME
    vp = layout.viewport
    root = ET.Element(
        "svg",
        {
            "xmlns": "http://www.w3.org/2000/svg",
            "width": format_coord(vp.width),
            "height": format_coord(vp.height),
        },
    )
    if layout.is_empty:
        return ET.tostring(root, encoding="unicode")

    body = ET.SubElement(
        root,
        "g",
        {"transform": f"translate({format_coord(vp.margin.left)}, {format_coord(vp.margin.top)})"},
    )
    for name, content in layout.layers():
        if name == "month-bg":
            group = ET.SubElement(body, "g", {"class": "month-bg", "stroke": "none"})
            for band in content:
                fill = th.month_fill_even if band.parity else th.month_fill_odd
                ET.SubElement(group, "path", {"d": band.path, "fill": fill})
        elif name == "h-grid":
            group = ET.SubElement(body, "g", {"class": "grid h-grid", "stroke": th.grid_color})
            for line in content:
                ET.SubElement(
                    group,
                    "line",
                    {
                        "x1": format_coord(line.x1),
                        "x2": format_coord(line.x2),
                        "y1": format_coord(line.y),
                        "y2": format_coord(line.y),
                    },
                )
        elif name in ("axis-x", "axis-y"):
            _render_axis(body, name, content, th)
        elif name == "line":
            ET.SubElement(
                body,
                "path",
                {
                    "class": "line",
                    "d": content,
                    "fill": "none",
                    "stroke": th.line_color,
                    "stroke-width": format_coord(th.line_width),
                },
            )
        elif name == "voronoi":
            attrs = {"class": "voronoi", "fill": "transparent", "pointer-events": "all"}
            attrs["stroke"] = th.region_stroke if th.show_region_outlines else "none"
            group = ET.SubElement(body, "g", attrs)
            for region in content:
                ET.SubElement(
                    group,
                    "path",
                    {
                        "d": region.path,
                        "data-index": str(region.index),
                        "data-day": region.observation.day.isoformat(),
                        "data-rank": str(region.observation.rank),
                    },
                )
    return ET.tostring(root, encoding="unicode")


def write_svg(layout: RankChartLayout, path: str | Path, theme: RankChartTheme | None = None) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_svg(layout, theme), encoding="utf-8")
    return out


def _render_axis(parent: ET.Element, name: str, axis: AxisDescription, th: RankChartTheme) -> None:
    tx, ty = axis.translate
    group = ET.SubElement(
        parent,
        "g",
        {
            "class": f"axis {name}",
            "transform": f"translate({format_coord(tx)}, {format_coord(ty)})",
            "fill": th.axis_color,
            "font-family": th.font_family,
            "font-size": format_coord(th.font_size_px),
        },
    )
    gap = axis.tick_size + axis.tick_padding
    for tick in axis.ticks:
        if axis.orientation == "bottom":
            attrs = {
                "x": format_coord(tick.offset),
                "y": format_coord(gap),
                "dy": "0.71em",
                "text-anchor": "middle",
            }
        else:
            attrs = {
                "x": format_coord(-gap),
                "y": format_coord(tick.offset),
                "dy": "0.32em",
                "text-anchor": "end",
            }
        text = ET.SubElement(group, "text", {"class": "tick", **attrs})
        text.text = tick.label
