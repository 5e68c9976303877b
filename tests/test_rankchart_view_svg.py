from __future__ import annotations

import datetime as dt
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

from rankchart import RankChartView, build_rank_chart, config_from_mapping, render_svg, theme_from_mapping, write_svg
from rankchart.errors import MalformedObservationError

SVG_NS = "{http://www.w3.org/2000/svg}"


def _rows() -> list[tuple[str, int]]:
    return [("2014-10-28", 9), ("2014-11-15", 3), ("2014-11-16", 2), ("2014-11-17", 5)]


class RankChartViewTests(unittest.TestCase):
    def test_layout_is_rebuilt_only_when_inputs_change(self) -> None:
        view = RankChartView()
        view.set_data(_rows())
        view.resize(300, 200)
        first = view.layout()
        self.assertIs(view.layout(), first)
        self.assertEqual(view.builds, 1)
        self.assertFalse(view.dirty)

        view.resize(300, 200)
        self.assertIs(view.layout(), first)

        view.resize(600, 200)
        self.assertTrue(view.dirty)
        resized = view.layout()
        self.assertEqual(resized.plot_size, (535, 140))
        self.assertEqual(view.builds, 2)

        view.set_data(_rows()[1:])
        self.assertEqual(len(view.layout().observations), 3)
        self.assertEqual(view.builds, 3)

    def test_observations_can_be_passed_to_the_constructor(self) -> None:
        view = RankChartView(_rows(), width=300, height=200)
        self.assertEqual(len(view.observations), 4)
        self.assertEqual(len(view.layout().regions), 4)

        keyed = RankChartView(observations=_rows()[1:], config=config_from_mapping({"y_tick_count": 3}))
        keyed.resize(300, 200)
        self.assertEqual(keyed.layout().plot_size, (235, 140))
        self.assertEqual(keyed.observations[0].day, dt.date(2014, 11, 15))

    def test_constructor_rejects_malformed_rows(self) -> None:
        with self.assertRaises(MalformedObservationError):
            RankChartView([("2014-11-15", 0)])

    def test_setting_equal_data_keeps_cached_layout(self) -> None:
        view = RankChartView(_rows(), width=300, height=200)
        first = view.layout()
        view.set_data(list(_rows()))
        self.assertFalse(view.dirty)
        self.assertIs(view.layout(), first)
        self.assertEqual(view.builds, 1)

    def test_view_without_size_is_an_empty_frame(self) -> None:
        view = RankChartView()
        view.set_data(_rows())
        with self.assertLogs("rankchart.layout", level="WARNING"):
            layout = view.layout()
        self.assertTrue(layout.is_empty)


class RenderSvgTests(unittest.TestCase):
    def test_groups_are_emitted_in_layer_order(self) -> None:
        layout = build_rank_chart(_rows(), (300, 200))
        root = ET.fromstring(render_svg(layout))
        self.assertEqual((root.get("width"), root.get("height")), ("300", "200"))
        body = root.find(f"{SVG_NS}g")
        self.assertEqual(body.get("transform"), "translate(45, 20)")
        classes = [child.get("class") for child in body]
        self.assertEqual(classes, ["month-bg", "grid h-grid", "axis axis-x", "axis axis-y", "line", "voronoi"])

    def test_month_fills_alternate_and_regions_are_indexed(self) -> None:
        layout = build_rank_chart(_rows(), (300, 200))
        root = ET.fromstring(render_svg(layout))
        body = root.find(f"{SVG_NS}g")
        bands = body.find(f"{SVG_NS}g[@class='month-bg']")
        self.assertEqual([p.get("fill") for p in bands], ["#f2f4f7", "#fcfdff"])
        regions = body.find(f"{SVG_NS}g[@class='voronoi']")
        self.assertEqual([p.get("data-index") for p in regions], ["0", "1", "2", "3"])
        self.assertEqual(regions[1].get("data-day"), dt.date(2014, 11, 15).isoformat())
        line = body.find(f"{SVG_NS}path[@class='line']")
        self.assertEqual(line.get("d"), layout.curve)
        x_labels = [t.text for t in body.find(f"{SVG_NS}g[@class='axis axis-x']")]
        self.assertEqual(x_labels, ["Nov 17", "Nov 10", "Nov 03"])

    def test_empty_layout_is_bare_svg(self) -> None:
        root = ET.fromstring(render_svg(build_rank_chart([], (120, 80))))
        self.assertEqual(list(root), [])
        self.assertEqual(root.get("width"), "120")

    def test_write_svg_creates_parent_dirs(self) -> None:
        layout = build_rank_chart(_rows(), (300, 200))
        with tempfile.TemporaryDirectory() as tmp:
            out = write_svg(layout, Path(tmp) / "nested" / "chart.svg")
            self.assertTrue(out.exists())
            self.assertIn("voronoi", out.read_text(encoding="utf-8"))

    def test_theme_overrides_are_validated(self) -> None:
        theme = theme_from_mapping({"line_color": "#000000", "show_region_outlines": True})
        layout = build_rank_chart(_rows(), (300, 200))
        root = ET.fromstring(render_svg(layout, theme))
        body = root.find(f"{SVG_NS}g")
        self.assertEqual(body.find(f"{SVG_NS}path[@class='line']").get("stroke"), "#000000")
        self.assertEqual(body.find(f"{SVG_NS}g[@class='voronoi']").get("stroke"), "#ff0000")
        with self.assertRaises(ValueError):
            theme_from_mapping({"line_colour": "#000000"})
        with self.assertRaises(ValueError):
            theme_from_mapping({"grid_color": "grey"})
        with self.assertRaises(ValueError):
            theme_from_mapping({"font_size_px": 0})


if __name__ == "__main__":
    unittest.main()
