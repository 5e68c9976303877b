from __future__ import annotations

import datetime as dt
import re
import unittest

from rankchart.curve import monotone_x_path, rank_curve
from rankchart.models import RankObservation
from rankchart.scales import build_rank_scale, build_time_scale


def _numbers(path: str) -> list[float]:
    return [float(v) for v in re.findall(r"-?\d+(?:\.\d+)?", path)]


class MonotoneCurveTests(unittest.TestCase):
    def test_empty_and_single_point(self) -> None:
        self.assertEqual(monotone_x_path([]), "")
        self.assertEqual(monotone_x_path([(117.5, 35.0)]), "M117.5,35Z")

    def test_two_points_draw_a_straight_segment(self) -> None:
        self.assertEqual(monotone_x_path([(0, 10), (50, 20)]), "M0,10L50,20")

    def test_three_points_match_reference_path(self) -> None:
        path = monotone_x_path([(0.0, 26.25), (117.5, 17.5), (235.0, 43.75)])
        self.assertEqual(
            path,
            "M0,26.25C39.166667,21.875,78.333333,17.5,117.5,17.5"
            "C156.666667,17.5,195.833333,30.625,235,43.75",
        )

    def test_control_points_do_not_overshoot_neighbours(self) -> None:
        points = [(0, 5), (10, 1), (20, 1), (30, 8), (40, 7), (50, 7), (60, 2)]
        path = monotone_x_path(points)
        segments = path.split("C")[1:]
        self.assertEqual(len(segments), len(points) - 1)
        for (x0, y0), (x1, y1), segment in zip(points, points[1:], segments):
            c1y, c2y = _numbers(segment)[1], _numbers(segment)[3]
            lo, hi = min(y0, y1), max(y0, y1)
            self.assertGreaterEqual(c1y, lo - 1e-9)
            self.assertLessEqual(c1y, hi + 1e-9)
            self.assertGreaterEqual(c2y, lo - 1e-9)
            self.assertLessEqual(c2y, hi + 1e-9)

    def test_coincident_points_are_skipped(self) -> None:
        self.assertEqual(monotone_x_path([(0, 1), (0, 1), (5, 2)]), "M0,1L5,2")

    def test_repeated_x_does_not_fail(self) -> None:
        path = monotone_x_path([(0, 1), (0, 4), (10, 2), (20, 3)])
        self.assertTrue(path.startswith("M0,1C"))
        self.assertNotIn("nan", path)
        self.assertNotIn("inf", path)

    def test_rank_curve_maps_observations(self) -> None:
        data = [
            RankObservation(dt.date(2014, 11, 15), 3),
            RankObservation(dt.date(2014, 11, 16), 2),
            RankObservation(dt.date(2014, 11, 17), 5),
        ]
        x = build_time_scale(data[0].day, data[-1].day, 235.0)
        y = build_rank_scale(2, 5, 140.0)
        path = rank_curve(data, x, y)
        self.assertTrue(path.startswith("M0,26.25C"))
        self.assertTrue(path.endswith(",235,43.75"))


if __name__ == "__main__":
    unittest.main()
