from __future__ import annotations

import unittest

import numpy as np

from rankchart.voronoi import HalfPlanePartitioner, PointLocator, VoronoiCell, locate, partition_points, polygon_path


RECT = (0.0, 0.0, 235.0, 140.0)
RECT_AREA = 235.0 * 140.0


class PartitionTests(unittest.TestCase):
    def _assert_tiles(self, points: list[tuple[float, float]], cells: tuple[VoronoiCell, ...]) -> None:
        self.assertEqual([c.index for c in cells], list(range(len(points))))
        self.assertAlmostEqual(sum(c.area() for c in cells), RECT_AREA, delta=RECT_AREA * 1e-9)
        for cell, point in zip(cells, points):
            self.assertTrue(cell.contains(*point), f"cell {cell.index} misses its own site")

    def test_empty_input_yields_no_cells(self) -> None:
        self.assertEqual(partition_points([], RECT), ())

    def test_single_point_owns_whole_rectangle(self) -> None:
        cells = partition_points([(117.5, 70.0)], RECT)
        self.assertEqual(len(cells), 1)
        self.assertEqual(cells[0].polygon, ((0.0, 0.0), (235.0, 0.0), (235.0, 140.0), (0.0, 140.0)))
        self.assertEqual(polygon_path(cells[0].polygon), "M0,0L235,0L235,140L0,140Z")

    def test_three_points_tile_rectangle(self) -> None:
        points = [(0.0, 26.25), (117.5, 17.5), (235.0, 43.75)]
        cells = partition_points(points, RECT)
        self._assert_tiles(points, cells)
        self.assertTrue(all(c.area() > 0 for c in cells))

    def test_collinear_points_split_into_strips(self) -> None:
        points = [(10.0, 50.0), (50.0, 50.0), (90.0, 50.0)]
        cells = partition_points(points, (0.0, 0.0, 100.0, 100.0))
        self.assertAlmostEqual(cells[0].area(), 3000.0)
        self.assertAlmostEqual(cells[1].area(), 4000.0)
        self.assertAlmostEqual(cells[2].area(), 3000.0)

    def test_duplicate_points_give_zero_area_cell_to_later_site(self) -> None:
        points = [(20.0, 20.0), (80.0, 100.0), (20.0, 20.0)]
        cells = partition_points(points, RECT)
        self.assertEqual(cells[2].polygon, ((20.0, 20.0),))
        self.assertEqual(cells[2].area(), 0.0)
        self.assertTrue(cells[2].contains(20.0, 20.0))
        self.assertAlmostEqual(cells[0].area() + cells[1].area(), RECT_AREA, delta=1e-6)
        self.assertEqual(locate(points, 20.0, 20.0, RECT), 0)

    def test_dense_random_points_tile_and_agree_with_locate(self) -> None:
        rng = np.random.default_rng(7)
        raw = rng.uniform((0.0, 0.0), (235.0, 140.0), size=(200, 2))
        points = [(float(x), float(y)) for x, y in raw]
        cells = HalfPlanePartitioner().partition(points, RECT)
        self._assert_tiles(points, cells)

        samples = rng.uniform((0.0, 0.0), (235.0, 140.0), size=(300, 2))
        for px, py in samples:
            owner = locate(points, float(px), float(py), RECT)
            self.assertIsNotNone(owner)
            self.assertTrue(cells[owner].contains(float(px), float(py)))

    def test_near_duplicate_sites_still_tile(self) -> None:
        points = [(10.0, 10.0), (10.0 + 1e-11, 10.0), (200.0, 100.0)]
        cells = partition_points(points, RECT)
        self.assertEqual(len(cells), 3)
        self.assertAlmostEqual(sum(c.area() for c in cells), RECT_AREA, delta=1e-6)
        for cell, point in zip(cells, points):
            self.assertTrue(cell.contains(*point))

        locator = PointLocator(points, RECT)
        for px, py in [(5.0, 5.0), (10.0, 10.0), (150.0, 20.0), (230.0, 135.0)]:
            owner = locator.locate(px, py)
            self.assertIsNotNone(owner)
            self.assertTrue(cells[owner].contains(px, py))

    def test_locator_breaks_ties_by_lowest_index(self) -> None:
        points = [(30.0, 10.0), (10.0, 10.0), (20.0, 30.0)]
        locator = PointLocator(points, RECT)
        self.assertEqual(locator.locate(20.0, 10.0), 0)
        self.assertEqual(locator.locate(11.0, 10.0), 1)
        self.assertIsNone(PointLocator([], RECT).locate(1.0, 1.0))

    def test_partition_is_deterministic(self) -> None:
        points = [(5.0, 5.0), (100.0, 30.0), (200.0, 130.0), (60.0, 90.0)]
        self.assertEqual(partition_points(points, RECT), partition_points(points, RECT))

    def test_locate_outside_clip_returns_none(self) -> None:
        points = [(5.0, 5.0)]
        self.assertIsNone(locate(points, -1.0, 5.0, RECT))
        self.assertIsNone(locate(points, 5.0, 141.0, RECT))
        self.assertIsNone(locate([], 5.0, 5.0, RECT))

    def test_invalid_clip_box_raises(self) -> None:
        with self.assertRaises(ValueError):
            partition_points([(1.0, 1.0)], (10.0, 0.0, 0.0, 10.0))


if __name__ == "__main__":
    unittest.main()
