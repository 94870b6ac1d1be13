"""
Tests for geometry helpers.

Covers bounding boxes, resize-handle placement, segment intersection
and hit testing.
"""

import unittest

from vecsketch.core.shapes import Point, Bounds, Rectangle, Ellipse, Line, Polygon
from vecsketch.core.geometry import (
    bounds_of, points_bounds, handle_size, handle_position, handle_cursor,
    build_handles, reposition_handles, segments_intersect,
    new_edge_intersects, point_in_polygon, distance_to_segment, hit_test,
    NW, N, NE, E, SE, S, SW, W
)
from vecsketch.core.transform import translate


class TestBounds(unittest.TestCase):
    """Test bounds_of for every shape kind."""

    def test_rectangle_bounds(self):
        """Rectangles report their own box."""
        rect = Rectangle(x=10, y=20, width=30, height=40)
        self.assertEqual(bounds_of(rect), Bounds(10, 20, 30, 40))

    def test_ellipse_bounds(self):
        """Test ellipses report their enclosing box."""
        ellipse = Ellipse(x=-5, y=3, width=12, height=8)
        self.assertEqual(bounds_of(ellipse), Bounds(-5, 3, 12, 8))

    def test_line_bounds_any_direction(self):
        """Line bounds are the same whichever way the line was drawn."""
        forward = Line(x1=10, y1=50, x2=40, y2=20)
        backward = Line(x1=40, y1=20, x2=10, y2=50)
        self.assertEqual(bounds_of(forward), Bounds(10, 20, 30, 30))
        self.assertEqual(bounds_of(backward), Bounds(10, 20, 30, 30))

    def test_polygon_bounds(self):
        """Test polygon bounds span all vertices."""
        polygon = Polygon(points=[Point(5, 5), Point(25, 0), Point(15, 30), Point(5, 5)])
        self.assertEqual(bounds_of(polygon), Bounds(5, 0, 20, 30))

    def test_empty_polygon_gives_zero_rect(self):
        """Test an empty vertex list yields a zero rect."""
        self.assertEqual(bounds_of(Polygon()), Bounds(0, 0, 0, 0))
        self.assertEqual(points_bounds([]), Bounds(0, 0, 0, 0))

    def test_translation_equivariance(self):
        """Moving any shape by (dx, dy) moves its bounds by exactly (dx, dy)."""
        shapes = [
            Rectangle(x=10, y=10, width=50, height=40),
            Ellipse(x=0, y=0, width=20, height=10),
            Line(x1=30, y1=5, x2=0, y2=25),
            Polygon(points=[Point(0, 0), Point(40, 10), Point(10, 30), Point(0, 0)]),
        ]
        for shape in shapes:
            for dx, dy in [(20, -5), (-7.5, 12.25), (0, 0)]:
                before = bounds_of(shape)
                translate(shape, dx, dy)
                after = bounds_of(shape)
                self.assertAlmostEqual(after.left, before.left + dx)
                self.assertAlmostEqual(after.top, before.top + dy)
                self.assertAlmostEqual(after.width, before.width)
                self.assertAlmostEqual(after.height, before.height)


class TestHandles(unittest.TestCase):
    """Test resize handle size and placement."""

    def test_handle_size_scales_with_shape(self):
        """Test handles are a tenth of the shorter side."""
        self.assertEqual(handle_size(100, 100), 10)
        self.assertEqual(handle_size(80, 200), 8)

    def test_handle_size_is_clamped(self):
        """Handles stay between 6 and 12 units."""
        self.assertEqual(handle_size(20, 300), 6)
        self.assertEqual(handle_size(0, 0), 6)
        self.assertEqual(handle_size(500, 400), 12)

    def test_handle_positions_are_centered_on_compass_points(self):
        """Test each handle is centered on its compass point."""
        bounds = Bounds(10, 20, 100, 50)
        expected = {
            NW: (5, 15), N: (55, 15), NE: (105, 15), E: (105, 40),
            SE: (105, 65), S: (55, 65), SW: (5, 65), W: (5, 40),
        }
        for index, (x, y) in expected.items():
            pos = handle_position(bounds, index, 10)
            self.assertEqual((pos.x, pos.y), (x, y), f"handle {index}")

    def test_invalid_handle_index(self):
        """Test handle indices outside 0..7 are rejected."""
        with self.assertRaises(ValueError):
            handle_position(Bounds(0, 0, 10, 10), 8, 6)
        with self.assertRaises(ValueError):
            handle_cursor(-1)

    def test_cursor_hints(self):
        """Test the cursor hint of each handle direction."""
        self.assertEqual(handle_cursor(NW), "size_nwse")
        self.assertEqual(handle_cursor(SE), "size_nwse")
        self.assertEqual(handle_cursor(N), "size_ns")
        self.assertEqual(handle_cursor(NE), "size_nesw")
        self.assertEqual(handle_cursor(W), "size_we")

    def test_build_handles(self):
        """Test eight handles are built around the bounds."""
        handles = build_handles(Bounds(0, 0, 100, 100))
        self.assertEqual([h.index for h in handles], list(range(8)))
        self.assertTrue(all(h.size == 10 for h in handles))
        self.assertTrue(handles[SE].contains(Point(100, 100)))
        self.assertFalse(handles[SE].contains(Point(50, 50)))

    def test_reposition_keeps_handle_objects(self):
        """Repositioning moves the existing handles instead of making new ones."""
        handles = build_handles(Bounds(0, 0, 100, 100))
        originals = list(handles)
        reposition_handles(handles, Bounds(50, 50, 200, 200))
        self.assertEqual([id(h) for h in handles], [id(h) for h in originals])
        self.assertEqual((handles[NW].x, handles[NW].y), (44, 44))
        self.assertEqual(handles[NW].size, 12)


class TestSegmentIntersection(unittest.TestCase):
    """Test the parametric segment intersection."""

    def test_crossing_segments(self):
        """Test two crossing diagonals intersect."""
        self.assertTrue(segments_intersect(
            Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0)))

    def test_crossing_with_reversed_direction(self):
        """Test the crossing is found whatever the segment direction."""
        self.assertTrue(segments_intersect(
            Point(0, 0), Point(100, 0), Point(100, 100), Point(50, -50)))

    def test_touching_at_endpoint(self):
        """Test segments sharing an endpoint intersect."""
        self.assertTrue(segments_intersect(
            Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10)))

    def test_disjoint_segments(self):
        """Test segments that would only cross when extended."""
        self.assertFalse(segments_intersect(
            Point(0, 0), Point(1, 0), Point(5, -1), Point(5, 1)))

    def test_parallel_segments(self):
        """Test parallel segments never intersect."""
        self.assertFalse(segments_intersect(
            Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5)))

    def test_collinear_overlap_is_not_an_intersection(self):
        """Test overlapping collinear segments count as non-intersecting."""
        self.assertFalse(segments_intersect(
            Point(0, 0), Point(10, 0), Point(5, 0), Point(15, 0)))

    def test_new_edge_crossing_first_edge(self):
        """Test the closing check against the first edge of an L shape."""
        points = [Point(0, 0), Point(100, 0), Point(100, 100)]
        self.assertTrue(new_edge_intersects(points, Point(50, -50)))
        self.assertFalse(new_edge_intersects(points, Point(0, 100)))

    def test_new_edge_needs_two_points(self):
        """Test there is nothing to cross with fewer than two earlier edges."""
        self.assertFalse(new_edge_intersects([Point(0, 0)], Point(10, 10)))
        self.assertFalse(new_edge_intersects([Point(0, 0), Point(10, 0)], Point(5, 0)))


class TestHitTest(unittest.TestCase):
    """Test point picking for every shape kind."""

    def test_point_in_polygon(self):
        """Test ray casting inside and outside a square."""
        square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        self.assertTrue(point_in_polygon(Point(5, 5), square))
        self.assertFalse(point_in_polygon(Point(15, 5), square))

    def test_distance_to_segment(self):
        """Test distances to the interior, an endpoint and a degenerate segment."""
        self.assertAlmostEqual(distance_to_segment(Point(5, 3), Point(0, 0), Point(10, 0)), 3)
        self.assertAlmostEqual(distance_to_segment(Point(13, 4), Point(0, 0), Point(10, 0)), 5)
        self.assertAlmostEqual(distance_to_segment(Point(3, 4), Point(0, 0), Point(0, 0)), 5)

    def test_rectangle_hit(self):
        """Test rectangle picking with tolerance."""
        rect = Rectangle(x=10, y=10, width=50, height=40)
        self.assertTrue(hit_test(rect, Point(30, 30)))
        self.assertTrue(hit_test(rect, Point(8, 30)))  # within tolerance
        self.assertFalse(hit_test(rect, Point(100, 100)))

    def test_ellipse_hit(self):
        """Test the corners of an ellipse's box are not part of it."""
        ellipse = Ellipse(x=0, y=0, width=100, height=50)
        self.assertTrue(hit_test(ellipse, Point(50, 25)))
        self.assertFalse(hit_test(ellipse, Point(2, 2), tolerance=0))

    def test_line_hit(self):
        """Test lines are picked within the tolerance only."""
        line = Line(x1=0, y1=0, x2=100, y2=0)
        self.assertTrue(hit_test(line, Point(50, 3)))
        self.assertFalse(hit_test(line, Point(50, 10)))

    def test_polygon_hit(self):
        """Test polygon picking inside and near an edge."""
        polygon = Polygon(points=[Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 0)])
        self.assertTrue(hit_test(polygon, Point(90, 10)))
        self.assertTrue(hit_test(polygon, Point(50, 52)))  # near the diagonal edge
        self.assertFalse(hit_test(polygon, Point(10, 90)))


if __name__ == '__main__':
    unittest.main()
