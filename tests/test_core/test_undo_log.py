"""
Tests for the bounded undo log and action inverses.
"""

import unittest

from vecsketch.core.shapes import Point, Rectangle, Polygon
from vecsketch.core.scene import Scene
from vecsketch.core.history import Action, ActionType, UndoLog, apply_inverse
from vecsketch.core.transform import snapshot, translate


class TestUndoLogCapacity(unittest.TestCase):
    """Test capacity handling and ordering."""

    def test_default_capacity(self):
        """Test the default undo capacity."""
        self.assertEqual(UndoLog().capacity, 10)

    def test_invalid_capacity(self):
        """Test a capacity below one is rejected."""
        with self.assertRaises(ValueError):
            UndoLog(0)

    def test_oldest_entries_are_evicted(self):
        """Recording 15 actions keeps the newest 10, oldest first."""
        log = UndoLog(10)
        shapes = [Rectangle() for _ in range(15)]
        for shape in shapes:
            log.record(Action(ActionType.CREATE, shape))
        self.assertEqual(len(log), 10)
        self.assertEqual([a.target for a in log.actions], shapes[5:])
        self.assertIs(log.peek().target, shapes[-1])

    def test_empty_undo(self):
        """Test undo on an empty log."""
        log = UndoLog()
        self.assertFalse(log)
        self.assertFalse(log.undo(Scene()))

    def test_undo_is_lifo(self):
        """Test undo takes the newest action first."""
        scene = Scene()
        log = UndoLog()
        first, second = Rectangle(), Rectangle()
        for shape in (first, second):
            scene.add(shape)
            log.record(Action(ActionType.CREATE, shape))

        self.assertTrue(log.undo(scene))
        self.assertEqual(scene.shapes, [first])
        self.assertTrue(log.undo(scene))
        self.assertEqual(scene.shapes, [])
        self.assertFalse(log.undo(scene))

    def test_undo_to_empty_after_overflow(self):
        """Test evicted actions can no longer be undone."""
        scene = Scene()
        log = UndoLog(3)
        shapes = [Rectangle() for _ in range(5)]
        for shape in shapes:
            scene.add(shape)
            log.record(Action(ActionType.CREATE, shape))
        while log.undo(scene):
            pass
        self.assertEqual(scene.shapes, shapes[:2])


class TestActionInverses(unittest.TestCase):
    """Test the inverse of each action kind."""

    def setUp(self):
        self.scene = Scene()
        self.rect = Rectangle(x=10, y=10, width=50, height=40)
        self.scene.add(self.rect)

    def test_undo_create_removes_and_deselects(self):
        """Test undoing a create removes the shape and its selection."""
        self.scene.select(self.rect)
        apply_inverse(Action(ActionType.CREATE, self.rect), self.scene)
        self.assertFalse(self.scene.contains(self.rect))
        self.assertIsNone(self.scene.selected)

    def test_undo_delete_restores_z_order(self):
        """Test undoing a delete puts the shape back at its old position."""
        top = Rectangle(x=0, y=0, width=5, height=5)
        self.scene.add(top)
        action = self.scene.delete(self.rect)
        self.assertTrue(apply_inverse(action, self.scene))
        self.assertEqual(self.scene.shapes, [self.rect, top])
        self.assertIs(self.scene.selected, self.rect)

    def test_undo_delete_restores_geometry(self):
        """Test undoing a delete restores the captured geometry."""
        polygon = Polygon(points=[Point(0, 0), Point(10, 0), Point(5, 5), Point(0, 0)])
        self.scene.add(polygon)
        action = self.scene.delete(polygon)
        translate(polygon, 100, 100)
        apply_inverse(action, self.scene)
        self.assertEqual(polygon.points[1], Point(10, 0))

    def test_undo_delete_of_present_shape_is_abandoned(self):
        """Test a delete is not undone while the shape is still present."""
        action = Action(ActionType.DELETE, self.rect, full_state=snapshot(self.rect), index=0)
        self.assertFalse(apply_inverse(action, self.scene))
        self.assertEqual(self.scene.shapes, [self.rect])

    def test_undo_move(self):
        """Test undoing a move restores the old position."""
        old = snapshot(self.rect)
        translate(self.rect, 20, -5)
        action = Action(ActionType.MOVE, self.rect, old, snapshot(self.rect))
        apply_inverse(action, self.scene)
        self.assertEqual((self.rect.x, self.rect.y), (10, 10))

    def test_undo_scale_refreshes_handles(self):
        """Test undoing a scale moves the handles back."""
        self.scene.select(self.rect)
        old = snapshot(self.rect)
        self.rect.width = 200
        action = Action(ActionType.SCALE, self.rect, old, snapshot(self.rect))
        apply_inverse(action, self.scene)
        self.assertEqual(self.rect.width, 50)
        self.assertIs(self.scene.selected, self.rect)
        self.assertEqual(self.scene.handle_at(Point(60, 50)), 4)

    def test_undo_color_changes(self):
        """Test undoing fill and stroke changes."""
        self.rect.fill_color = "#FF0000"
        apply_inverse(Action(ActionType.MODIFY_FILL, self.rect, "#D3D3D3", "#FF0000"), self.scene)
        self.assertEqual(self.rect.fill_color, "#D3D3D3")

        self.rect.stroke_color = "#0000FF"
        apply_inverse(Action(ActionType.MODIFY_STROKE, self.rect, "#D3D3D3", "#0000FF"), self.scene)
        self.assertEqual(self.rect.stroke_color, "#D3D3D3")

    def test_missing_target_is_abandoned(self):
        """Undo of an action whose shape is gone leaves the scene untouched."""
        self.scene.remove(self.rect)
        old = snapshot(self.rect)
        translate(self.rect, 5, 5)
        action = Action(ActionType.MOVE, self.rect, old, snapshot(self.rect))
        self.assertFalse(apply_inverse(action, self.scene))
        self.assertEqual(self.rect.x, 15)
        self.assertEqual(len(self.scene), 0)

    def test_log_drops_abandoned_action(self):
        """Test an abandoned undo still consumes the action."""
        log = UndoLog()
        log.record(Action(ActionType.CREATE, Rectangle()))
        self.assertTrue(log.undo(self.scene))
        self.assertEqual(len(log), 0)
        self.assertEqual(self.scene.shapes, [self.rect])


if __name__ == '__main__':
    unittest.main()
