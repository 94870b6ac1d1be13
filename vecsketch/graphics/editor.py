"""
Shape Editor for VecSketch

The manipulation engine: a pointer-driven state machine that creates,
selects, moves and scales shapes, builds polygons vertex by vertex,
changes colors, deletes and undoes.

Pointer events arrive one at a time from the canvas. Every completed
gesture (pointer-up after a drag, a color change, a delete) is recorded
in the undo log.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..core.shapes import (
    Shape, ShapeKind, ShapePosition, Point, Bounds,
    Rectangle, Ellipse, Line, Polygon, create_shape, normalize_color
)
from ..core.geometry import ResizeHandle, bounds_of, new_edge_intersects
from ..core.transform import snapshot, restore, translate, scaled_bounds, apply_bounds
from ..core.history import Action, ActionType, UndoLog
from ..core.scene import Scene
from ..core.settings import EditorSettings
from ..io.svg_export import export_svg

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    """What a pointer-down on the canvas does."""
    CREATING = "creating"
    EDITING = "editing"


class GestureState(Enum):
    """Current gesture of the state machine."""
    IDLE = "idle"
    CREATING_SHAPE = "creating_shape"
    BUILDING_POLYGON = "building_polygon"
    MOVING = "moving"
    SCALING = "scaling"


# States that last exactly as long as the pointer is held down
_POINTER_GESTURES = (GestureState.CREATING_SHAPE, GestureState.MOVING, GestureState.SCALING)


class ShapeEditor(QObject):
    """
    Owns the scene, the undo log and the gesture state machine.

    The UI only calls the pointer/command methods and reads state back;
    it never edits shape geometry itself.
    """

    # Signals
    scene_changed = pyqtSignal()
    selection_changed = pyqtSignal(object)   # Selected Shape or None
    history_changed = pyqtSignal(bool)       # Undo available
    mode_changed = pyqtSignal(object)        # EditorMode
    notification = pyqtSignal(str, str)      # Message, level ("info" or "error")

    def __init__(self, scene: Optional[Scene] = None,
                 settings: Optional[EditorSettings] = None, parent=None):
        super().__init__(parent)

        self.settings = settings if settings is not None else EditorSettings()
        self.scene = scene if scene is not None else Scene()
        self.undo_log = UndoLog(self.settings.undo_capacity)

        self._mode = EditorMode.CREATING
        self._tool = ShapeKind.RECTANGLE
        self._state = GestureState.IDLE

        # Defaults for new shapes
        self._fill_color = normalize_color(self.settings.fill_color)
        self._stroke_color = normalize_color(self.settings.stroke_color)
        self._stroke_width = self.settings.stroke_width

        # Gesture data
        self._pending: Optional[Shape] = None
        self._anchor: Optional[Point] = None
        self._last_pos: Optional[Point] = None
        self._initial: Optional[ShapePosition] = None
        self._initial_bounds: Optional[Bounds] = None
        self._handle_index: Optional[int] = None
        self._polygon_points: List[Point] = []
        self._preview_point: Optional[Point] = None

    # Read-only state

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def tool(self) -> ShapeKind:
        return self._tool

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def selected_shape(self) -> Optional[Shape]:
        return self.scene.selected

    @property
    def selection_bounds(self) -> Optional[Bounds]:
        return self.scene.selection_bounds

    @property
    def handles(self) -> List[ResizeHandle]:
        return self.scene.handles

    @property
    def pending_shape(self) -> Optional[Shape]:
        """Shape being dragged out, if any."""
        return self._pending

    @property
    def polygon_points(self) -> List[Point]:
        """Vertices of the polygon under construction."""
        return [p.copy() for p in self._polygon_points]

    @property
    def preview_point(self) -> Optional[Point]:
        return self._preview_point

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_log)

    @property
    def fill_color(self) -> str:
        return self._fill_color

    @property
    def stroke_color(self) -> str:
        return self._stroke_color

    @property
    def stroke_width(self) -> float:
        return self._stroke_width

    # Mode and tool

    def set_mode(self, mode: EditorMode) -> None:
        """Switch between creating and editing."""
        if mode == self._mode:
            return
        self._discard_polygon()
        self._mode = mode
        if mode == EditorMode.CREATING:
            self._deselect()
        logger.debug(f"Mode changed to {mode.value}")
        self.mode_changed.emit(mode)

    def set_tool(self, tool: ShapeKind) -> None:
        """Select the shape kind new shapes are drawn with."""
        if not isinstance(tool, ShapeKind):
            raise ValueError(f"Unknown tool: {tool}")
        if tool == self._tool:
            return
        self._discard_polygon()
        self._tool = tool

    def set_stroke_width(self, width: float) -> None:
        """Stroke width for new shapes."""
        if width <= 0:
            raise ValueError(f"Stroke width must be positive, got {width}")
        self._stroke_width = float(width)

    # Pointer events

    def pointer_down(self, x: float, y: float, click_count: int = 1) -> None:
        """
        Handle a pointer press.

        Args:
            x, y: Canvas coordinates
            click_count: 2 for the second press of a double-click
        """
        point = Point(x, y)

        if self._state in _POINTER_GESTURES:
            # A press without a release; finish the old gesture first
            logger.debug(f"Pointer down during {self._state.value}, finishing gesture")
            self.pointer_up(x, y)

        if self._mode == EditorMode.EDITING:
            self._editing_pointer_down(point)
        elif self._tool == ShapeKind.POLYGON:
            self._polygon_pointer_down(point, click_count)
        else:
            self._start_creating(point)

    def pointer_move(self, x: float, y: float) -> None:
        """Handle pointer movement (with or without a pressed button)."""
        point = Point(x, y)

        if self._state == GestureState.BUILDING_POLYGON:
            self._preview_point = point
            self.scene_changed.emit()
            return

        if self._state not in _POINTER_GESTURES:
            return

        if self._track(point):
            self.scene_changed.emit()

    def pointer_up(self, x: float, y: float) -> None:
        """Handle pointer release: commit or discard the active gesture."""
        state = self._state
        if state not in _POINTER_GESTURES:
            return

        self._track(Point(x, y))

        if state == GestureState.CREATING_SHAPE:
            self._finish_creating()
        elif state == GestureState.MOVING:
            self._finish_moving()
        elif state == GestureState.SCALING:
            self._finish_scaling()

        self._reset_gesture()
        self.scene_changed.emit()

    # Editing mode

    def _editing_pointer_down(self, point: Point) -> None:
        selected = self.scene.selected
        handle_index = self.scene.handle_at(point)
        if selected is not None and handle_index is not None:
            self._state = GestureState.SCALING
            self._handle_index = handle_index
            self._anchor = point
            self._initial = snapshot(selected)
            self._initial_bounds = bounds_of(selected)
            logger.debug(f"Scaling {selected.kind.value} with handle {handle_index}")
            return

        shape = self.scene.shape_at(point, self.settings.hit_tolerance)
        if shape is None:
            self._deselect()
            return

        self._select(shape)
        self._state = GestureState.MOVING
        self._last_pos = point
        self._initial = snapshot(shape)

    # Drag creation

    def _start_creating(self, point: Point) -> None:
        self._deselect()
        shape = create_shape(
            self._tool, point.x, point.y,
            fill_color=self._fill_color,
            stroke_color=self._stroke_color,
            stroke_width=self._stroke_width
        )
        self.scene.add(shape)
        self._pending = shape
        self._anchor = point
        self._state = GestureState.CREATING_SHAPE
        self.scene_changed.emit()

    def _resize_pending(self, point: Point) -> None:
        shape = self._pending
        if isinstance(shape, Line):
            shape.x2 = point.x
            shape.y2 = point.y
            return

        # Dragging past the anchor flips the corner, sizes stay non-negative
        width = point.x - self._anchor.x
        height = point.y - self._anchor.y
        shape.x = point.x if width < 0 else self._anchor.x
        shape.y = point.y if height < 0 else self._anchor.y
        shape.width = abs(width)
        shape.height = abs(height)

    def _finish_creating(self) -> None:
        shape = self._pending
        if shape is None:
            return

        threshold = self.settings.min_create_extent
        keep = isinstance(shape, Line)
        if isinstance(shape, (Rectangle, Ellipse)):
            keep = shape.width > threshold or shape.height > threshold

        if not keep:
            logger.debug(f"Discarding negligible {shape.kind.value}")
            self.scene.remove(shape)
            return

        self._select(shape)
        self._record(Action(ActionType.CREATE, shape, full_state=snapshot(shape)))

    # Polygon building

    def _polygon_pointer_down(self, point: Point, click_count: int) -> None:
        if click_count >= 2:
            if self._state == GestureState.BUILDING_POLYGON:
                self._close_polygon()
            return

        if self._state != GestureState.BUILDING_POLYGON:
            self._deselect()
            self._polygon_points = [point]
            self._preview_point = None
            self._state = GestureState.BUILDING_POLYGON
        elif point == self._polygon_points[-1]:
            logger.debug("Ignoring repeated polygon vertex")
            return
        elif new_edge_intersects(self._polygon_points, point):
            logger.debug("New polygon edge crosses an earlier one, closing polygon")
            self._close_polygon()
        else:
            self._polygon_points.append(point)
        self.scene_changed.emit()

    def _close_polygon(self) -> bool:
        """Turn the vertex list into a Polygon. Needs at least 3 vertices."""
        points = self._polygon_points
        if len(points) < 3:
            logger.debug(f"Cannot close polygon with {len(points)} vertices")
            return False

        if points[0] != points[-1]:
            points.append(points[0].copy())

        polygon = Polygon(
            points=points,
            fill_color=self._fill_color,
            stroke_color=self._stroke_color,
            stroke_width=self._stroke_width
        )
        self._polygon_points = []
        self._preview_point = None
        self._state = GestureState.IDLE

        self.scene.add(polygon)
        self._select(polygon)
        self._record(Action(ActionType.CREATE, polygon, full_state=snapshot(polygon)))
        self.scene_changed.emit()
        return True

    def _discard_polygon(self) -> None:
        if self._state == GestureState.BUILDING_POLYGON:
            logger.debug(f"Discarding unfinished polygon ({len(self._polygon_points)} vertices)")
            self._polygon_points = []
            self._preview_point = None
            self._state = GestureState.IDLE
            self.scene_changed.emit()

    # Moving and scaling

    def _track(self, point: Point) -> bool:
        """Apply one pointer tick to the active pointer gesture."""
        if self._state == GestureState.CREATING_SHAPE:
            if self._pending is None:
                return False
            self._resize_pending(point)
            return True

        shape = self.scene.selected
        if shape is None:
            return False

        if self._state == GestureState.MOVING:
            dx = point.x - self._last_pos.x
            dy = point.y - self._last_pos.y
            self._last_pos = point
            if dx == 0 and dy == 0:
                return False
            translate(shape, dx, dy)
            self.scene.refresh_handles()
            return True

        if self._state == GestureState.SCALING:
            # Always relative to where the gesture started
            dx = point.x - self._anchor.x
            dy = point.y - self._anchor.y
            if dx == 0 and dy == 0:
                # A click on a handle leaves the shape as it was
                restore(shape, self._initial)
            else:
                new_bounds = scaled_bounds(
                    self._initial_bounds, self._handle_index, dx, dy,
                    self.settings.min_scaled_extent
                )
                apply_bounds(shape, new_bounds, self._initial)
            self.scene.refresh_handles()
            return True

        return False

    def _finish_moving(self) -> None:
        shape = self.scene.selected
        if shape is None:
            logger.warning("Move finished but the shape is no longer in the scene")
            return
        final = snapshot(shape)
        if final != self._initial:
            self._record(Action(ActionType.MOVE, shape, self._initial, final))

    def _finish_scaling(self) -> None:
        shape = self.scene.selected
        if shape is None:
            logger.warning("Scale finished but the shape is no longer in the scene")
            return
        self.scene.refresh_handles()
        self._record(Action(ActionType.SCALE, shape, self._initial, snapshot(shape)))

    def _reset_gesture(self) -> None:
        self._state = GestureState.IDLE
        self._pending = None
        self._anchor = None
        self._last_pos = None
        self._initial = None
        self._initial_bounds = None
        self._handle_index = None

    # Commands

    def set_fill_color(self, color: str) -> bool:
        """
        Change the fill of the selected shape (editing mode) or the fill
        used for new shapes (creating mode).

        Returns True if a shape was changed.
        """
        color = normalize_color(color)
        if self._mode == EditorMode.CREATING:
            self._fill_color = color
            return False

        shape = self.scene.selected
        if shape is None:
            return False
        if not shape.has_fill:
            logger.info(f"Fill color does not apply to {shape.kind.value}")
            return False
        if shape.fill_color == color:
            return False

        self._record(Action(ActionType.MODIFY_FILL, shape, shape.fill_color, color))
        shape.fill_color = color
        self.scene_changed.emit()
        return True

    def set_stroke_color(self, color: str) -> bool:
        """
        Change the stroke of the selected shape (editing mode) or the stroke
        used for new shapes (creating mode). A stroke picked for a selected
        shape also becomes the default for new shapes.

        Returns True if a shape was changed.
        """
        color = normalize_color(color)
        if self._mode == EditorMode.CREATING:
            self._stroke_color = color
            return False

        shape = self.scene.selected
        if shape is None:
            return False
        self._stroke_color = color
        if shape.stroke_color == color:
            return False

        self._record(Action(ActionType.MODIFY_STROKE, shape, shape.stroke_color, color))
        shape.stroke_color = color
        self.scene_changed.emit()
        return True

    def delete_selected(self) -> bool:
        """Delete the selected shape. Returns True if something was deleted."""
        shape = self.scene.selected
        if shape is None:
            return False

        action = self.scene.delete(shape)
        if action is None:
            return False
        self._record(action)
        self.selection_changed.emit(None)
        self.scene_changed.emit()
        return True

    def undo(self) -> bool:
        """Undo the most recent action. Returns False if nothing was undone."""
        if self._state in _POINTER_GESTURES:
            logger.debug(f"Undo ignored during {self._state.value}")
            return False

        if not self.undo_log:
            self.notification.emit("Nothing to undo", "info")
            return False

        # An undo may select a shape, which cannot coexist with a polygon
        # under construction
        self._discard_polygon()
        self.undo_log.undo(self.scene)
        self.history_changed.emit(self.can_undo)
        self.selection_changed.emit(self.scene.selected)
        self.scene_changed.emit()
        return True

    def new_document(self) -> None:
        """Clear the canvas and the undo history."""
        self._discard_polygon()
        self._reset_gesture()
        self.scene.clear()
        self.undo_log.clear()
        self.history_changed.emit(False)
        self.selection_changed.emit(None)
        self.scene_changed.emit()

    def export_svg(self, choose_target: Callable[[], Optional[str]]) -> bool:
        """
        Export the scene to an SVG file.

        Args:
            choose_target: Returns a destination path, or None if cancelled

        Returns:
            True if the file was written
        """
        filepath = choose_target()
        if not filepath:
            logger.debug("SVG export cancelled")
            return False

        try:
            export_svg(self.scene, filepath,
                       self.settings.canvas_width, self.settings.canvas_height)
        except OSError as e:
            logger.error(f"Failed to export SVG to {filepath}: {e}")
            self.notification.emit(f"Save failed: {e}", "error")
            return False

        logger.info(f"Exported {len(self.scene)} shapes to {filepath}")
        self.notification.emit("File saved successfully", "info")
        return True

    # Helpers

    def _select(self, shape: Shape) -> None:
        self.scene.select(shape)
        self.selection_changed.emit(shape)

    def _deselect(self) -> None:
        if self.scene.selected is not None:
            self.scene.deselect()
            self.selection_changed.emit(None)

    def _record(self, action: Action) -> None:
        self.undo_log.record(action)
        logger.debug(f"Recorded {action.type.value} ({len(self.undo_log)} in history)")
        self.history_changed.emit(True)
