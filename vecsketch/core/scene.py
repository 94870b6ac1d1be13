"""
VecSketch Scene

The Scene is the ordered collection of shapes on the canvas together
with the (single) selection and its resize handles.
"""

import logging
from typing import Iterator, List, Optional
from uuid import UUID

from .shapes import Shape, Point, Bounds
from .geometry import ResizeHandle, bounds_of, build_handles, reposition_handles, hit_test
from .history import Action, ActionType
from .transform import snapshot

logger = logging.getLogger(__name__)


class Scene:
    """
    Insertion-ordered shapes (insertion order is the z-order).

    The selection is kept as a shape id and resolved on every access, so
    removing a shape can never leave a dangling selection behind.
    """

    def __init__(self):
        self._shapes: List[Shape] = []
        self._selected_id: Optional[UUID] = None
        self._handles: List[ResizeHandle] = []

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(list(self._shapes))

    @property
    def shapes(self) -> List[Shape]:
        """Shapes in draw order (copy)."""
        return list(self._shapes)

    def add(self, shape: Shape) -> None:
        """Add a shape on top of all others."""
        self._shapes.append(shape)

    def insert(self, index: int, shape: Shape) -> None:
        """Insert a shape at a z-position (clamped to the valid range)."""
        index = max(0, min(index, len(self._shapes)))
        self._shapes.insert(index, shape)

    def remove(self, shape: Shape) -> bool:
        """Remove a shape; clears the selection if it pointed at it."""
        if shape not in self._shapes:
            return False
        self._shapes.remove(shape)
        if self._selected_id == shape.id:
            self.deselect()
        return True

    def contains(self, shape: Optional[Shape]) -> bool:
        return shape is not None and shape in self._shapes

    def index_of(self, shape: Shape) -> int:
        """Z-position of shape, or -1 if it is not in the scene."""
        if shape not in self._shapes:
            return -1
        return self._shapes.index(shape)

    def get(self, shape_id: UUID) -> Optional[Shape]:
        """Find a shape by its ID."""
        for shape in self._shapes:
            if shape.id == shape_id:
                return shape
        return None

    def shape_at(self, point: Point, tolerance: float = 4.0) -> Optional[Shape]:
        """Topmost shape under point."""
        for shape in reversed(self._shapes):
            if hit_test(shape, point, tolerance):
                return shape
        return None

    # Selection

    @property
    def selected(self) -> Optional[Shape]:
        """The selected shape, re-validated against the scene."""
        if self._selected_id is None:
            return None
        shape = self.get(self._selected_id)
        if shape is None:
            logger.debug(f"Selected shape {self._selected_id} no longer in scene")
            self._selected_id = None
            self._handles.clear()
        return shape

    @property
    def selection_bounds(self) -> Optional[Bounds]:
        shape = self.selected
        return bounds_of(shape) if shape is not None else None

    @property
    def handles(self) -> List[ResizeHandle]:
        return list(self._handles)

    def select(self, shape: Shape) -> None:
        """Select a shape, replacing any previous selection."""
        if not self.contains(shape):
            logger.warning(f"Cannot select shape {shape.id}: not in scene")
            return
        self.deselect()
        self._selected_id = shape.id
        self._handles = build_handles(bounds_of(shape))

    def deselect(self) -> None:
        """Remove handles and clear the selection."""
        self._handles.clear()
        self._selected_id = None

    def is_selected(self, shape: Shape) -> bool:
        return self._selected_id is not None and shape.id == self._selected_id

    def refresh_handles(self) -> None:
        """Reposition (not regenerate) the handles after a geometry change."""
        shape = self.selected
        if shape is not None and self._handles:
            reposition_handles(self._handles, bounds_of(shape))

    def handle_at(self, point: Point) -> Optional[int]:
        """Index of the selection handle containing point."""
        if self.selected is None:
            return None
        for handle in self._handles:
            if handle.contains(point):
                return handle.index
        return None

    def delete(self, shape: Shape) -> Optional[Action]:
        """
        Remove a shape and return the Delete action that restores it.

        Returns None if the shape is not in the scene.
        """
        index = self.index_of(shape)
        if index < 0:
            logger.warning(f"Cannot delete shape {shape.id}: not in scene")
            return None
        action = Action(ActionType.DELETE, shape,
                        full_state=snapshot(shape), index=index)
        self.remove(shape)
        self.deselect()
        return action

    def clear(self) -> None:
        self._shapes.clear()
        self.deselect()
