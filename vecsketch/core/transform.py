"""
Transform Operations for VecSketch

Handles geometry changes of shapes:
- Snapshots (ShapePosition) and restoring them
- Translation (movement)
- Scaling via the 8 resize handles
"""

from typing import List
import numpy as np

from .shapes import (
    Shape, Rectangle, Ellipse, Line, Polygon,
    Point, Bounds, ShapePosition
)
from .geometry import bounds_of, NW, N, NE, E, SE, S, SW, W


MIN_SCALED_EXTENT = 10.0


def _to_array(points: List[Point]) -> np.ndarray:
    return np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)


def _from_array(array: np.ndarray) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in array]


def snapshot(shape: Shape) -> ShapePosition:
    """Capture the full geometry of a shape."""
    if isinstance(shape, (Rectangle, Ellipse)):
        return ShapePosition(shape.x, shape.y, shape.width, shape.height)
    if isinstance(shape, Line):
        return ShapePosition(shape.x1, shape.y1,
                             shape.x2 - shape.x1, shape.y2 - shape.y1)
    if isinstance(shape, Polygon):
        bounds = bounds_of(shape)
        return ShapePosition(bounds.left, bounds.top, bounds.width, bounds.height,
                             points=[p.copy() for p in shape.points])
    raise ValueError(f"Unknown shape type: {type(shape).__name__}")


def restore(shape: Shape, position: ShapePosition) -> None:
    """Put a shape back into the geometry captured by `snapshot`."""
    if isinstance(shape, (Rectangle, Ellipse)):
        shape.x = position.x
        shape.y = position.y
        shape.width = position.width
        shape.height = position.height
    elif isinstance(shape, Line):
        shape.x1 = position.x
        shape.y1 = position.y
        shape.x2 = position.x + position.width
        shape.y2 = position.y + position.height
    elif isinstance(shape, Polygon):
        if position.points is not None:
            shape.points = [p.copy() for p in position.points]
    else:
        raise ValueError(f"Unknown shape type: {type(shape).__name__}")


def translate(shape: Shape, dx: float, dy: float) -> None:
    """Move a shape by (dx, dy)."""
    if isinstance(shape, (Rectangle, Ellipse)):
        shape.x += dx
        shape.y += dy
    elif isinstance(shape, Line):
        shape.x1 += dx
        shape.y1 += dy
        shape.x2 += dx
        shape.y2 += dy
    elif isinstance(shape, Polygon):
        if shape.points:
            shape.points = _from_array(_to_array(shape.points) + (dx, dy))
    else:
        raise ValueError(f"Unknown shape type: {type(shape).__name__}")


def scaled_bounds(bounds: Bounds, handle_index: int, dx: float, dy: float,
                  min_extent: float = MIN_SCALED_EXTENT) -> Bounds:
    """
    Compute the bounds produced by dragging a resize handle by (dx, dy).

    Corner handles change both dimensions, edge handles only the one they
    face. Both resulting dimensions are floored at `min_extent`; when the
    dragged edge is the left or top one, the opposite edge stays put.
    """
    moves_left = handle_index in (NW, SW, W)
    moves_top = handle_index in (NW, N, NE)
    moves_right = handle_index in (NE, E, SE)
    moves_bottom = handle_index in (SE, S, SW)
    if handle_index not in (NW, N, NE, E, SE, S, SW, W):
        raise ValueError(f"Invalid handle index: {handle_index}")

    width = bounds.width
    height = bounds.height
    if moves_left:
        width = bounds.width - dx
    elif moves_right:
        width = bounds.width + dx
    if moves_top:
        height = bounds.height - dy
    elif moves_bottom:
        height = bounds.height + dy

    width = max(min_extent, width)
    height = max(min_extent, height)

    left = bounds.right - width if moves_left else bounds.left
    top = bounds.bottom - height if moves_top else bounds.top
    return Bounds(left, top, width, height)


def apply_bounds(shape: Shape, new_bounds: Bounds, origin: ShapePosition) -> None:
    """
    Fit a shape into new_bounds.

    `origin` is the snapshot taken when the gesture started; polygons are
    remapped from its vertices so rounding error never compounds.
    """
    if isinstance(shape, (Rectangle, Ellipse)):
        shape.x = new_bounds.left
        shape.y = new_bounds.top
        shape.width = new_bounds.width
        shape.height = new_bounds.height
    elif isinstance(shape, Line):
        # Keep the direction the line was drawn in
        flip_x = origin.width < 0
        flip_y = origin.height < 0
        shape.x1 = new_bounds.right if flip_x else new_bounds.left
        shape.x2 = new_bounds.left if flip_x else new_bounds.right
        shape.y1 = new_bounds.bottom if flip_y else new_bounds.top
        shape.y2 = new_bounds.top if flip_y else new_bounds.bottom
    elif isinstance(shape, Polygon):
        if not origin.points:
            return
        old = Bounds(origin.x, origin.y, origin.width, origin.height)
        scale_x = new_bounds.width / old.width if old.width else 1.0
        scale_y = new_bounds.height / old.height if old.height else 1.0
        pts = _to_array(origin.points)
        pts = (pts - (old.left, old.top)) * (scale_x, scale_y) + (new_bounds.left, new_bounds.top)
        shape.points = _from_array(pts)
    else:
        raise ValueError(f"Unknown shape type: {type(shape).__name__}")
