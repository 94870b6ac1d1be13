"""
VecSketch Core Module

Contains the core data structures:
- Shapes: Rectangle, Ellipse, Line, Polygon
- Geometry: bounds, resize handles, intersection and hit tests
- Scene: ordered shapes with a single selection
- History: bounded undo log
"""

# Import order matters - shapes first, then transform, history, scene
from .shapes import (
    Point, Bounds, ShapeKind, ShapePosition, Shape,
    Rectangle, Ellipse, Line, Polygon, create_shape, normalize_color
)
from .geometry import (
    ResizeHandle, bounds_of, handle_size, handle_position,
    segments_intersect, new_edge_intersects, hit_test
)
from .transform import snapshot, restore, translate, scaled_bounds, apply_bounds
from .history import Action, ActionType, UndoLog
from .scene import Scene
from .settings import EditorSettings, FILL_PALETTE, STROKE_PALETTE

__all__ = [
    'Point', 'Bounds', 'ShapeKind', 'ShapePosition', 'Shape',
    'Rectangle', 'Ellipse', 'Line', 'Polygon', 'create_shape', 'normalize_color',
    'ResizeHandle', 'bounds_of', 'handle_size', 'handle_position',
    'segments_intersect', 'new_edge_intersects', 'hit_test',
    'snapshot', 'restore', 'translate', 'scaled_bounds', 'apply_bounds',
    'Action', 'ActionType', 'UndoLog',
    'Scene',
    'EditorSettings', 'FILL_PALETTE', 'STROKE_PALETTE',
]
