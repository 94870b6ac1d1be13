"""
VecSketch Graphics Module

Contains the interactive editing engine:
- ShapeEditor: pointer-driven create/select/move/scale state machine
"""

from .editor import ShapeEditor, EditorMode, GestureState

__all__ = [
    'ShapeEditor',
    'EditorMode',
    'GestureState',
]
