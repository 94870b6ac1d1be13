"""
VecSketch UI Module

Contains the main window and the canvas widget.
"""

from .canvas import EditorCanvas
from .mainwindow import MainWindow

__all__ = ['EditorCanvas', 'MainWindow']
