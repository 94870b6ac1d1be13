"""
VecSketch - 2D vector shape editor.
"""

__version__ = "0.1.0"
