"""
VecSketch I/O Module

Handles file export.
"""

from .svg_export import export_svg, scene_to_svg, shape_to_element

__all__ = ['export_svg', 'scene_to_svg', 'shape_to_element']
