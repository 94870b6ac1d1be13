"""
SVG export for VecSketch

Writes the scene as a static SVG document. Export is one-way; the
output is not meant to be read back into the editor.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
from xml.etree import ElementTree as ET

from ..core.scene import Scene
from ..core.shapes import Shape, Rectangle, Ellipse, Line, Polygon, normalize_color

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _num(value: float) -> str:
    """Round to the nearest integer, halves away from zero."""
    rounded = Decimal(repr(float(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return str(int(rounded))


def _paint(elem: ET.Element, shape: Shape, with_fill: bool = True) -> None:
    if with_fill:
        elem.set('fill', normalize_color(shape.fill_color))
    elem.set('stroke', normalize_color(shape.stroke_color))
    elem.set('stroke-width', _num(shape.stroke_width))


def shape_to_element(shape: Shape) -> Optional[ET.Element]:
    """
    Convert one shape to an SVG element.

    Returns None for shapes that would not render: boxes with a
    non-positive side and polygons with fewer than 3 vertices.
    """
    if isinstance(shape, Rectangle):
        if shape.width <= 0 or shape.height <= 0:
            return None
        elem = ET.Element('rect')
        elem.set('x', _num(shape.x))
        elem.set('y', _num(shape.y))
        elem.set('width', _num(shape.width))
        elem.set('height', _num(shape.height))
        _paint(elem, shape)
        return elem

    if isinstance(shape, Ellipse):
        if shape.width <= 0 or shape.height <= 0:
            return None
        elem = ET.Element('ellipse')
        elem.set('cx', _num(shape.x + shape.width / 2))
        elem.set('cy', _num(shape.y + shape.height / 2))
        elem.set('rx', _num(shape.width / 2))
        elem.set('ry', _num(shape.height / 2))
        _paint(elem, shape)
        return elem

    if isinstance(shape, Line):
        elem = ET.Element('line')
        elem.set('x1', _num(shape.x1))
        elem.set('y1', _num(shape.y1))
        elem.set('x2', _num(shape.x2))
        elem.set('y2', _num(shape.y2))
        _paint(elem, shape, with_fill=False)
        return elem

    if isinstance(shape, Polygon):
        if len(shape.points) < 3:
            return None
        elem = ET.Element('polygon')
        elem.set('points', ' '.join(f'{_num(p.x)},{_num(p.y)}' for p in shape.points))
        _paint(elem, shape)
        return elem

    raise ValueError(f"Unknown shape type: {type(shape).__name__}")


def shapes_to_svg(shapes: Iterable[Shape], width: float, height: float) -> str:
    """Build the SVG document for shapes in draw order."""
    svg = ET.Element('svg')
    svg.set('width', _num(width))
    svg.set('height', _num(height))
    svg.set('xmlns', SVG_NAMESPACE)

    background = ET.SubElement(svg, 'rect')
    background.set('width', '100%')
    background.set('height', '100%')
    background.set('fill', 'white')

    for shape in shapes:
        elem = shape_to_element(shape)
        if elem is not None:
            svg.append(elem)

    ET.indent(svg, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(svg, encoding='unicode') + "\n"


def scene_to_svg(scene: Scene, width: float, height: float) -> str:
    """Build the SVG document for a scene."""
    return shapes_to_svg(scene.shapes, width, height)


def export_svg(scene: Scene, filepath: str, width: float, height: float) -> None:
    """
    Export a scene to an SVG file.

    Raises:
        OSError: If the file cannot be written
    """
    document = scene_to_svg(scene, width, height)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(document)
