"""
Geometry helpers for VecSketch

Bounding boxes, resize-handle placement, segment intersection and
hit testing for every shape kind.
"""

from dataclasses import dataclass
from typing import List, Optional

from .shapes import Bounds, Ellipse, Line, Point, Polygon, Rectangle, Shape


HANDLE_COUNT = 8
HANDLE_SIZE_RATIO = 0.1
MIN_HANDLE_SIZE = 6.0
MAX_HANDLE_SIZE = 12.0

# Handle indices, clockwise from the top-left corner
NW, N, NE, E, SE, S, SW, W = range(HANDLE_COUNT)

_HANDLE_CURSORS = {
    NW: "size_nwse",
    N: "size_ns",
    NE: "size_nesw",
    E: "size_we",
    SE: "size_nwse",
    S: "size_ns",
    SW: "size_nesw",
    W: "size_we",
}


@dataclass
class ResizeHandle:
    """A square resize marker; (x, y) is its top-left corner."""
    index: int
    x: float
    y: float
    size: float
    cursor: str

    @property
    def rect(self) -> Bounds:
        return Bounds(self.x, self.y, self.size, self.size)

    def contains(self, point: Point) -> bool:
        return self.rect.contains(point)


def bounds_of(shape: Shape) -> Bounds:
    """Return the axis-aligned bounding box of a shape."""
    if isinstance(shape, (Rectangle, Ellipse)):
        return Bounds(shape.x, shape.y, shape.width, shape.height)
    if isinstance(shape, Line):
        return Bounds(
            min(shape.x1, shape.x2),
            min(shape.y1, shape.y2),
            abs(shape.x2 - shape.x1),
            abs(shape.y2 - shape.y1)
        )
    if isinstance(shape, Polygon):
        return points_bounds(shape.points)
    raise ValueError(f"Unknown shape type: {type(shape).__name__}")


def points_bounds(points: List[Point]) -> Bounds:
    """Bounds of a point list; an empty list gives a zero rect."""
    if not points:
        return Bounds(0, 0, 0, 0)
    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    return Bounds(
        min_x,
        min_y,
        max(p.x for p in points) - min_x,
        max(p.y for p in points) - min_y
    )


def handle_size(width: float, height: float,
                ratio: float = HANDLE_SIZE_RATIO,
                min_size: float = MIN_HANDLE_SIZE,
                max_size: float = MAX_HANDLE_SIZE) -> float:
    """Handle size follows the shape but stays within a usable range."""
    size = min(width, height) * ratio
    return max(min_size, min(max_size, size))


def handle_anchor(bounds: Bounds, index: int) -> Point:
    """Return the compass point of bounds that handle `index` sits on."""
    mid_x = bounds.left + bounds.width / 2
    mid_y = bounds.top + bounds.height / 2
    anchors = {
        NW: (bounds.left, bounds.top),
        N: (mid_x, bounds.top),
        NE: (bounds.right, bounds.top),
        E: (bounds.right, mid_y),
        SE: (bounds.right, bounds.bottom),
        S: (mid_x, bounds.bottom),
        SW: (bounds.left, bounds.bottom),
        W: (bounds.left, mid_y),
    }
    if index not in anchors:
        raise ValueError(f"Invalid handle index: {index}")
    x, y = anchors[index]
    return Point(x, y)


def handle_position(bounds: Bounds, index: int, size: float) -> Point:
    """Top-left corner of a handle centered on its anchor point."""
    anchor = handle_anchor(bounds, index)
    half = size / 2
    return Point(anchor.x - half, anchor.y - half)


def handle_cursor(index: int) -> str:
    """Cursor hint for a handle index."""
    if index not in _HANDLE_CURSORS:
        raise ValueError(f"Invalid handle index: {index}")
    return _HANDLE_CURSORS[index]


def build_handles(bounds: Bounds, size: Optional[float] = None) -> List[ResizeHandle]:
    """Create the 8 resize handles around bounds."""
    if size is None:
        size = handle_size(bounds.width, bounds.height)
    handles = []
    for index in range(HANDLE_COUNT):
        pos = handle_position(bounds, index, size)
        handles.append(ResizeHandle(index, pos.x, pos.y, size, handle_cursor(index)))
    return handles


def reposition_handles(handles: List[ResizeHandle], bounds: Bounds,
                       size: Optional[float] = None) -> None:
    """Move existing handles (and resize them) to follow bounds."""
    if size is None:
        size = handle_size(bounds.width, bounds.height)
    for handle in handles:
        pos = handle_position(bounds, handle.index, size)
        handle.x = pos.x
        handle.y = pos.y
        handle.size = size


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """
    Test whether segment a1-a2 intersects segment b1-b2.

    Parallel and collinear segments are treated as non-intersecting.
    """
    # Solve a1 + t*(a2 - a1) == b1 + u*(b2 - b1)
    det = (a2.x - a1.x) * (b2.y - b1.y) - (b2.x - b1.x) * (a2.y - a1.y)
    if det == 0:
        return False
    t = ((b1.x - a1.x) * (b2.y - b1.y) - (b2.x - b1.x) * (b1.y - a1.y)) / det
    u = ((b1.x - a1.x) * (a2.y - a1.y) - (a2.x - a1.x) * (b1.y - a1.y)) / det
    return 0 <= t <= 1 and 0 <= u <= 1


def new_edge_intersects(points: List[Point], candidate: Point) -> bool:
    """
    Check if the edge from the last vertex to candidate would cross
    an earlier edge of the open polyline.

    The edge adjacent to the last vertex is skipped since it always
    touches the new edge.
    """
    if len(points) < 2:
        return False
    last = points[-1]
    for i in range(len(points) - 2):
        if segments_intersect(points[i], points[i + 1], last, candidate):
            return True
    return False


def point_in_polygon(point: Point, polygon: List[Point]) -> bool:
    """
    Check if a point is inside a polygon using ray casting.
    """
    n = len(polygon)
    inside = False

    j = n - 1
    for i in range(n):
        if ((polygon[i].y > point.y) != (polygon[j].y > point.y) and
            point.x < (polygon[j].x - polygon[i].x) *
            (point.y - polygon[i].y) / (polygon[j].y - polygon[i].y) +
            polygon[i].x):
            inside = not inside
        j = i

    return inside


def distance_to_segment(point: Point, a: Point, b: Point) -> float:
    """Shortest distance from point to segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return point.distance_to(a)
    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return point.distance_to(Point(a.x + t * dx, a.y + t * dy))


def hit_test(shape: Shape, point: Point, tolerance: float = 4.0) -> bool:
    """Check if point is inside/on the shape."""
    if isinstance(shape, Rectangle):
        return bounds_of(shape).inflated(tolerance).contains(point)

    if isinstance(shape, Ellipse):
        rx = shape.width / 2 + tolerance
        ry = shape.height / 2 + tolerance
        cx = shape.x + shape.width / 2
        cy = shape.y + shape.height / 2
        if rx <= 0 or ry <= 0:
            return False
        return ((point.x - cx) / rx)**2 + ((point.y - cy) / ry)**2 <= 1

    if isinstance(shape, Line):
        reach = max(tolerance, shape.stroke_width / 2)
        return distance_to_segment(point, shape.start, shape.end) <= reach

    if isinstance(shape, Polygon):
        pts = shape.points
        if len(pts) < 2:
            return False
        if point_in_polygon(point, pts):
            return True
        edges = zip(pts, pts[1:] + pts[:1])
        return any(distance_to_segment(point, a, b) <= tolerance for a, b in edges)

    raise ValueError(f"Unknown shape type: {type(shape).__name__}")
