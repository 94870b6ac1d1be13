"""
VecSketch Core Shapes Module

Defines the fundamental geometry types: Point, Bounds, the four shape
kinds (Rectangle, Ellipse, Line, Polygon) and the ShapePosition snapshot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional
from uuid import UUID, uuid4
import math
import re


DEFAULT_FILL = "#D3D3D3"     # LightGray
DEFAULT_STROKE = "#D3D3D3"
DEFAULT_STROKE_WIDTH = 2.0

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_color(value: str) -> str:
    """
    Normalize a color to uppercase #RRGGBB.

    Accepts #RGB and #RRGGBB in any case.
    """
    if not isinstance(value, str) or not _HEX_RE.match(value.strip()):
        raise ValueError(f"Invalid color: {value!r}")
    digits = value.strip()[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits.upper()}"


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x)**2 + (self.y - other.y)**2)

    def copy(self) -> 'Point':
        return Point(self.x, self.y)


@dataclass
class Bounds:
    """Axis-aligned bounding box stored as origin and size."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box (edges included)."""
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def inflated(self, amount: float) -> 'Bounds':
        return Bounds(self.left - amount, self.top - amount,
                      self.width + 2 * amount, self.height + 2 * amount)

    def translated(self, dx: float, dy: float) -> 'Bounds':
        return Bounds(self.left + dx, self.top + dy, self.width, self.height)


class ShapeKind(Enum):
    """Kinds of shapes; also the drawing tools of the editor."""
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    LINE = "line"
    POLYGON = "polygon"


@dataclass
class ShapePosition:
    """
    Geometry snapshot of a shape.

    For boxes this is origin and size. For lines x/y is the first endpoint
    and width/height the signed offset to the second one. Polygons carry a
    copy of every vertex together with their bounds.
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    points: Optional[List[Point]] = None


@dataclass(eq=False)
class Shape:
    """
    Base of the closed set of shape kinds.

    Shapes compare by identity: two rectangles with equal geometry are
    still different shapes on the canvas.
    """
    kind: ClassVar[ShapeKind]
    has_fill: ClassVar[bool] = True

    stroke_color: str = DEFAULT_STROKE
    stroke_width: float = DEFAULT_STROKE_WIDTH
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        self.stroke_color = normalize_color(self.stroke_color)


@dataclass(eq=False)
class Rectangle(Shape):
    """An axis-aligned rectangle."""
    kind: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fill_color: str = DEFAULT_FILL

    def __post_init__(self):
        super().__post_init__()
        self.fill_color = normalize_color(self.fill_color)


@dataclass(eq=False)
class Ellipse(Shape):
    """An ellipse inscribed in its (x, y, width, height) box."""
    kind: ClassVar[ShapeKind] = ShapeKind.ELLIPSE

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fill_color: str = DEFAULT_FILL

    def __post_init__(self):
        super().__post_init__()
        self.fill_color = normalize_color(self.fill_color)


@dataclass(eq=False)
class Line(Shape):
    """A straight segment. Lines have no fill."""
    kind: ClassVar[ShapeKind] = ShapeKind.LINE
    has_fill: ClassVar[bool] = False

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)


@dataclass(eq=False)
class Polygon(Shape):
    """A closed polygon; the closing vertex is kept equal to the first."""
    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    points: List[Point] = field(default_factory=list)
    fill_color: str = DEFAULT_FILL

    def __post_init__(self):
        super().__post_init__()
        self.fill_color = normalize_color(self.fill_color)
        self.points = [p.copy() for p in self.points]


def create_shape(kind: ShapeKind, x: float, y: float,
                 fill_color: str = DEFAULT_FILL,
                 stroke_color: str = DEFAULT_STROKE,
                 stroke_width: float = DEFAULT_STROKE_WIDTH) -> Shape:
    """
    Create a zero-extent shape of the given kind anchored at (x, y).

    Polygons are built vertex by vertex and cannot be created this way.
    """
    if kind == ShapeKind.RECTANGLE:
        return Rectangle(x=x, y=y, fill_color=fill_color,
                         stroke_color=stroke_color, stroke_width=stroke_width)
    if kind == ShapeKind.ELLIPSE:
        return Ellipse(x=x, y=y, fill_color=fill_color,
                       stroke_color=stroke_color, stroke_width=stroke_width)
    if kind == ShapeKind.LINE:
        return Line(x1=x, y1=y, x2=x, y2=y,
                    stroke_color=stroke_color, stroke_width=stroke_width)
    raise ValueError(f"Cannot drag-create shape kind: {kind}")
