"""
VecSketch editor settings and color palettes.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .shapes import DEFAULT_FILL, DEFAULT_STROKE, DEFAULT_STROKE_WIDTH
from .history import MAX_UNDO_STEPS
from .transform import MIN_SCALED_EXTENT


@dataclass
class EditorSettings:
    """Tunable parameters of the editor."""
    canvas_width: float = 800.0
    canvas_height: float = 600.0

    # Defaults for new shapes
    fill_color: str = DEFAULT_FILL
    stroke_color: str = DEFAULT_STROKE
    stroke_width: float = DEFAULT_STROKE_WIDTH

    undo_capacity: int = MAX_UNDO_STEPS
    min_create_extent: float = 1.0      # drags at or below this are discarded
    min_scaled_extent: float = MIN_SCALED_EXTENT
    hit_tolerance: float = 4.0          # pointer slop for picking shapes


# (name, color) pairs offered by the color menus
FILL_PALETTE: List[Tuple[str, str]] = [
    ("White", "#FFFFFF"),
    ("Gray", "#808080"),
    ("Black", "#000000"),
    ("Purple", "#800080"),
    ("Blue", "#0000FF"),
    ("Light Blue", "#ADD8E6"),
    ("Green", "#008000"),
    ("Light Green", "#90EE90"),
    ("Yellow", "#FFFF00"),
    ("Orange", "#FFA500"),
    ("Red", "#FF0000"),
    ("Pink", "#FFC0CB"),
]

STROKE_PALETTE: List[Tuple[str, str]] = [
    ("Purple", "#800080"),
    ("Blue", "#0000FF"),
    ("Light Blue", "#ADD8E6"),
    ("Green", "#008000"),
    ("Light Green", "#90EE90"),
    ("Yellow", "#FFFF00"),
    ("Orange", "#FFA500"),
    ("Red", "#FF0000"),
    ("Brown", "#A52A2A"),
    ("Black", "#000000"),
    ("Gray", "#808080"),
    ("White", "#FFFFFF"),
]
