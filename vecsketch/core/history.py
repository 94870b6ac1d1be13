"""
Undo history for VecSketch

A capacity-bounded action log. New actions go on the tail; when the log
is full the oldest action is dropped from the head. Undo always takes the
newest action off the tail and applies its inverse. There is no redo.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Optional, TYPE_CHECKING

from .shapes import Shape, ShapePosition
from .transform import restore

if TYPE_CHECKING:
    from .scene import Scene

logger = logging.getLogger(__name__)

MAX_UNDO_STEPS = 10


class ActionType(Enum):
    """Kinds of undoable user actions."""
    CREATE = "create"
    DELETE = "delete"
    MOVE = "move"
    SCALE = "scale"
    MODIFY_FILL = "modify_fill"
    MODIFY_STROKE = "modify_stroke"


@dataclass
class Action:
    """
    One completed user gesture.

    `target` is shared with the scene, not owned. Move/Scale carry
    ShapePosition old/new values, color changes carry color strings,
    Create/Delete carry the full geometry in `full_state`.
    """
    type: ActionType
    target: Shape
    old_value: Any = None
    new_value: Any = None
    full_state: Optional[ShapePosition] = None
    index: int = -1  # z-position of a deleted shape


class UndoLog:
    """Bounded LIFO whose bottom (oldest entry) is evicted on overflow."""

    def __init__(self, capacity: int = MAX_UNDO_STEPS):
        if capacity < 1:
            raise ValueError(f"Undo capacity must be positive, got {capacity}")
        self._actions: Deque[Action] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._actions)

    def __bool__(self) -> bool:
        return bool(self._actions)

    @property
    def capacity(self) -> int:
        return self._actions.maxlen

    @property
    def actions(self):
        """Recorded actions, oldest first (copy)."""
        return list(self._actions)

    def peek(self) -> Optional[Action]:
        return self._actions[-1] if self._actions else None

    def record(self, action: Action) -> None:
        """Append an action; the deque drops the head when full."""
        if len(self._actions) == self._actions.maxlen:
            evicted = self._actions[0]
            logger.debug(f"Undo log full, evicting oldest {evicted.type.value}")
        self._actions.append(action)

    def clear(self) -> None:
        self._actions.clear()

    def undo(self, scene: 'Scene') -> bool:
        """
        Remove the newest action and apply its inverse to scene.

        Returns False when there is nothing to undo. An action whose target
        is missing from the scene is dropped without touching the scene.
        """
        if not self._actions:
            logger.info("Nothing to undo")
            return False

        action = self._actions.pop()
        apply_inverse(action, scene)
        return True


def apply_inverse(action: Action, scene: 'Scene') -> bool:
    """Revert one action on scene. Returns False if it was abandoned."""
    shape = action.target
    present = scene.contains(shape)

    if action.type == ActionType.DELETE:
        if present:
            logger.warning(f"Undo delete abandoned: shape {shape.id} already in scene")
            return False
        if action.full_state is not None:
            restore(shape, action.full_state)
        scene.insert(action.index if action.index >= 0 else len(scene), shape)
        scene.select(shape)
        return True

    if not present:
        logger.warning(
            f"Undo {action.type.value} abandoned: shape {shape.id} not in scene"
        )
        return False

    if action.type == ActionType.CREATE:
        scene.remove(shape)
    elif action.type in (ActionType.MOVE, ActionType.SCALE):
        if isinstance(action.old_value, ShapePosition):
            restore(shape, action.old_value)
            if scene.is_selected(shape):
                scene.select(shape)
    elif action.type == ActionType.MODIFY_FILL:
        shape.fill_color = action.old_value
    elif action.type == ActionType.MODIFY_STROKE:
        shape.stroke_color = action.old_value
    return True
