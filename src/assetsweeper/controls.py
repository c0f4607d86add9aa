"""
Keyboard controls: one logical cursor moved with the arrow keys.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple


class KeyAction(Enum):
    """Logical actions a key can map to."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    CONFIRM = auto()
    FLAG = auto()


KEY_BINDINGS: Dict[str, KeyAction] = {
    "ArrowUp": KeyAction.UP,
    "ArrowDown": KeyAction.DOWN,
    "ArrowLeft": KeyAction.LEFT,
    "ArrowRight": KeyAction.RIGHT,
    " ": KeyAction.CONFIRM,
    "Enter": KeyAction.CONFIRM,
    "f": KeyAction.FLAG,
    "F": KeyAction.FLAG,
}

MOVES: Dict[KeyAction, Tuple[int, int]] = {
    KeyAction.UP: (-1, 0),
    KeyAction.DOWN: (1, 0),
    KeyAction.LEFT: (0, -1),
    KeyAction.RIGHT: (0, 1),
}


def action_for_key(key: str) -> Optional[KeyAction]:
    """Map a key name to its action, or None for unbound keys."""
    return KEY_BINDINGS.get(key)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class Cursor:
    """Keyboard selection, always kept inside the board."""

    row: int = 0
    col: int = 0

    def move(self, action: KeyAction, rows: int, cols: int) -> bool:
        """
        Step the cursor, clamping at the edges.

        Returns:
            True if the position changed.
        """
        if action not in MOVES:
            return False
        delta_row, delta_col = MOVES[action]
        new_row = clamp(self.row + delta_row, 0, rows - 1)
        new_col = clamp(self.col + delta_col, 0, cols - 1)
        moved = (new_row, new_col) != (self.row, self.col)
        self.row, self.col = new_row, new_col
        return moved

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col
