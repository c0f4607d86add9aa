"""
Cell module for AssetSweeper.

Represents individual tiles on the board with their logical state
(hidden/revealed/flagged), content (mine/number) and the value-type
snapshots the undo log stores.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible logical states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


class VisualState(Enum):
    """What the presentation layer should draw for a cell."""

    HIDDEN = "hidden"
    FLAGGED = "flagged"
    EMPTY = "empty"
    NUMBER = "number"
    MINE = "mine"
    DETONATED = "detonated"
    DEFUSED = "defused"


# Observation codes used by Board.get_observation()
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_DEFUSED = -3
OBS_MINE = 9


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class CellSnapshot:
    """Immutable copy of every mutable field of a cell."""

    is_mine: bool
    neighbor_mines: int
    state: CellState
    defused: bool


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single tile in the AssetSweeper grid.

    Attributes:
        row: Row index of the cell.
        col: Column index of the cell.
        is_mine: Whether this cell contains a mine.
        neighbor_mines: Count of mines in neighboring cells (0-8).
        state: Current logical state (hidden, revealed, or flagged).
        defused: Whether a firewall charge contained this mine.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.HIDDEN
    defused: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed or defused.
        """
        if self.state == CellState.REVEALED or self.defused:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def defuse(self) -> None:
        """Turn a mine into a permanently flagged, contained cell."""
        self.state = CellState.FLAGGED
        self.defused = True

    def snapshot(self) -> CellSnapshot:
        """Capture the current field values."""
        return CellSnapshot(
            is_mine=self.is_mine,
            neighbor_mines=self.neighbor_mines,
            state=self.state,
            defused=self.defused,
        )

    def restore(self, snapshot: CellSnapshot) -> None:
        """
        Put back the reveal/flag state from a snapshot.

        The mine layout (is_mine, neighbor_mines) is left as it is; it only
        changes through first-move relocation, which is never undone.
        """
        self.state = snapshot.state
        self.defused = snapshot.defused

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) of this cell."""
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged (defused cells included)."""
        return self.state == CellState.FLAGGED

    @property
    def visual(self) -> VisualState:
        """Visual state for an in-progress game."""
        if self.state == CellState.HIDDEN:
            return VisualState.HIDDEN
        if self.state == CellState.FLAGGED:
            return VisualState.DEFUSED if self.defused else VisualState.FLAGGED
        if self.is_mine:
            return VisualState.MINE
        if self.neighbor_mines > 0:
            return VisualState.NUMBER
        return VisualState.EMPTY

    def to_observation(self) -> int:
        """
        Convert cell to its observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Defused mine
            0-8: Revealed cell with neighboring mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_DEFUSED if self.defused else OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_mines
