"""
Board module for AssetSweeper.

Implements the tile grid, uniform mine placement, neighbor counting
and first-move relocation.
"""
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Position, ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for an AssetSweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_rate: Fraction of tiles that hold a mine.
        label: Human-readable difficulty name.
    """

    rows: int = 10
    cols: int = 10
    mine_rate: float = 1 / 12
    label: str = "Custom"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if not 0 < self.mine_rate <= 1:
            raise ValueError("Mine rate must be in (0, 1]")
        max_mines = self.total_tiles - 1
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.rows * self.cols

    @property
    def mine_count(self) -> int:
        """Mines placed for this configuration (always at least one)."""
        return max(1, math.floor(self.total_tiles * self.mine_rate))


# Preset difficulty levels
EASY = BoardConfig(10, 10, 1 / 12, "Easy")
MEDIUM = BoardConfig(16, 16, 1 / 10, "Medium")
HARD = BoardConfig(22, 22, 1 / 8, "Hard")

DIFFICULTIES: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


def get_difficulty(key: str) -> BoardConfig:
    """Look up a difficulty preset by key."""
    try:
        return DIFFICULTIES[key]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {key!r} (expected one of "
            f"{', '.join(DIFFICULTIES)})"
        ) from None


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    AssetSweeper game board.

    Holds the grid of cells and the fixed mine count. Cells are mutated in
    place by the reveal engine; the board itself only knows about layout.
    """

    rows: int
    cols: int
    mine_count: int = 0
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    # ========================================================================
    # Construction (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]

    @classmethod
    def generate(
        cls,
        config: BoardConfig,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """
        Build a board with mines placed uniformly at random.

        Args:
            config: Dimensions and mine rate.
            rng: Random source (default: a fresh unseeded one).

        Returns:
            A board with exactly config.mine_count mines and all
            neighbor counts computed.
        """
        board = cls(config.rows, config.cols, config.mine_count)
        board._place_mines(config.mine_count, rng or random.Random())
        board.count_all_neighbors()
        return board

    @classmethod
    def from_mines(
        cls, rows: int, cols: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with an explicit mine layout.

        Raises:
            ValueError: If a position is out of bounds or repeated.
        """
        positions = list(mines)
        board = cls(rows, cols, len(positions))
        if len(set(positions)) != len(positions):
            raise ValueError("Duplicate mine positions")
        for row, col in positions:
            if not board.in_bounds(row, col):
                raise ValueError(f"Mine position {(row, col)} out of bounds")
            board._grid[row][col].is_mine = True
        board.count_all_neighbors()
        return board

    def _place_mines(self, count: int, rng: random.Random) -> None:
        """Shuffle every position and mark the first `count` as mines."""
        positions = list(self.cells())
        rng.shuffle(positions)
        for cell in positions[:count]:
            cell.is_mine = True

    def count_all_neighbors(self) -> None:
        """Recompute neighbor mine counts for every cell."""
        for cell in self.cells():
            cell.neighbor_mines = self._count_neighbor_mines(cell.row, cell.col)

    def _count_neighbor_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(1 for neighbor in self.neighbors(row, col) if neighbor.is_mine)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Cell]:
        """
        Get in-bounds 8-connected neighbors.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of neighboring cells (fewer than 8 on the edges).
        """
        result = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.in_bounds(new_row, new_col):
                result.append(self._grid[new_row][new_col])
        return result

    def area(self, row: int, col: int) -> List[Cell]:
        """In-bounds 3x3 block centered on (row, col), center included."""
        cells = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                cell = self.get_cell(row + delta_row, col + delta_col)
                if cell is not None:
                    cells.append(cell)
        return cells

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # First Move Safety
    # ========================================================================

    def ensure_first_move_safe(self, cell: Cell) -> bool:
        """
        Move a mine away from the player's first target.

        The mine goes to the first non-mine cell in row-major order that is
        not the target itself. Neighbor counts are recomputed globally.

        Returns:
            True if a mine was relocated.
        """
        if not cell.is_mine:
            return False
        for target in self.cells():
            if not target.is_mine and target is not cell:
                cell.is_mine = False
                target.is_mine = True
                self.count_all_neighbors()
                logger.debug(
                    "Relocated first-move mine from %s to %s",
                    cell.position, target.position,
                )
                return True
        return False

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.rows * self.cols

    @property
    def safe_tiles(self) -> int:
        """Number of tiles without a mine."""
        return self.total_tiles - self.mine_count

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._grid:
            yield from row

    def mines(self) -> List[Cell]:
        """All cells holding a mine."""
        return [cell for cell in self.cells() if cell.is_mine]

    def hidden_safe_cells(self) -> List[Cell]:
        """Hidden, unflagged cells without a mine."""
        return [
            cell for cell in self.cells()
            if cell.is_hidden and not cell.is_mine
        ]

    def count_revealed_safe(self) -> int:
        """Count revealed cells that are not mines."""
        return sum(
            1 for cell in self.cells() if cell.is_revealed and not cell.is_mine
        )

    def count_flags(self) -> int:
        """Count flagged cells, defused mines included."""
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get visible board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = defused mine
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def mine_mask(self) -> np.ndarray:
        """Boolean array marking mine positions."""
        mask = np.zeros((self.rows, self.cols), dtype=bool)
        for cell in self.mines():
            mask[cell.row, cell.col] = True
        return mask


def generate_board(
    rows: int,
    cols: int,
    mine_rate: float,
    rng: Optional[random.Random] = None,
) -> Board:
    """Generate a random board for arbitrary dimensions."""
    return Board.generate(BoardConfig(rows, cols, mine_rate), rng)
