"""
Undo log for AssetSweeper.

Every logical action records one batch of per-cell snapshots taken before
the cell was touched. Restoring a whole batch puts the board back exactly
as it was, whatever order the entries are applied in.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .cell import Cell, CellSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UndoEntry:
    """Prior state of one mutated cell."""

    row: int
    col: int
    snapshot: CellSnapshot

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col


@dataclass
class Batch:
    """All cell mutations produced by one logical action."""

    entries: List[UndoEntry] = field(default_factory=list)

    def record(self, cell: Cell) -> None:
        """Snapshot a cell before it is mutated."""
        self.entries.append(UndoEntry(cell.row, cell.col, cell.snapshot()))

    def discard_last(self) -> Optional[UndoEntry]:
        """Drop the most recent entry (a mutation that was reverted)."""
        if not self.entries:
            return None
        return self.entries.pop()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[UndoEntry]:
        return iter(self.entries)


class UndoLog:
    """Stack of batches, newest last."""

    def __init__(self) -> None:
        self._stack: List[Batch] = []

    def push(self, batch: Batch) -> bool:
        """
        Store a batch.

        Returns:
            False (and stores nothing) if the batch is empty.
        """
        if not len(batch):
            return False
        self._stack.append(batch)
        logger.debug("Undo log push: %d cell(s), depth %d", len(batch), len(self._stack))
        return True

    def pop(self) -> Optional[Batch]:
        """Remove and return the newest batch, or None if empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> Optional[Batch]:
        return self._stack[-1] if self._stack else None

    def clear(self) -> None:
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
