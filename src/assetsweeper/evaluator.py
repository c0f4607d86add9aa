"""
Win/loss evaluation.

Loss is decided at the moment a mine goes off, so only the win side
needs a board-wide check.
"""
from .board import Board


def all_safe_revealed(board: Board, revealed_safe: int) -> bool:
    """Check the revealed-safe counter covers every safe tile."""
    return revealed_safe >= board.safe_tiles


def flags_consistent(board: Board) -> bool:
    """Every mine flagged or revealed, and no safe cell flagged."""
    for cell in board.cells():
        if cell.is_mine:
            if not (cell.is_flagged or cell.is_revealed):
                return False
        elif cell.is_flagged:
            return False
    return True


def is_win(board: Board, revealed_safe: int) -> bool:
    """
    Decide whether the board is in a winning position.

    A flag on a safe cell blocks the win even when every mine is
    accounted for.

    Args:
        board: Board to inspect.
        revealed_safe: Running count of revealed non-mine cells.

    Returns:
        True if the game is won.
    """
    return all_safe_revealed(board, revealed_safe) and flags_consistent(board)
