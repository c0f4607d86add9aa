"""
Reveal engine for AssetSweeper.

Owns the mutable game state that sits on top of a Board: revealed/flag
counters, first-move bookkeeping, the terminal state, and the undo batches
produced by every action.
"""
import logging
from collections import deque
from typing import Optional, Set, Tuple

from .board import Board
from .cell import Cell, CellState, VisualState
from .evaluator import is_win
from .events import GameResult, GameState, GameView, HudState, NullView
from .powers import PowerKey, PowerState
from .timers import SessionTimer
from .undo import Batch, UndoLog

logger = logging.getLogger(__name__)


class RevealEngine:
    """
    Reveal, flood-fill, flag and end-of-game logic.

    Every invalid request (out of bounds, cell already revealed or flagged,
    game already over) is a silent no-op that returns False.
    """

    def __init__(
        self,
        board: Board,
        powers: Optional[PowerState] = None,
        undo_log: Optional[UndoLog] = None,
        view: Optional[GameView] = None,
        timer: Optional[SessionTimer] = None,
        difficulty_label: str = "-",
    ) -> None:
        """
        Initialize the engine.

        Args:
            board: Freshly generated board.
            powers: Power-up charges (default: standard charges).
            undo_log: Undo stack (default: empty).
            view: Presentation layer to notify (default: NullView).
            timer: Session timer, stopped when the game ends.
            difficulty_label: Label shown in the HUD.
        """
        self.board = board
        self.powers = powers if powers is not None else PowerState()
        self.undo_log = undo_log if undo_log is not None else UndoLog()
        self.view = view if view is not None else NullView()
        self.timer = timer if timer is not None else SessionTimer()
        self.difficulty_label = difficulty_label

        self.first_move = True
        self.revealed_safe = 0
        self.flag_count = 0
        self.game_state = GameState.PLAYING
        self.result: Optional[GameResult] = None
        self.detonated: Optional[Tuple[int, int]] = None

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.game_state == GameState.LOST

    @property
    def mines_remaining(self) -> int:
        """Mine counter shown to the player (never negative)."""
        return max(0, self.board.mine_count - self.flag_count)

    def hud(self) -> HudState:
        """Current HUD values."""
        return HudState(
            mines_remaining=self.mines_remaining,
            elapsed_seconds=self.timer.seconds,
            charges=self.powers.as_dict(),
            difficulty_label=self.difficulty_label,
        )

    # ========================================================================
    # Reveal (High-level)
    # ========================================================================

    def reveal_tile(
        self,
        row: int,
        col: int,
        bypass_mine: bool = False,
        from_power: bool = False,
        batch: Optional[Batch] = None,
    ) -> bool:
        """
        Reveal the cell at (row, col).

        On the first reveal of the session a mine under the target is moved
        elsewhere. Without a shared batch the mutations are pushed to the
        undo log as one entry.

        Args:
            row: Row index.
            col: Column index.
            bypass_mine: Leave mines hidden instead of resolving them.
            from_power: Caller runs the win check itself.
            batch: Shared batch for multi-cell power-ups.

        Returns:
            True on a successful reveal, False if rejected or a mine went off.
        """
        if not self.is_playing:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None or not cell.is_hidden:
            return False

        if self.first_move:
            if self.board.ensure_first_move_safe(cell):
                logger.info("First move landed on a mine; relocated it")
            self.first_move = False

        own_batch = batch is None
        if own_batch:
            batch = Batch()
        success = self.perform_reveal(cell, batch, bypass_mine=bypass_mine)
        if own_batch:
            self.undo_log.push(batch)

        if not from_power:
            self.check_win_condition()
        return success

    def perform_reveal(
        self, cell: Cell, batch: Batch, bypass_mine: bool = False
    ) -> bool:
        """
        Reveal one cell and resolve the consequences.

        Mines are resolved in order: scanner bypass, firewall defuse, loss.
        Safe cells with no neighboring mines start a flood reveal.

        Returns:
            False only when a mine went off and the game was lost.
        """
        if not cell.is_hidden:
            return True
        batch.record(cell)
        cell.reveal()

        if cell.is_mine:
            if bypass_mine:
                cell.restore(batch.discard_last().snapshot)
                return True
            if self.powers.consume(PowerKey.FIREWALL):
                self._defuse(cell)
                return True
            self.reveal_all_mines(cell)
            self.end_game(False)
            return False

        self.revealed_safe += 1
        self._emit_cell(cell)
        if cell.neighbor_mines == 0:
            self.flood_reveal(cell, batch)
        return True

    def flood_reveal(self, origin: Cell, batch: Batch) -> int:
        """
        Breadth-first cascade from a zero-neighbor cell.

        Numbered cells are revealed but do not propagate. Mines and flagged
        cells are never queued.

        Returns:
            Number of cells newly revealed by the cascade.
        """
        queue = deque([origin])
        visited: Set[Tuple[int, int]] = set()
        revealed = 0
        while queue:
            current = queue.popleft()
            if current.position in visited:
                continue
            visited.add(current.position)

            if current.is_hidden:
                batch.record(current)
                current.reveal()
                self.revealed_safe += 1
                revealed += 1
                self._emit_cell(current)

            if current.neighbor_mines > 0:
                continue
            for neighbor in self.board.neighbors(current.row, current.col):
                if neighbor.is_hidden and not neighbor.is_mine:
                    queue.append(neighbor)
        return revealed

    def _defuse(self, cell: Cell) -> None:
        """Firewall contains the mine: flagged, never counted as revealed."""
        cell.defuse()
        self.flag_count += 1
        logger.debug("Firewall defused mine at %s", cell.position)
        self._emit_cell(cell)
        self.view.notice("Firewall contained the incident.")
        self.view.hud_changed(self.hud())

    def reveal_all_mines(self, triggered: Cell) -> None:
        """Show every unflagged mine; the triggering one as detonated."""
        self.detonated = triggered.position
        for cell in self.board.mines():
            if cell.is_flagged:
                continue
            cell.state = CellState.REVEALED
            self._emit_cell(cell)

    # ========================================================================
    # Flags
    # ========================================================================

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Flag or unflag a hidden cell.

        The toggle is recorded as its own undo batch and can complete a win.

        Returns:
            True if the flag changed.
        """
        if not self.is_playing:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None or cell.is_revealed or cell.defused:
            return False

        batch = Batch()
        batch.record(cell)
        cell.toggle_flag()
        self.flag_count += 1 if cell.is_flagged else -1
        self.undo_log.push(batch)

        self._emit_cell(cell)
        self.view.hud_changed(self.hud())
        self.check_win_condition()
        return True

    # ========================================================================
    # Undo Support
    # ========================================================================

    def restore_batch(self, batch: Batch) -> None:
        """Put every cell of a batch back and rescan the counters."""
        for entry in batch:
            cell = self.board.get_cell(entry.row, entry.col)
            cell.restore(entry.snapshot)
            self._emit_cell(cell)
        self.recompute_counters()

    def recompute_counters(self) -> None:
        """Rebuild revealed-safe and flag counters from the board."""
        self.revealed_safe = self.board.count_revealed_safe()
        self.flag_count = self.board.count_flags()

    # ========================================================================
    # End of Game
    # ========================================================================

    def check_win_condition(self) -> bool:
        """
        End the game as a win if the board is cleared.

        Returns:
            True if this call ended the game.
        """
        if not self.is_playing:
            return False
        if not is_win(self.board, self.revealed_safe):
            return False
        self.end_game(True)
        return True

    def end_game(self, won: bool) -> GameResult:
        """Stop the timer, freeze the board and report the result."""
        self.timer.stop()
        self.game_state = GameState.WON if won else GameState.LOST
        self.result = GameResult(
            won=won,
            elapsed_seconds=self.timer.seconds,
            flags_used=self.flag_count,
            powers_used=self.powers.used(),
        )
        logger.info(
            "Game %s after %ds (flags=%d, power-ups=%d)",
            "won" if won else "lost",
            self.result.elapsed_seconds,
            self.result.flags_used,
            self.result.powers_used,
        )
        self.view.game_over(self.result)
        return self.result

    # ========================================================================
    # View Helpers
    # ========================================================================

    def visual_for(self, cell: Cell) -> VisualState:
        """Visual state of a cell, marking the mine that ended the game."""
        if cell.position == self.detonated:
            return VisualState.DETONATED
        return cell.visual

    def _emit_cell(self, cell: Cell) -> None:
        self.view.cell_changed(
            cell.row, cell.col, self.visual_for(cell), cell.neighbor_mines
        )

    def redraw(self) -> None:
        """Re-emit every cell and the HUD without touching state."""
        for cell in self.board.cells():
            self._emit_cell(cell)
        self.view.hud_changed(self.hud())
