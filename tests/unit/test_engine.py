"""
Unit tests for RevealEngine.

Tests single reveals, flood cascade, first-move safety, mine hits with
and without a firewall charge, flagging and end-of-game reporting.
"""
import pytest
from assetsweeper import Batch, Board, GameState, PowerKey, VisualState


# ============================================================================
# Reveal Tests
# ============================================================================

class TestRevealTile:
    """Test single-cell reveals."""

    def test_reveal_numbered_cell(self, make_engine, corner_board: Board, view) -> None:
        """A numbered cell is revealed alone."""
        engine = make_engine(corner_board)
        assert engine.reveal_tile(0, 1) is True

        revealed = [cell.position for cell in corner_board.cells() if cell.is_revealed]
        assert revealed == [(0, 1)]
        assert engine.revealed_safe == 1
        assert len(engine.undo_log) == 1
        assert view.last_visual(0, 1) == VisualState.NUMBER

    def test_reveal_out_of_bounds_is_noop(self, make_engine, corner_board: Board) -> None:
        """Out-of-range coordinates never raise."""
        engine = make_engine(corner_board)
        assert engine.reveal_tile(-1, 0) is False
        assert engine.reveal_tile(0, 100) is False
        assert len(engine.undo_log) == 0
        assert engine.first_move is True

    def test_reveal_same_cell_twice(self, make_engine, corner_board: Board) -> None:
        """Second reveal of a cell is rejected and logs nothing."""
        engine = make_engine(corner_board)
        engine.reveal_tile(0, 1)
        assert engine.reveal_tile(0, 1) is False
        assert len(engine.undo_log) == 1

    def test_reveal_flagged_cell(self, make_engine, corner_board: Board) -> None:
        """Flagged cells cannot be revealed."""
        engine = make_engine(corner_board)
        engine.toggle_flag(0, 1)
        assert engine.reveal_tile(0, 1) is False
        assert corner_board.get_cell(0, 1).is_flagged is True


# ============================================================================
# First Move Tests
# ============================================================================

class TestFirstMove:
    """Test that the first reveal never detonates."""

    def test_first_click_on_mine_is_safe(self, make_engine, corner_board: Board) -> None:
        """The mine under the first click is moved away."""
        engine = make_engine(corner_board, firewall=0)
        assert engine.reveal_tile(0, 0) is True

        assert engine.is_playing is True
        assert engine.first_move is False
        assert corner_board.get_cell(0, 0).is_mine is False
        assert corner_board.get_cell(0, 0).is_revealed is True
        assert corner_board.get_cell(0, 1).is_mine is True
        assert len(corner_board.mines()) == 1
        assert engine.powers.remaining(PowerKey.FIREWALL) == 0

    def test_second_click_on_mine_loses(self, make_engine, corner_board: Board) -> None:
        """Only the first reveal gets the relocation."""
        engine = make_engine(corner_board, firewall=0)
        engine.reveal_tile(1, 1)
        assert engine.reveal_tile(0, 0) is False
        assert engine.is_lost is True


# ============================================================================
# Cascade Reveal Tests
# ============================================================================

class TestFloodReveal:
    """Test zero-neighbor cascade behavior."""

    def test_cascade_reveals_all_safe_cells(self, make_engine, corner_board: Board) -> None:
        """A connected zero region opens every safe cell."""
        engine = make_engine(corner_board)
        engine.reveal_tile(2, 2)

        for cell in corner_board.cells():
            assert cell.is_revealed is (not cell.is_mine)
        assert engine.revealed_safe == 8
        assert len(engine.undo_log) == 1
        assert len(engine.undo_log.peek()) == 8

    def test_cascade_stops_at_numbered_cells(
        self, make_engine, two_mine_board: Board
    ) -> None:
        """Numbered cells are revealed but do not propagate."""
        engine = make_engine(two_mine_board)
        engine.reveal_tile(0, 2)

        revealed = {cell.position for cell in two_mine_board.cells() if cell.is_revealed}
        assert revealed == {(0, 2), (0, 1), (1, 1), (1, 2)}
        assert two_mine_board.get_cell(2, 0).is_hidden is True
        assert engine.revealed_safe == 4

    def test_cascade_skips_flagged_cells(self, make_engine, open_board: Board) -> None:
        """Flagged cells are left alone by the cascade."""
        engine = make_engine(open_board)
        engine.toggle_flag(0, 0)
        engine.reveal_tile(2, 2)

        assert open_board.get_cell(0, 0).is_flagged is True
        assert open_board.get_cell(4, 4).is_hidden is True
        assert engine.revealed_safe == 23
        assert engine.is_playing is True

    def test_cascade_never_reveals_mines(self, make_engine, two_mine_board: Board) -> None:
        engine = make_engine(two_mine_board)
        engine.reveal_tile(0, 2)
        assert all(cell.is_hidden for cell in two_mine_board.mines())

    def test_flood_is_idempotent(self, make_engine, two_mine_board: Board) -> None:
        """Re-running a finished cascade changes nothing."""
        engine = make_engine(two_mine_board)
        engine.reveal_tile(0, 2)
        before = [cell.snapshot() for cell in two_mine_board.cells()]

        batch = Batch()
        assert engine.flood_reveal(two_mine_board.get_cell(0, 2), batch) == 0
        assert len(batch) == 0
        assert [cell.snapshot() for cell in two_mine_board.cells()] == before
        assert engine.revealed_safe == 4


# ============================================================================
# Mine Hit Tests
# ============================================================================

class TestMineHit:
    """Test mine resolution with and without a firewall charge."""

    def test_mine_without_firewall_loses(
        self, make_engine, two_mine_board: Board, view
    ) -> None:
        """A mine with no firewall ends the game and shows every mine."""
        engine = make_engine(two_mine_board, firewall=0)
        engine.reveal_tile(0, 2)

        assert engine.reveal_tile(0, 0) is False
        assert engine.game_state == GameState.LOST
        assert all(cell.is_revealed for cell in two_mine_board.mines())
        assert view.last_visual(0, 0) == VisualState.DETONATED
        assert view.last_visual(2, 2) == VisualState.MINE
        assert len(view.results) == 1
        assert view.results[0].won is False

    def test_mine_with_firewall_is_defused(
        self, make_engine, two_mine_board: Board, view
    ) -> None:
        """A firewall charge turns the hit into a defused flag."""
        engine = make_engine(two_mine_board, firewall=1)
        engine.reveal_tile(0, 2)

        assert engine.reveal_tile(0, 0) is True
        cell = two_mine_board.get_cell(0, 0)
        assert engine.is_playing is True
        assert cell.is_flagged is True
        assert cell.defused is True
        assert engine.flag_count == 1
        assert engine.revealed_safe == 4
        assert engine.powers.remaining(PowerKey.FIREWALL) == 0
        assert view.last_visual(0, 0) == VisualState.DEFUSED
        assert any("Firewall" in message for message in view.notices)

    def test_firewall_only_blocks_once(self, make_engine, two_mine_board: Board) -> None:
        """The second mine hit after the charge is spent is fatal."""
        engine = make_engine(two_mine_board, firewall=1)
        engine.reveal_tile(0, 2)
        engine.reveal_tile(0, 0)
        assert engine.reveal_tile(2, 2) is False
        assert engine.is_lost is True

    def test_flagged_mines_stay_flagged_on_loss(
        self, make_engine, two_mine_board: Board
    ) -> None:
        engine = make_engine(two_mine_board, firewall=0)
        engine.reveal_tile(0, 2)
        engine.toggle_flag(2, 2)
        engine.reveal_tile(0, 0)
        assert two_mine_board.get_cell(2, 2).is_flagged is True

    def test_loss_stops_timer(self, make_engine, two_mine_board: Board) -> None:
        """Elapsed time is frozen at the moment of the loss."""
        engine = make_engine(two_mine_board, firewall=0)
        engine.timer.start()
        engine.reveal_tile(0, 2)
        for _ in range(3):
            engine.timer.tick()
        engine.reveal_tile(0, 0)

        assert engine.result.elapsed_seconds == 3
        assert engine.timer.tick() is False

    def test_no_mutation_after_loss(self, make_engine, two_mine_board: Board) -> None:
        """Terminal state rejects every further action."""
        engine = make_engine(two_mine_board, firewall=0)
        engine.reveal_tile(0, 2)
        engine.reveal_tile(0, 0)
        before = [cell.snapshot() for cell in two_mine_board.cells()]

        assert engine.reveal_tile(2, 0) is False
        assert engine.toggle_flag(1, 0) is False
        assert [cell.snapshot() for cell in two_mine_board.cells()] == before


# ============================================================================
# Flag Tests
# ============================================================================

class TestToggleFlag:
    """Test flagging behavior."""

    def test_flag_updates_counter_and_hud(
        self, make_engine, corner_board: Board, view
    ) -> None:
        engine = make_engine(corner_board)
        assert engine.toggle_flag(1, 1) is True
        assert engine.flag_count == 1
        assert engine.mines_remaining == 0
        assert view.huds[-1].mines_remaining == 0

    def test_unflag_restores_counter(self, make_engine, corner_board: Board) -> None:
        engine = make_engine(corner_board)
        engine.toggle_flag(1, 1)
        engine.toggle_flag(1, 1)
        assert engine.flag_count == 0
        assert corner_board.get_cell(1, 1).is_hidden is True

    def test_mines_remaining_never_negative(self, make_engine, corner_board: Board) -> None:
        engine = make_engine(corner_board)
        engine.toggle_flag(1, 1)
        engine.toggle_flag(2, 2)
        assert engine.mines_remaining == 0

    def test_flag_is_undo_logged(self, make_engine, corner_board: Board) -> None:
        engine = make_engine(corner_board)
        engine.toggle_flag(1, 1)
        assert len(engine.undo_log) == 1

    def test_flag_revealed_cell_fails(self, make_engine, corner_board: Board) -> None:
        engine = make_engine(corner_board)
        engine.reveal_tile(0, 1)
        assert engine.toggle_flag(0, 1) is False
        assert engine.flag_count == 0

    def test_flag_out_of_bounds_fails(self, make_engine, corner_board: Board) -> None:
        engine = make_engine(corner_board)
        assert engine.toggle_flag(5, 5) is False

    def test_defused_cell_cannot_be_unflagged(
        self, make_engine, two_mine_board: Board
    ) -> None:
        engine = make_engine(two_mine_board, firewall=1)
        engine.reveal_tile(0, 2)
        engine.reveal_tile(0, 0)
        assert engine.toggle_flag(0, 0) is False
        assert engine.flag_count == 1


# ============================================================================
# Win Tests
# ============================================================================

class TestWin:
    """Test win detection and reporting."""

    def test_reveal_safe_then_flag_mine_wins(
        self, make_engine, tiny_board: Board, view
    ) -> None:
        """Clearing the board and flagging the mine wins."""
        engine = make_engine(tiny_board)
        for position in [(0, 1), (1, 0), (1, 1)]:
            engine.reveal_tile(*position)
        assert engine.is_playing is True

        engine.toggle_flag(0, 0)
        assert engine.is_won is True
        assert view.results[-1].won is True
        assert view.results[-1].flags_used == 1
        assert view.results[-1].powers_used == 0

    def test_flag_mine_then_reveal_wins(self, make_engine, tiny_board: Board) -> None:
        engine = make_engine(tiny_board)
        engine.toggle_flag(0, 0)
        for position in [(0, 1), (1, 0), (1, 1)]:
            engine.reveal_tile(*position)
        assert engine.is_won is True

    def test_defused_mine_counts_as_flagged(
        self, make_engine, tiny_board: Board
    ) -> None:
        """A firewall-contained mine satisfies the win condition."""
        engine = make_engine(tiny_board, firewall=1)
        for position in [(0, 1), (1, 0)]:
            engine.reveal_tile(*position)
        engine.reveal_tile(0, 0)
        engine.reveal_tile(1, 1)
        assert engine.is_won is True
        assert engine.result.powers_used == 1

    def test_flag_on_safe_cell_blocks_win(self, make_engine, tiny_board: Board) -> None:
        """A misplaced flag keeps the game going."""
        engine = make_engine(tiny_board)
        engine.toggle_flag(0, 0)
        engine.toggle_flag(1, 1)
        engine.reveal_tile(0, 1)
        engine.reveal_tile(1, 0)
        assert engine.is_playing is True

        engine.toggle_flag(1, 1)
        engine.reveal_tile(1, 1)
        assert engine.is_won is True

    def test_no_mutation_after_win(self, make_engine, tiny_board: Board) -> None:
        engine = make_engine(tiny_board)
        engine.toggle_flag(0, 0)
        for position in [(0, 1), (1, 0), (1, 1)]:
            engine.reveal_tile(*position)
        assert engine.toggle_flag(0, 0) is False
        assert engine.check_win_condition() is False


# ============================================================================
# Redraw Tests
# ============================================================================

class TestRedraw:
    """Test re-emitting state for a fresh layout."""

    def test_redraw_emits_every_cell(self, make_engine, corner_board: Board, view) -> None:
        engine = make_engine(corner_board)
        engine.reveal_tile(0, 1)
        view.cells.clear()

        engine.redraw()
        assert len(view.cells) == 9
        assert view.last_visual(0, 1) == VisualState.NUMBER
        assert view.last_visual(2, 2) == VisualState.HIDDEN

    @pytest.mark.parametrize("position", [(0, 0), (2, 2)])
    def test_redraw_keeps_detonated_marker(
        self, make_engine, two_mine_board: Board, view, position
    ) -> None:
        engine = make_engine(two_mine_board, firewall=0)
        engine.reveal_tile(0, 2)
        engine.reveal_tile(*position)
        engine.redraw()
        assert view.last_visual(*position) == VisualState.DETONATED
