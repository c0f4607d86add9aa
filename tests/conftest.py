"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from assetsweeper import (
    Board,
    BoardConfig,
    Cell,
    DEFAULT_CHARGES,
    GameResult,
    GameSession,
    GameView,
    HudState,
    PowerKey,
    PowerState,
    PowerUpController,
    RevealEngine,
    VisualState,
)


# ============================================================================
# Recording View
# ============================================================================

class RecordingView(GameView):
    """View that keeps every event for assertions."""

    def __init__(self) -> None:
        self.cells: List[Tuple[int, int, VisualState, int]] = []
        self.huds: List[HudState] = []
        self.results: List[GameResult] = []
        self.notices: List[str] = []
        self.powers: List[Optional[str]] = []
        self.selections: List[Tuple[int, int]] = []
        self.ticks: List[int] = []

    def cell_changed(self, row, col, visual, number=0) -> None:
        self.cells.append((row, col, visual, number))

    def hud_changed(self, hud) -> None:
        self.huds.append(hud)

    def timer_changed(self, seconds) -> None:
        self.ticks.append(seconds)

    def game_over(self, result) -> None:
        self.results.append(result)

    def notice(self, message) -> None:
        self.notices.append(message)

    def active_power_changed(self, key) -> None:
        self.powers.append(key)

    def selection_changed(self, row, col) -> None:
        self.selections.append((row, col))

    def last_visual(self, row: int, col: int) -> Optional[VisualState]:
        for event_row, event_col, visual, _ in reversed(self.cells):
            if (event_row, event_col) == (row, col):
                return visual
        return None


def make_powers(**overrides: int) -> PowerState:
    """Standard charges with some replaced, e.g. make_powers(firewall=0)."""
    initial = dict(DEFAULT_CHARGES)
    for name, value in overrides.items():
        initial[PowerKey(name)] = value
    return PowerState(initial=initial)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def corner_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return Board.from_mines(3, 3, [(0, 0)])


@pytest.fixture
def two_mine_board() -> Board:
    """3x3 board with mines in opposite corners."""
    return Board.from_mines(3, 3, [(0, 0), (2, 2)])


@pytest.fixture
def tiny_board() -> Board:
    """2x2 board with one mine at (0, 0)."""
    return Board.from_mines(2, 2, [(0, 0)])


@pytest.fixture
def open_board() -> Board:
    """5x5 board with one mine in the bottom-right corner."""
    return Board.from_mines(5, 5, [(4, 4)])


@pytest.fixture
def scan_board() -> Board:
    """5x5 board with two mines inside the central 3x3 block."""
    return Board.from_mines(5, 5, [(1, 1), (3, 3)])


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def make_engine(view: RecordingView):
    """Factory building an engine around a board."""
    def _make(board: Board, **charges: int) -> RevealEngine:
        return RevealEngine(board, powers=make_powers(**charges), view=view)
    return _make


@pytest.fixture
def make_controller(make_engine, rng: random.Random):
    """Factory building a power-up controller around a board."""
    def _make(board: Board, **charges: int) -> PowerUpController:
        return PowerUpController(make_engine(board, **charges), rng)
    return _make


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session(view: RecordingView, rng: random.Random) -> GameSession:
    """Session that has not started a game yet."""
    return GameSession(view=view, rng=rng)


@pytest.fixture
def valid_config() -> BoardConfig:
    """A valid custom configuration."""
    return BoardConfig(9, 9, 1 / 8)


@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
