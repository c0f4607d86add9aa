"""
View interface for AssetSweeper.

The engine never draws anything. It reports every state change to a
GameView supplied by whoever hosts the game (terminal, GUI, tests).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

from .cell import VisualState


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Event Payloads
# ============================================================================

@dataclass(frozen=True)
class GameResult:
    """
    Terminal report for a finished game.

    Attributes:
        won: True for a win, False for a loss.
        elapsed_seconds: Timer value when the game ended.
        flags_used: Flags on the board at the end (defused mines included).
        powers_used: Total charges spent across all power-ups.
    """

    won: bool
    elapsed_seconds: int = 0
    flags_used: int = 0
    powers_used: int = 0

    @property
    def state(self) -> GameState:
        return GameState.WON if self.won else GameState.LOST


@dataclass(frozen=True)
class HudState:
    """Heads-up display values."""

    mines_remaining: int
    elapsed_seconds: int
    charges: Dict[str, int] = field(default_factory=dict)
    difficulty_label: str = "-"


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


# ============================================================================
# View Interface
# ============================================================================

class GameView(ABC):
    """
    Abstract presentation layer.

    Only cell_changed is mandatory; the other hooks default to no-ops so
    simple hosts can ignore what they do not display.
    """

    @abstractmethod
    def cell_changed(
        self, row: int, col: int, visual: VisualState, number: int = 0
    ) -> None:
        """
        A cell needs redrawing.

        Args:
            row: Row index.
            col: Column index.
            visual: What to draw.
            number: Neighbor mine count, meaningful for NUMBER.
        """
        pass

    def hud_changed(self, hud: HudState) -> None:
        """Mine counter, timer or power-up charges changed."""
        pass

    def timer_changed(self, seconds: int) -> None:
        """One second elapsed."""
        pass

    def game_over(self, result: GameResult) -> None:
        """The game reached a terminal state."""
        pass

    def notice(self, message: str) -> None:
        """Short informational message (toast)."""
        pass

    def active_power_changed(self, key: Optional[str]) -> None:
        """The selected power-up changed (None = nothing selected)."""
        pass

    def selection_changed(self, row: int, col: int) -> None:
        """The keyboard cursor moved."""
        pass


class NullView(GameView):
    """View that ignores every event."""

    def cell_changed(
        self, row: int, col: int, visual: VisualState, number: int = 0
    ) -> None:
        pass
