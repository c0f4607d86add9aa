"""
AssetSweeper game module.

Provides the board/game-state engine for an IT-themed Minesweeper with
power-ups: board generation, reveal engine, power-ups, undo log and the
session that ties them to a presentation layer.
"""
from .cell import Cell, CellSnapshot, CellState, VisualState
from .board import (
    Board,
    BoardConfig,
    DIFFICULTIES,
    EASY,
    MEDIUM,
    HARD,
    generate_board,
    get_difficulty,
)
from .config import GameSettings
from .engine import RevealEngine
from .evaluator import is_win
from .events import GameResult, GameState, GameView, HudState, NullView
from .powers import DEFAULT_CHARGES, PowerKey, PowerState
from .powerups import PowerUpController
from .session import GameSession
from .timers import LongPressTimer, SessionTimer
from .undo import Batch, UndoEntry, UndoLog

__all__ = [
    "Cell",
    "CellSnapshot",
    "CellState",
    "VisualState",
    "Board",
    "BoardConfig",
    "DIFFICULTIES",
    "EASY",
    "MEDIUM",
    "HARD",
    "generate_board",
    "get_difficulty",
    "GameSettings",
    "RevealEngine",
    "is_win",
    "GameResult",
    "GameState",
    "GameView",
    "HudState",
    "NullView",
    "DEFAULT_CHARGES",
    "PowerKey",
    "PowerState",
    "PowerUpController",
    "GameSession",
    "LongPressTimer",
    "SessionTimer",
    "Batch",
    "UndoEntry",
    "UndoLog",
]
