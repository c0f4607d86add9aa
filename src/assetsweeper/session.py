"""
Game session for AssetSweeper.

Wires a board, the reveal engine, the power-up controller, timers and the
keyboard cursor together behind the input API a presentation layer calls.
"""
import logging
import random
from typing import Optional, Tuple, Union

from .board import Board, BoardConfig, get_difficulty
from .config import GameSettings
from .controls import Cursor, KeyAction, action_for_key
from .engine import RevealEngine
from .events import GameResult, GameState, GameView, HudState, NullView
from .powers import PowerKey, PowerState
from .powerups import PowerUpController
from .timers import LongPressTimer, SessionTimer
from .undo import UndoLog

logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's game, from difficulty selection to win or loss.

    All input methods are safe to call at any time: before start() or
    after the game ended they do nothing and return False.
    """

    def __init__(
        self,
        view: Optional[GameView] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[GameSettings] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            view: Presentation layer to notify (default: NullView).
            rng: Random source for mine placement and the network power-up.
            settings: Session settings (default: GameSettings()).
        """
        self.view = view if view is not None else NullView()
        self.rng = rng or random.Random()
        self.settings = settings or GameSettings()

        self.difficulty: Optional[str] = None
        self.config: Optional[BoardConfig] = None
        self.engine: Optional[RevealEngine] = None
        self.powerups: Optional[PowerUpController] = None
        self.cursor = Cursor()
        self.timer = SessionTimer(on_tick=self._on_tick)
        self.long_press = LongPressTimer(
            self._on_long_press, delay=self.settings.long_press_seconds
        )

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start(
        self,
        difficulty: Optional[str] = None,
        board: Optional[Board] = None,
        now: Optional[float] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            difficulty: Preset key ("easy", "medium", "hard").
            board: Prebuilt board to play instead of a random one.
            now: Host clock reading, for timer catch-up.
        """
        self.difficulty = difficulty or self.settings.default_difficulty
        self.config = get_difficulty(self.difficulty)
        if board is None:
            board = Board.generate(self.config, self.rng)

        self.long_press.cancel()
        self.timer.start(now)
        self.cursor = Cursor()
        self.engine = RevealEngine(
            board,
            powers=PowerState(initial=dict(self.settings.initial_charges)),
            undo_log=UndoLog(),
            view=self.view,
            timer=self.timer,
            difficulty_label=self.config.label,
        )
        self.powerups = PowerUpController(self.engine, self.rng)
        logger.info(
            "Started %s game: %dx%d with %d mines",
            self.config.label, board.rows, board.cols, board.mine_count,
        )
        self.relayout()

    def reset(self, now: Optional[float] = None) -> None:
        """Start a fresh game with the same difficulty."""
        self.start(self.difficulty, now=now)

    def relayout(self) -> None:
        """Re-emit the whole board state (e.g. after a resize)."""
        if self.engine is None:
            return
        self.engine.redraw()
        self.view.active_power_changed(
            self.active_power.value if self.active_power else None
        )
        self.view.selection_changed(*self.cursor.position)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Optional[Board]:
        return self.engine.board if self.engine else None

    @property
    def powers(self) -> Optional[PowerState]:
        return self.engine.powers if self.engine else None

    @property
    def state(self) -> Optional[GameState]:
        return self.engine.game_state if self.engine else None

    @property
    def result(self) -> Optional[GameResult]:
        return self.engine.result if self.engine else None

    @property
    def is_playing(self) -> bool:
        return self.engine is not None and self.engine.is_playing

    @property
    def active_power(self) -> Optional[PowerKey]:
        return self.powerups.active_power if self.powerups else None

    @property
    def selection(self) -> Tuple[int, int]:
        return self.cursor.position

    def hud(self) -> Optional[HudState]:
        return self.engine.hud() if self.engine else None

    # ========================================================================
    # Input
    # ========================================================================

    def request_reveal(self, row: int, col: int) -> bool:
        """Reveal a tile, or scan around it if the scanner is selected."""
        if not self.is_playing:
            return False
        return self.powerups.handle_reveal_request(row, col)

    def request_flag_toggle(self, row: int, col: int) -> bool:
        """Flag or unflag a tile."""
        if not self.is_playing:
            return False
        return self.engine.toggle_flag(row, col)

    def activate_power(self, key: Union[str, PowerKey]) -> bool:
        """Press a power-up button."""
        if not self.is_playing:
            return False
        return self.powerups.set_active_power(key)

    def request_undo(self) -> bool:
        """Undo the last action (spends an undo charge)."""
        if not self.is_playing:
            return False
        return self.powerups.use_undo()

    def handle_key(self, key: str) -> bool:
        """
        Handle a key press.

        Arrow keys move the cursor, space/Enter reveal at the cursor and
        f flags at the cursor.

        Returns:
            True if the key did something.
        """
        if not self.is_playing:
            return False
        action = action_for_key(key)
        if action is None:
            return False
        if action == KeyAction.CONFIRM:
            return self.request_reveal(*self.cursor.position)
        if action == KeyAction.FLAG:
            return self.request_flag_toggle(*self.cursor.position)

        board = self.engine.board
        moved = self.cursor.move(action, board.rows, board.cols)
        if moved:
            self.view.selection_changed(*self.cursor.position)
        return moved

    # ========================================================================
    # Pointer Input
    # ========================================================================

    def pointer_down(
        self, row: int, col: int, now: float, right_button: bool = False
    ) -> bool:
        """Right button flags at once; left starts a long press."""
        if not self.is_playing:
            return False
        if right_button:
            return self.request_flag_toggle(row, col)
        self.long_press.press(row, col, now)
        return True

    def pointer_up(self, row: int, col: int, now: float) -> bool:
        """A release before the long-press delay counts as a reveal."""
        if not self.long_press.release(now):
            return False
        return self.request_reveal(row, col)

    def pointer_leave(self) -> None:
        """Pointer left the tile: abandon the pending press."""
        self.long_press.cancel()

    def poll(self, now: float) -> None:
        """Fire due timers."""
        self.long_press.poll(now)
        self.timer.catch_up(now)

    def tick(self) -> bool:
        """Advance the game clock by one second."""
        return self.timer.tick()

    def _on_long_press(self, row: int, col: int) -> None:
        self.request_flag_toggle(row, col)

    def _on_tick(self, seconds: int) -> None:
        self.view.timer_changed(seconds)
