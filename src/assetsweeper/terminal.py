"""
Plain-text presentation layer.

Collects engine events and renders the board as text, one character per
tile, the way a terminal host displays it.
"""
from dataclasses import replace
from typing import List, Optional, Tuple

import numpy as np

from .cell import OBS_DEFUSED, OBS_FLAGGED, OBS_HIDDEN, OBS_MINE, VisualState
from .events import GameResult, GameView, HudState, format_time

SYMBOLS = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "!",
    OBS_DEFUSED: "#",
    OBS_MINE: "*",
    0: " ",
}
DETONATED_SYMBOL = "X"


def render_board(
    obs: np.ndarray,
    selection: Optional[Tuple[int, int]] = None,
    detonated: Optional[Tuple[int, int]] = None,
) -> str:
    """
    Render an observation grid as text.

    Args:
        obs: Board observation from Board.get_observation().
        selection: Cursor position, drawn in brackets.
        detonated: Mine that ended the game.

    Returns:
        Multi-line string with a column header and row labels.
    """
    rows, cols = obs.shape
    header = "    " + "".join(f"{col:>3}" for col in range(cols))
    lines = [header]
    for row in range(rows):
        row_str = f"{row:>3} "
        for col in range(cols):
            val = int(obs[row, col])
            if (row, col) == detonated:
                symbol = DETONATED_SYMBOL
            else:
                symbol = SYMBOLS.get(val, str(val))
            if (row, col) == selection:
                row_str += f"[{symbol}]"
            else:
                row_str += f" {symbol} "
        lines.append(row_str)
    return "\n".join(lines)


def render_hud(hud: HudState, active_power: Optional[str] = None) -> str:
    """One-line HUD summary."""
    charges = " ".join(f"{key}={value}" for key, value in hud.charges.items())
    line = (
        f"[{hud.difficulty_label}] mines left: {hud.mines_remaining} | "
        f"time: {format_time(hud.elapsed_seconds)} | {charges}"
    )
    if active_power:
        line += f" | armed: {active_power}"
    return line


def render_result(result: GameResult) -> str:
    """Win/loss banner."""
    if not result.won:
        return "*** Incident! A mine went off. Game over. ***"
    return (
        f"*** All assets secured! Time: {format_time(result.elapsed_seconds)}"
        f" · Flags used: {result.flags_used}"
        f" · Power-ups used: {result.powers_used} ***"
    )


class TerminalView(GameView):
    """Event sink for the text frontend."""

    def __init__(self) -> None:
        self.messages: List[str] = []
        self.hud: Optional[HudState] = None
        self.result: Optional[GameResult] = None
        self.active_power: Optional[str] = None
        self.selection: Tuple[int, int] = (0, 0)
        self.seconds = 0

    def cell_changed(
        self, row: int, col: int, visual: VisualState, number: int = 0
    ) -> None:
        """The board is re-read from the observation on every draw."""

    def hud_changed(self, hud: HudState) -> None:
        self.hud = hud
        self.seconds = hud.elapsed_seconds

    def timer_changed(self, seconds: int) -> None:
        self.seconds = seconds

    def game_over(self, result: GameResult) -> None:
        self.result = result

    def notice(self, message: str) -> None:
        self.messages.append(message)

    def active_power_changed(self, key: Optional[str]) -> None:
        self.active_power = key

    def selection_changed(self, row: int, col: int) -> None:
        self.selection = (row, col)

    def current_hud(self) -> Optional[HudState]:
        """Last HUD update with the clock brought up to date by timer ticks."""
        if self.hud is None:
            return None
        return replace(self.hud, elapsed_seconds=self.seconds)

    def drain_messages(self) -> List[str]:
        """Return and clear pending notices."""
        messages, self.messages = self.messages, []
        return messages

    def reset(self) -> None:
        """Forget everything from the previous game."""
        self.messages.clear()
        self.result = None
        self.active_power = None
