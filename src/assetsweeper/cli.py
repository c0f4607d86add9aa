"""
AssetSweeper - terminal entry point.

Usage:
    assetsweeper [--difficulty {easy,medium,hard}] [--seed N] [--verbose]

Commands at the prompt:
    r ROW COL       reveal (or scan, when the scanner is armed)
    f ROW COL       toggle a flag
    p POWER         press a power-up (firewall, scanner, network, undo)
    u               undo
    up/down/left/right, enter, f
                    keyboard cursor
    n               new game
    q               quit
"""
import argparse
import logging
import random
import sys
import time
from typing import Callable, Iterable, List, Optional, TextIO, Tuple

from .board import DIFFICULTIES
from .session import GameSession
from .terminal import TerminalView, render_board, render_hud, render_result

logger = logging.getLogger(__name__)

KEY_WORDS = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "enter": "Enter",
    "space": " ",
}


# ============================================================================
# Command Parsing
# ============================================================================

def parse_command(line: str) -> Optional[Tuple[str, List[str]]]:
    """
    Split a prompt line into a command name and its arguments.

    Returns:
        None for blank lines.
    """
    parts = line.strip().split()
    if not parts:
        return None
    return parts[0].lower(), parts[1:]


def _coords(args: List[str]) -> Optional[Tuple[int, int]]:
    if len(args) != 2:
        return None
    try:
        return int(args[0]), int(args[1])
    except ValueError:
        return None


def execute(
    session: GameSession,
    name: str,
    args: List[str],
    now: Optional[float] = None,
) -> bool:
    """
    Apply one command to the session.

    Returns:
        True if the command was understood, even if the game ignored it.
    """
    logger.debug("Command %s %s", name, args)
    if name in ("r", "reveal", "f", "flag") and args:
        coords = _coords(args)
        if coords is None:
            return False
        if name in ("r", "reveal"):
            session.request_reveal(*coords)
        else:
            session.request_flag_toggle(*coords)
        return True
    if name == "f":
        session.handle_key("f")
        return True
    if name in ("p", "power") and len(args) == 1:
        try:
            session.activate_power(args[0])
        except ValueError:
            return False
        return True
    if name in ("u", "undo"):
        session.request_undo()
        return True
    if name in KEY_WORDS:
        session.handle_key(KEY_WORDS[name])
        return True
    if name in ("n", "new"):
        session.reset(now=now)
        return True
    return False


# ============================================================================
# Main Loop
# ============================================================================

def draw(session: GameSession, view: TerminalView, out: TextIO) -> None:
    """Print the board, HUD and pending notices."""
    engine = session.engine
    print(render_hud(view.current_hud(), view.active_power), file=out)
    print(
        render_board(
            engine.board.get_observation(),
            selection=view.selection,
            detonated=engine.detonated,
        ),
        file=out,
    )
    for message in view.drain_messages():
        print(f"> {message}", file=out)
    if view.result is not None:
        print(render_result(view.result), file=out)


def run(
    session: GameSession,
    view: TerminalView,
    lines: Iterable[str],
    out: TextIO = sys.stdout,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """
    Drive a started session from an iterable of command lines.

    Stops at "q" or when the input runs out.
    """
    draw(session, view, out)
    for line in lines:
        now = clock()
        session.poll(now)
        parsed = parse_command(line)
        if parsed is None:
            continue
        name, args = parsed
        if name in ("q", "quit"):
            break
        if name in ("n", "new"):
            view.reset()
        if not execute(session, name, args, now):
            print(f"Unknown command: {line.strip()}", file=out)
            continue
        draw(session, view, out)


def _prompt_lines() -> Iterable[str]:
    while True:
        try:
            yield input("assetsweeper> ")
        except EOFError:
            return


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and play in the terminal."""
    parser = argparse.ArgumentParser(
        description="AssetSweeper - IT-themed Minesweeper in the terminal"
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="easy",
        help="Board size and mine density",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    view = TerminalView()
    session = GameSession(view=view, rng=random.Random(args.seed))
    session.start(args.difficulty, now=time.monotonic())
    run(session, view, _prompt_lines())


if __name__ == "__main__":
    main()
