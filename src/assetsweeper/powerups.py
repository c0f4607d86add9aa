"""
Power-up controller for AssetSweeper.

Four power-ups sit on top of the reveal engine:

- firewall: passive, consumed by the engine when a mine would go off
- scanner:  reveals a 3x3 block without ever exposing a mine
- network:  reveals a random safe cell (and its cascade) immediately
- undo:     rolls back the most recent batch
"""
import logging
import random
from typing import Optional, Union

from .engine import RevealEngine
from .powers import PowerKey, PowerState, parse_power_key
from .undo import Batch

logger = logging.getLogger(__name__)


class PowerUpController:
    """
    Charge-gated power-up actions.

    Only the scanner waits for a target tile; it stays selected in
    `active_power` until used or deselected.
    """

    def __init__(
        self, engine: RevealEngine, rng: Optional[random.Random] = None
    ) -> None:
        self.engine = engine
        self.rng = rng or random.Random()
        self.active_power: Optional[PowerKey] = None

    @property
    def powers(self) -> PowerState:
        return self.engine.powers

    # ========================================================================
    # Selection
    # ========================================================================

    def set_active_power(self, key: Union[str, PowerKey]) -> bool:
        """
        Handle a power-up button press.

        Args:
            key: Power-up name.

        Returns:
            True if anything happened (selection change or power used).
        """
        key = parse_power_key(key)
        if not self.engine.is_playing:
            return False
        if key == PowerKey.UNDO:
            return self.use_undo()
        if not self.powers.available(key):
            return False
        if key == PowerKey.NETWORK:
            return self.reveal_cluster()
        if key == PowerKey.FIREWALL:
            self.engine.view.notice("Firewall auto-blocks the next incident.")
            return True

        self._select(None if self.active_power == key else key)
        return True

    def _select(self, key: Optional[PowerKey]) -> None:
        self.active_power = key
        self.engine.view.active_power_changed(key.value if key else None)

    def handle_reveal_request(self, row: int, col: int) -> bool:
        """Route a reveal to the scanner while it is selected."""
        if self.active_power == PowerKey.SCANNER:
            return self.use_port_scanner(row, col)
        return self.engine.reveal_tile(row, col)

    # ========================================================================
    # Scanner
    # ========================================================================

    def use_port_scanner(self, row: int, col: int) -> bool:
        """
        Reveal the 3x3 block around (row, col) as one batch.

        Mines in the block stay hidden. The centre must be on the board.

        Returns:
            True if a charge was spent.
        """
        engine = self.engine
        if not engine.is_playing or not self.powers.available(PowerKey.SCANNER):
            return False
        if not engine.board.in_bounds(row, col):
            return False

        area = engine.board.area(row, col)
        batch = Batch()
        for cell in area:
            engine.reveal_tile(
                cell.row, cell.col, bypass_mine=True, from_power=True, batch=batch
            )
        engine.undo_log.push(batch)
        self.powers.consume(PowerKey.SCANNER)
        logger.debug(
            "Scanner at %s revealed %d cell(s)", (row, col), len(batch)
        )
        self._after_power()
        return True

    # ========================================================================
    # Network Cluster
    # ========================================================================

    def reveal_cluster(self) -> bool:
        """
        Reveal a random hidden safe cell, cascading if it has no neighbors.

        Returns:
            True if a charge was spent.
        """
        engine = self.engine
        if not engine.is_playing or not self.powers.available(PowerKey.NETWORK):
            return False
        candidates = engine.board.hidden_safe_cells()
        if not candidates:
            return False

        origin = self.rng.choice(candidates)
        engine.first_move = False
        batch = Batch()
        engine.perform_reveal(origin, batch)
        engine.undo_log.push(batch)
        self.powers.consume(PowerKey.NETWORK)
        logger.debug(
            "Network cluster from %s revealed %d cell(s)",
            origin.position, len(batch),
        )
        self._after_power()
        return True

    def _after_power(self) -> None:
        self._select(None)
        self.engine.view.hud_changed(self.engine.hud())
        self.engine.check_win_condition()

    # ========================================================================
    # Undo
    # ========================================================================

    def use_undo(self) -> bool:
        """
        Roll back the most recent batch.

        Needs both an undo charge and a non-empty log; nothing is consumed
        otherwise.

        Returns:
            True if a batch was restored.
        """
        engine = self.engine
        if not engine.is_playing or not self.powers.available(PowerKey.UNDO):
            return False
        batch = engine.undo_log.pop()
        if batch is None:
            return False
        engine.restore_batch(batch)
        self.powers.consume(PowerKey.UNDO)
        logger.debug("Undid %d cell(s)", len(batch))
        engine.view.hud_changed(engine.hud())
        engine.check_win_condition()
        return True
