"""
Power-up charge bookkeeping.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional


# ============================================================================
# Constants
# ============================================================================

class PowerKey(str, Enum):
    """The four power-ups, keyed by the names the UI uses."""

    FIREWALL = "firewall"
    SCANNER = "scanner"
    NETWORK = "network"
    UNDO = "undo"


DEFAULT_CHARGES: Dict[PowerKey, int] = {
    PowerKey.FIREWALL: 1,
    PowerKey.SCANNER: 2,
    PowerKey.NETWORK: 2,
    PowerKey.UNDO: 3,
}


def parse_power_key(key) -> PowerKey:
    """
    Convert a string or PowerKey to a PowerKey.

    Raises:
        ValueError: If the key does not name a power-up.
    """
    if isinstance(key, PowerKey):
        return key
    try:
        return PowerKey(str(key).lower())
    except ValueError:
        raise ValueError(f"Unknown power-up {key!r}") from None


# ============================================================================
# Power State
# ============================================================================

@dataclass
class PowerState:
    """
    Remaining charges per power-up.

    Charges start at `initial` and only ever go down during a game.
    """

    initial: Mapping[PowerKey, int] = field(
        default_factory=lambda: dict(DEFAULT_CHARGES)
    )
    charges: Dict[PowerKey, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Fill in missing charges from the initial values."""
        for key in PowerKey:
            self.charges.setdefault(key, self.initial.get(key, 0))
            if self.charges[key] < 0:
                raise ValueError(f"Negative charge for {key.value}")

    def remaining(self, key: PowerKey) -> int:
        """Charges left for a power-up."""
        return self.charges[key]

    def available(self, key: PowerKey) -> bool:
        """Check if at least one charge is left."""
        return self.charges[key] > 0

    def consume(self, key: PowerKey) -> bool:
        """
        Use one charge.

        Returns:
            True if a charge was consumed, False if none were left.
        """
        if self.charges[key] <= 0:
            return False
        self.charges[key] -= 1
        return True

    def used(self, key: Optional[PowerKey] = None) -> int:
        """Charges spent on one power-up, or across all of them."""
        keys = [key] if key is not None else list(PowerKey)
        return sum(self.initial.get(k, 0) - self.charges[k] for k in keys)

    def as_dict(self) -> Dict[str, int]:
        """Charges keyed by power-up name."""
        return {key.value: self.charges[key] for key in PowerKey}
