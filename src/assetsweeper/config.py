"""
Game settings for AssetSweeper sessions.
"""
from dataclasses import dataclass, field
from typing import Dict

from .board import DIFFICULTIES
from .powers import DEFAULT_CHARGES, PowerKey
from .timers import LONG_PRESS_SECONDS


@dataclass
class GameSettings:
    """
    Session-wide settings.

    Attributes:
        default_difficulty: Difficulty key used when none is given.
        initial_charges: Starting charge per power-up.
        long_press_seconds: Hold time before a press becomes a flag.
    """

    default_difficulty: str = "easy"
    initial_charges: Dict[PowerKey, int] = field(
        default_factory=lambda: dict(DEFAULT_CHARGES)
    )
    long_press_seconds: float = LONG_PRESS_SECONDS

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure settings values are valid."""
        if self.default_difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty {self.default_difficulty!r}")
        if any(charge < 0 for charge in self.initial_charges.values()):
            raise ValueError("Power-up charges cannot be negative")
        if self.long_press_seconds <= 0:
            raise ValueError("Long-press delay must be positive")
