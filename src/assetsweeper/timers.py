"""
Host-driven timers.

Nothing here spawns threads. The host calls tick()/poll() from its own
event loop so all state changes stay on a single actor.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple


LONG_PRESS_SECONDS = 0.4


# ============================================================================
# Session Timer
# ============================================================================

class SessionTimer:
    """
    Elapsed-seconds counter for one game.

    tick() adds a second while running. catch_up() lets a host that polls a
    monotonic clock deliver all the ticks that are due at once.
    """

    def __init__(self, on_tick: Optional[Callable[[int], None]] = None) -> None:
        self.seconds = 0
        self.running = False
        self._on_tick = on_tick
        self._started_at: Optional[float] = None

    def start(self, now: Optional[float] = None) -> None:
        """Reset to zero and start counting."""
        self.seconds = 0
        self.running = True
        self._started_at = now

    def stop(self) -> None:
        """Stop counting; the value is kept."""
        self.running = False

    def tick(self) -> bool:
        """
        Advance by one second.

        Returns:
            False if the timer is stopped.
        """
        if not self.running:
            return False
        self.seconds += 1
        if self._on_tick is not None:
            self._on_tick(self.seconds)
        return True

    def catch_up(self, now: float) -> int:
        """
        Deliver every whole-second tick due by `now`.

        Returns:
            Number of ticks delivered.
        """
        if not self.running:
            return 0
        if self._started_at is None:
            self._started_at = now
            return 0
        due = int(now - self._started_at) - self.seconds
        for _ in range(max(0, due)):
            self.tick()
        return max(0, due)


# ============================================================================
# Long Press Timer
# ============================================================================

@dataclass
class _PendingPress:
    row: int
    col: int
    deadline: float


class LongPressTimer:
    """
    Single pending long-press.

    A press that is held past the delay fires `on_long_press` (flag); a
    press released earlier is reported back to the caller as a tap.
    """

    def __init__(
        self,
        on_long_press: Callable[[int, int], None],
        delay: float = LONG_PRESS_SECONDS,
    ) -> None:
        self.delay = delay
        self._on_long_press = on_long_press
        self._pending: Optional[_PendingPress] = None

    @property
    def pending(self) -> Optional[Tuple[int, int]]:
        """Position of the pending press, if any."""
        if self._pending is None:
            return None
        return self._pending.row, self._pending.col

    def press(self, row: int, col: int, now: float) -> None:
        """Start a press, cancelling any previous one."""
        self.cancel()
        self._pending = _PendingPress(row, col, now + self.delay)

    def poll(self, now: float) -> bool:
        """
        Fire the long-press callback if the deadline has passed.

        Returns:
            True if the callback fired.
        """
        if self._pending is None or now < self._pending.deadline:
            return False
        pending = self._pending
        self._pending = None
        self._on_long_press(pending.row, pending.col)
        return True

    def release(self, now: float) -> bool:
        """
        End the press.

        Returns:
            True if the press was still pending (a tap), False if it already
            fired or there was none.
        """
        if self.poll(now):
            return False
        if self._pending is None:
            return False
        self._pending = None
        return True

    def cancel(self) -> None:
        """Drop the pending press without firing."""
        self._pending = None
