"""Dual chess clock driven by the match's pause / resume contract.

Time is banked per side and charged lazily from ``time.monotonic``: the
running side's bank is only debited when the clock is paused, resumed for
the other side, or overwritten. Reads in between subtract the pending
elapsed time without touching the bank.
"""

from __future__ import annotations

import time

from variantchess.core.enums import Color
from variantchess.game.interfaces import IClock, TimeControl


class Clock(IClock):
    """Remaining time for both sides, at most one of them running."""

    __slots__ = ("_time_control", "_bank", "_running_side", "_charged_at")

    def __init__(self, time_control: TimeControl) -> None:
        self._time_control = time_control
        self._bank: dict[Color, float] = {}
        self._running_side: Color | None = None
        self._charged_at = 0.0
        self.reset()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def is_unlimited(self) -> bool:
        return self._time_control.initial_seconds == float("inf")

    @property
    def is_running(self) -> bool:
        return self._running_side is not None

    @property
    def running_side(self) -> Color | None:
        """Side whose time is draining, ``None`` while paused."""
        return self._running_side

    # ── IClock implementation ────────────────────────────────────────────

    def resume(self, color: Color) -> None:
        self._charge()
        self._running_side = color

    def pause(self) -> None:
        self._charge()
        self._running_side = None

    def remaining(self, color: Color) -> float:
        left = self._bank[color]
        if color == self._running_side:
            left -= time.monotonic() - self._charged_at
        return max(0.0, left)

    def has_flagged(self, color: Color) -> bool:
        return self.remaining(color) <= 0.0

    def complete_move(self, color: Color) -> bool:
        self.pause()
        if self.has_flagged(color):
            return False
        self._bank[color] += self._time_control.increment_seconds
        return True

    # ── Sync ─────────────────────────────────────────────────────────────

    def set_remaining(self, color: Color, seconds: float) -> None:
        """Overwrite one side's time, e.g. from a remote peer."""
        self._charge()
        self._bank[color] = seconds

    def reset(self) -> None:
        initial = self._time_control.initial_seconds
        self._bank = {Color.WHITE: initial, Color.BLACK: initial}
        self._running_side = None
        self._charged_at = time.monotonic()

    # ── Internal ─────────────────────────────────────────────────────────

    def _charge(self) -> None:
        now = time.monotonic()
        side = self._running_side
        if side is not None:
            self._bank[side] = max(0.0, self._bank[side] - (now - self._charged_at))
        self._charged_at = now
