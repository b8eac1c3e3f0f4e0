"""Abstract interfaces and configuration for the game layer.

``Match`` depends on these ABCs, not on concrete player or clock classes,
so tests and alternative front ends can swap them out.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum, auto

from variantchess.core.enums import Color

# ── Match modes / click outcomes ─────────────────────────────────────────────


class MatchMode(IntEnum):
    """Who controls which side."""

    LOCAL = auto()  # both sides on this board
    AI = auto()  # one side is an engine player
    ONLINE = auto()  # the other side arrives through sync_state()


class ClickOutcome(IntEnum):
    """What a single square click did to the selection state machine."""

    IGNORED = auto()
    SELECTED = auto()
    DESELECTED = auto()
    MOVED = auto()
    INVALID = auto()


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    @classmethod
    def blitz_3m(cls) -> TimeControl:
        return cls(180, 0)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300, 0)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        """Ten minutes a side, the default for new matches."""
        return cls(600, 0)

    @classmethod
    def rapid_15m10s(cls) -> TimeControl:
        return cls(900, 10)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return (self.initial_seconds, self.increment_seconds) == (
            other.initial_seconds,
            other.increment_seconds,
        )

    def __hash__(self) -> int:
        return hash((self.initial_seconds, self.increment_seconds))

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Knobs for a :class:`~variantchess.game.match.Match`.

    ``time_control=None`` plays without a clock.
    """

    time_control: TimeControl | None = field(default_factory=TimeControl.rapid_10m)
    affected_squares_ms: int = 600
    tick_interval_ms: int = 100


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a match participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, fen: str) -> None:
        """Ask for a move in the position described by *fen*.

        Humans ignore this (they click). Engine players forward it and
        answer later through ``Match.submit_coordinate_move``.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Abandon an outstanding request (no-op for humans)."""

    def settle(self) -> None:
        """Called once a move by this player has been applied."""


class IClock(ABC):
    """Interface for a chess clock as the match drives it."""

    @abstractmethod
    def resume(self, color: Color) -> None:
        """Charge whichever side was running, then run *color*'s time."""

    @abstractmethod
    def pause(self) -> None:
        """Charge the running side and stop."""

    @abstractmethod
    def remaining(self, color: Color) -> float:
        """Seconds remaining for *color*."""

    @abstractmethod
    def has_flagged(self, color: Color) -> bool:
        """Has *color* run out of time?"""

    @abstractmethod
    def complete_move(self, color: Color) -> bool:
        """Pause after *color* moved and credit the increment.

        Returns ``False`` without crediting anything when *color*'s flag
        fell before the move landed.
        """
