"""Move value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from variantchess.core.types import Square, to_algebraic

if TYPE_CHECKING:
    from variantchess.core.board import Board


@dataclass(frozen=True, slots=True)
class Move:
    """A move request: origin, destination and the moving token."""

    from_sq: Square
    to_sq: Square
    piece: str

    def __str__(self) -> str:
        return f"{to_algebraic(*self.from_sq)}{to_algebraic(*self.to_sq)}"

    def to_dict(self) -> dict[str, object]:
        return {
            "from": list(self.from_sq),
            "to": list(self.to_sq),
            "piece": self.piece,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Move:
        src = data["from"]
        dst = data["to"]
        return cls(
            (int(src[0]), int(src[1])),  # type: ignore[index]
            (int(dst[0]), int(dst[1])),  # type: ignore[index]
            str(data["piece"]),
        )


@dataclass(slots=True)
class MoveOutcome:
    """Result of applying a validated move.

    ``affected_squares`` lists cells changed beyond the plain from/to pair
    (explosions, collapsed-ring removals). It is a side channel for
    renderers and never part of the board itself.
    """

    board: Board
    notation: str
    affected_squares: list[Square] = field(default_factory=list)
