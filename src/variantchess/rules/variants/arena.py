"""Battle Royale - the playable area shrinks one ring at a time.

Every ``plies_per_shrink`` applied moves the outermost live ring collapses:
its pieces are removed (kings included) and nothing may move onto it again.
Pieces already standing on dead squares stay where they are until captured.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from variantchess.core.board import Board
from variantchess.core.enums import VariantKind
from variantchess.core.types import Square
from variantchess.rules.geometry import ring_depth
from variantchess.rules.variants.base import VariantRules

if TYPE_CHECKING:
    from variantchess.core.move import Move, MoveOutcome
    from variantchess.rules.engine import RuleEngine

_LOGGER = logging.getLogger(__name__)

COUNTDOWN_MARKER = "⏳"
COLLAPSE_MARKER = "🌪"


class BattleRoyaleRules(VariantRules):
    __slots__ = ("plies_per_shrink", "max_rings", "ply_count", "collapsed_rings")

    def __init__(self, plies_per_shrink: int = 10, max_rings: int = 3) -> None:
        if plies_per_shrink < 1:
            raise ValueError(f"plies_per_shrink must be positive, got {plies_per_shrink}")
        if not 0 <= max_rings <= 3:
            raise ValueError(f"max_rings must be in [0, 3], got {max_rings}")
        self.plies_per_shrink = plies_per_shrink
        self.max_rings = max_rings
        self.ply_count = 0
        self.collapsed_rings = 0

    @property
    def kind(self) -> VariantKind:
        return VariantKind.BATTLE_ROYALE

    def is_square_playable(self, square: Square) -> bool:
        return ring_depth(square) >= self.collapsed_rings

    @property
    def plies_until_shrink(self) -> int:
        return self.plies_per_shrink - self.ply_count % self.plies_per_shrink

    def after_move(self, engine: RuleEngine, move: Move, outcome: MoveOutcome) -> None:
        self.ply_count += 1

        remaining = self.plies_until_shrink
        if remaining <= 3 and self.collapsed_rings < self.max_rings:
            outcome.notation += f" {COUNTDOWN_MARKER}{remaining}"

        if self.ply_count % self.plies_per_shrink == 0 and self.collapsed_rings < self.max_rings:
            removed = self.collapse_ring(outcome.board)
            outcome.affected_squares.extend(removed)
            outcome.notation += f" {COLLAPSE_MARKER}"

    def collapse_ring(self, board: Board) -> list[Square]:
        """Empty the current outer ring in place and mark it dead."""
        ring = self.collapsed_rings
        removed: list[Square] = []
        for r in range(8):
            for c in range(8):
                if ring_depth((r, c)) == ring and board[r][c] is not None:
                    board[r][c] = None
                    removed.append((r, c))
        self.collapsed_rings += 1
        _LOGGER.info(
            "Ring %d collapsed after %d plies, %d piece(s) removed",
            ring,
            self.ply_count,
            len(removed),
        )
        return removed

    # ── Extra state ──────────────────────────────────────────────────────

    def get_state(self) -> dict[str, Any]:
        return {"ply_count": self.ply_count, "collapsed_rings": self.collapsed_rings}

    def set_state(self, state: dict[str, Any]) -> None:
        self.ply_count = int(state.get("ply_count") or 0)
        self.collapsed_rings = int(state.get("collapsed_rings") or 0)

    def reset(self) -> None:
        self.ply_count = 0
        self.collapsed_rings = 0
