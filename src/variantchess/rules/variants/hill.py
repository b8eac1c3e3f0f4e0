"""King of the Hill - a king on a centre square wins on the spot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from variantchess.core.board import Board, find_king
from variantchess.core.enums import Color, GameEndReason, GameResult, VariantKind
from variantchess.core.types import Square
from variantchess.rules.variants.base import VariantRules

if TYPE_CHECKING:
    from variantchess.core.move import Move, MoveOutcome
    from variantchess.rules.engine import RuleEngine

# d5, e5, d4, e4
HILL_SQUARES: frozenset[Square] = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})

HILL_MARKER = "🏔"


def king_on_hill(board: Board, color: Color) -> bool:
    return find_king(board, color) in HILL_SQUARES


class HillRules(VariantRules):
    @property
    def kind(self) -> VariantKind:
        return VariantKind.KING_OF_THE_HILL

    def after_move(self, engine: RuleEngine, move: Move, outcome: MoveOutcome) -> None:
        if any(king_on_hill(outcome.board, color) for color in Color):
            outcome.notation += f" {HILL_MARKER}"

    def game_over(
        self,
        engine: RuleEngine,
        board: Board,
        side_to_move: Color | None = None,
    ) -> GameResult | None:
        for color in Color:
            if king_on_hill(board, color):
                return GameResult.win_for(color)
        return super().game_over(engine, board, side_to_move)

    def end_reason(
        self,
        engine: RuleEngine,
        board: Board,
        result: GameResult,
    ) -> GameEndReason:
        winner = result.winner
        if winner is not None and king_on_hill(board, winner):
            return GameEndReason.HILL
        return super().end_reason(engine, board, result)
