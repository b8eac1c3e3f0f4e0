"""VariantRules - the capability interface every variant implements.

A :class:`~variantchess.rules.engine.RuleEngine` holds exactly one
``VariantRules`` object and consults it at a handful of seams: which
squares are playable, how sliding pieces reach a square, how a capture
resolves, what happens after a move, and when the game is over. Every hook
has a standard-chess default, so an implementation only overrides what its
variant changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from variantchess.core.board import Board, is_path_clear
from variantchess.core.enums import Color, GameEndReason, GameResult, VariantKind
from variantchess.core.types import Square, sign
from variantchess.rules.geometry import Direction

if TYPE_CHECKING:
    from variantchess.core.move import Move, MoveOutcome
    from variantchess.rules.engine import RuleEngine


class VariantRules(ABC):
    """Per-variant overrides consulted by :class:`RuleEngine`."""

    capture_marker: ClassVar[str] = "x"

    @property
    @abstractmethod
    def kind(self) -> VariantKind: ...

    # ── Movement ─────────────────────────────────────────────────────────

    def is_square_playable(self, square: Square) -> bool:
        """Whether a piece may move onto *square*."""
        return True

    def reaches_by_slide(
        self,
        board: Board,
        src: Square,
        dst: Square,
        directions: tuple[Direction, ...],
    ) -> bool:
        """Can a slider moving along *directions* get from *src* to *dst*?"""
        d_row = dst[0] - src[0]
        d_col = dst[1] - src[1]
        if d_row and d_col and abs(d_row) != abs(d_col):
            return False
        if (sign(d_row), sign(d_col)) not in directions:
            return False
        return is_path_clear(board, src, dst)

    def permits_move(
        self,
        engine: RuleEngine,
        board: Board,
        src: Square,
        dst: Square,
        piece: str,
    ) -> bool:
        """Variant-specific veto checked before king safety."""
        return True

    # ── Resolution ───────────────────────────────────────────────────────

    def resolve_capture(
        self,
        board: Board,
        src: Square,
        dst: Square,
        piece: str,
        capture_sq: Square,
    ) -> list[Square]:
        """Resolve a capture in place on *board* (already a copy).

        *capture_sq* differs from *dst* only for en passant. Returns the
        squares affected beyond the plain from/to pair.
        """
        board[capture_sq[0]][capture_sq[1]] = None
        board[src[0]][src[1]] = None
        board[dst[0]][dst[1]] = piece
        return []

    def after_move(self, engine: RuleEngine, move: Move, outcome: MoveOutcome) -> None:
        """Hook run once per applied move, after bookkeeping."""

    # ── Termination ──────────────────────────────────────────────────────

    def game_over(
        self,
        engine: RuleEngine,
        board: Board,
        side_to_move: Color | None = None,
    ) -> GameResult | None:
        result = engine.king_loss_result(board)
        if result is not None:
            return result
        return engine.mate_result(board, side_to_move)

    def end_reason(
        self,
        engine: RuleEngine,
        board: Board,
        result: GameResult,
    ) -> GameEndReason:
        if engine.king_loss_result(board) is not None:
            return GameEndReason.KING_LOST
        if result == GameResult.DRAW:
            return GameEndReason.STALEMATE
        return GameEndReason.CHECKMATE

    # ── Extra state ──────────────────────────────────────────────────────

    def get_state(self) -> dict[str, Any]:
        return {}

    def set_state(self, state: dict[str, Any]) -> None:
        pass

    def reset(self) -> None:
        pass
