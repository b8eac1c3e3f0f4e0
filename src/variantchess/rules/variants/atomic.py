"""Atomic chess - every capture detonates.

The blast clears the captured square and every non-pawn neighbour, and the
capturing piece is consumed with it. A king can therefore never capture.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from variantchess.core.board import Board
from variantchess.core.enums import PieceType, VariantKind
from variantchess.core.piece import is_kind
from variantchess.core.types import Square
from variantchess.rules.geometry import neighbours
from variantchess.rules.variants.base import VariantRules

if TYPE_CHECKING:
    from variantchess.rules.engine import RuleEngine


def explode(board: Board, center: Square) -> list[Square]:
    """Clear *center* and its non-pawn neighbours in place.

    Returns the blast squares: the centre first, then every neighbour that
    actually lost a piece.
    """
    board[center[0]][center[1]] = None
    blast = [center]
    for r, c in neighbours(center):
        token = board[r][c]
        if token is not None and not is_kind(token, PieceType.PAWN):
            board[r][c] = None
            blast.append((r, c))
    return blast


class AtomicRules(VariantRules):
    capture_marker = "💥"

    @property
    def kind(self) -> VariantKind:
        return VariantKind.ATOMIC

    def permits_move(
        self,
        engine: RuleEngine,
        board: Board,
        src: Square,
        dst: Square,
        piece: str,
    ) -> bool:
        if not is_kind(piece, PieceType.KING):
            return True
        is_capture = (
            board[dst[0]][dst[1]] is not None
            or engine.can_capture_en_passant(board, src, dst)
        )
        return not is_capture

    def resolve_capture(
        self,
        board: Board,
        src: Square,
        dst: Square,
        piece: str,
        capture_sq: Square,
    ) -> list[Square]:
        blast = explode(board, capture_sq)
        # The capturer detonates too, pawn or not.
        board[src[0]][src[1]] = None
        return blast
