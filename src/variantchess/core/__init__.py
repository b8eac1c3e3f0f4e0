"""Core domain layer - board utilities with zero external dependencies.

Quick start::

    from variantchess.core import initial_board, board_to_fen, FenFlags, Color

    board = initial_board()
    print(board_to_fen(board, Color.WHITE, FenFlags("KQkq", "-")))
"""

from variantchess.core.board import (
    Board,
    board_repr,
    clone,
    eliminated_pieces,
    empty_board,
    find_king,
    flatten,
    initial_board,
    is_path_clear,
    pieces_of,
    unflatten,
)
from variantchess.core.enums import (
    CastlingMoves,
    CastlingSide,
    Color,
    GameEndReason,
    GameResult,
    PieceType,
    VariantKind,
)
from variantchess.core.fen import FenFlags, board_to_fen
from variantchess.core.move import Move, MoveOutcome
from variantchess.core.piece import (
    is_kind,
    make_token,
    piece_color,
    piece_glyph,
    piece_kind,
)
from variantchess.core.types import (
    Square,
    from_algebraic,
    is_on_board,
    parse_coordinate_move,
    to_algebraic,
)

__all__ = [
    # Enums / flags
    "CastlingMoves",
    "CastlingSide",
    "Color",
    "GameEndReason",
    "GameResult",
    "PieceType",
    "VariantKind",
    # Types / helpers
    "Square",
    "from_algebraic",
    "is_on_board",
    "parse_coordinate_move",
    "to_algebraic",
    # Pieces
    "is_kind",
    "make_token",
    "piece_color",
    "piece_glyph",
    "piece_kind",
    # Board
    "Board",
    "board_repr",
    "clone",
    "eliminated_pieces",
    "empty_board",
    "find_king",
    "flatten",
    "initial_board",
    "is_path_clear",
    "pieces_of",
    "unflatten",
    # Moves
    "Move",
    "MoveOutcome",
    # Notation
    "FenFlags",
    "board_to_fen",
]
