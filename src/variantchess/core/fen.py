"""FEN serialisation (emission only)."""

from __future__ import annotations

from dataclasses import dataclass

from variantchess.core.board import Board
from variantchess.core.enums import Color


@dataclass(frozen=True, slots=True)
class FenFlags:
    """Castling letters and en-passant target as they appear in FEN."""

    castling: str = "-"
    en_passant: str = "-"


def placement_field(board: Board) -> str:
    rows: list[str] = []
    for r in range(8):
        empty = 0
        row = ""
        for piece in board[r]:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(
    board: Board,
    turn: Color,
    flags: FenFlags,
    fullmove_number: int = 1,
) -> str:
    """Serialise *board* to FEN.

    The half-move clock is not tracked and is always emitted as ``0``.
    """
    side_str = "w" if turn == Color.WHITE else "b"
    return (
        f"{placement_field(board)} {side_str} {flags.castling} "
        f"{flags.en_passant} 0 {fullmove_number}"
    )
