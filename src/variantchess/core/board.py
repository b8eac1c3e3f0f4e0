"""Board utilities - pure functions over an 8x8 grid of nullable tokens.

A board is only ever replaced wholesale; every helper that changes cells
works on a :func:`clone`.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TypeAlias

from variantchess.core.enums import Color, PieceType
from variantchess.core.piece import make_token
from variantchess.core.types import Square, sign

Board: TypeAlias = list[list[str | None]]

_BACK_RANK = "rnbqkbnr"

# Per-side inventory of a fresh game, in value order.
_INVENTORY: tuple[tuple[PieceType, int], ...] = (
    (PieceType.PAWN, 8),
    (PieceType.KNIGHT, 2),
    (PieceType.BISHOP, 2),
    (PieceType.ROOK, 2),
    (PieceType.QUEEN, 1),
    (PieceType.KING, 1),
)


# ── Factory ──────────────────────────────────────────────────────────────────


def empty_board() -> Board:
    return [[None] * 8 for _ in range(8)]


def initial_board() -> Board:
    """Standard starting position (black on row 0)."""
    board = empty_board()
    board[0] = list(_BACK_RANK)
    board[1] = ["p"] * 8
    board[6] = ["P"] * 8
    board[7] = list(_BACK_RANK.upper())
    return board


def clone(board: Board) -> Board:
    """Row-independent copy."""
    return [row.copy() for row in board]


# ── Queries ──────────────────────────────────────────────────────────────────


def find_king(board: Board, color: Color) -> Square | None:
    """Square of *color*'s king, or ``None`` when it has been destroyed."""
    target = "K" if color == Color.WHITE else "k"
    for r in range(8):
        for c in range(8):
            if board[r][c] == target:
                return (r, c)
    return None


def is_path_clear(board: Board, src: Square, dst: Square) -> bool:
    """Whether every square strictly between *src* and *dst* is empty.

    Only straight and diagonal lines are walked; any other pair is
    reported as blocked.
    """
    fr, fc = src
    tr, tc = dst
    dr = tr - fr
    dc = tc - fc
    if (dr, dc) == (0, 0):
        return False
    if dr != 0 and dc != 0 and abs(dr) != abs(dc):
        return False

    r_step = sign(dr)
    c_step = sign(dc)
    r = fr + r_step
    c = fc + c_step
    while (r, c) != (tr, tc):
        if board[r][c] is not None:
            return False
        r += r_step
        c += c_step
    return True


def pieces_of(board: Board, color: Color) -> list[Square]:
    """Occupied squares of *color*, row-major."""
    upper = color == Color.WHITE
    return [
        (r, c)
        for r in range(8)
        for c in range(8)
        if (token := board[r][c]) is not None and token.isupper() == upper
    ]


# ── Transport ────────────────────────────────────────────────────────────────


def flatten(board: Board) -> list[str | None]:
    """Row-major 64-cell sequence."""
    return [cell for row in board for cell in row]


def unflatten(cells: Sequence[str | None]) -> Board:
    """Inverse of :func:`flatten`."""
    if len(cells) != 64:
        raise ValueError(f"Flat board must have 64 cells, got {len(cells)}")
    return [[cells[r * 8 + c] or None for c in range(8)] for r in range(8)]


# ── Tally ────────────────────────────────────────────────────────────────────


def eliminated_pieces(board: Board) -> dict[Color, list[str]]:
    """Pieces missing from the board compared with a fresh game.

    Ordered pawn, knight, bishop, rook, queen, king. Surplus pieces (e.g. a
    second queen after promotion) never produce negative counts.
    """
    present = Counter(cell for row in board for cell in row if cell is not None)
    result: dict[Color, list[str]] = {}
    for color in Color:
        missing: list[str] = []
        for kind, count in _INVENTORY:
            token = make_token(color, kind)
            missing.extend([token] * max(0, count - present[token]))
        result[color] = missing
    return result


def board_repr(board: Board) -> str:
    rows: list[str] = []
    for r in range(8):
        cells = " ".join(cell or "." for cell in board[r])
        rows.append(f"{8 - r} {cells}")
    rows.append("  a b c d e f g h")
    return "\n".join(rows)
