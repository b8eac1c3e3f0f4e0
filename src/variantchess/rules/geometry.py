"""Direction and offset tables shared by the rule engine and variants."""

from __future__ import annotations

from variantchess.core.types import Square, is_on_board

Direction = tuple[int, int]  # (d_row, d_col)

BISHOP_DIRS: tuple[Direction, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[Direction, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[Direction, ...] = BISHOP_DIRS + ROOK_DIRS

KING_OFFSETS: tuple[Direction, ...] = QUEEN_DIRS


def neighbours(square: Square) -> list[Square]:
    """The up-to-eight on-board squares around *square*."""
    row, col = square
    return [
        (row + dr, col + dc)
        for dr, dc in KING_OFFSETS
        if is_on_board(row + dr, col + dc)
    ]


def ring_depth(square: Square) -> int:
    """Distance of *square* from the nearest board edge (0 on the border)."""
    row, col = square
    return min(row, col, 7 - row, 7 - col)
