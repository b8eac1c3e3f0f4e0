"""Square type alias and coordinate helpers.

Board layout (row-major, white at the bottom)::

    row 0 = rank 8   a8 = (0, 0) ... h8 = (0, 7)
    ...
    row 7 = rank 1   a1 = (7, 0) ... h1 = (7, 7)
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col), both 0–7

_FILES = "abcdefgh"
_RANKS = "12345678"


def sign(value: int) -> int:
    """Unit step (-1, 0 or 1) along one axis."""
    return (value > 0) - (value < 0)


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def to_algebraic(row: int, col: int) -> str:
    """``(6, 4) -> "e2"``."""
    return _FILES[col] + str(8 - row)


def from_algebraic(name: str) -> Square:
    """``"e2" -> (6, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (8 - int(name[1]), _FILES.index(name[0]))


def parse_coordinate_move(text: str) -> tuple[Square, Square]:
    """Split a coordinate move such as ``"e7e5"`` into two squares.

    A trailing promotion letter (``"e7e8q"``) is accepted and ignored:
    promotion is always to a queen.
    """
    text = text.strip()
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid coordinate move: {text!r}")
    return from_algebraic(text[0:2]), from_algebraic(text[2:4])
