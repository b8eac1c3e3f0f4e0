"""Piece tokens: single FEN letters, uppercase = white, ``None`` = empty."""

from __future__ import annotations

from typing import TypeAlias

from variantchess.core.enums import Color, PieceType

Token: TypeAlias = str

_KIND_MAP: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}
_KIND_LETTERS: dict[PieceType, str] = {v: k for k, v in _KIND_MAP.items()}

_UNICODE: dict[str, str] = {
    "P": "♙",
    "N": "♘",
    "B": "♗",
    "R": "♖",
    "Q": "♕",
    "K": "♔",
    "p": "♟",
    "n": "♞",
    "b": "♝",
    "r": "♜",
    "q": "♛",
    "k": "♚",
}


def is_white(token: Token) -> bool:
    return token.isupper()


def piece_color(token: Token) -> Color:
    """Uppercase letters are white, lowercase are black."""
    return Color.WHITE if token.isupper() else Color.BLACK


def piece_kind(token: Token) -> PieceType:
    try:
        return _KIND_MAP[token.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece token: {token!r}") from None


def make_token(color: Color, kind: PieceType) -> Token:
    """Build a token, e.g. ``(WHITE, KNIGHT) -> "N"``."""
    letter = _KIND_LETTERS[kind]
    return letter.upper() if color == Color.WHITE else letter


def piece_glyph(token: Token) -> str:
    """Unicode chess symbol, e.g. ♞."""
    return _UNICODE[token]


def is_kind(token: Token | None, kind: PieceType) -> bool:
    return token is not None and token.lower() == _KIND_LETTERS[kind]
