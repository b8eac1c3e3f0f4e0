"""Core enumerations and flags for the rules domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @classmethod
    def parse(cls, name: str) -> Color:
        """``"white"`` / ``"black"`` (any case) → Color."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Invalid color name: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingSide(IntEnum):
    KINGSIDE = 0
    QUEENSIDE = 1


class CastlingMoves(IntFlag):
    """Bitmask of "has moved" markers used for castling bookkeeping.

    Bits are only ever added during play; ``reset`` / ``set_state`` are the
    only ways to clear them.
    """

    NONE = 0
    WHITE_KING = auto()
    BLACK_KING = auto()
    WHITE_KINGSIDE_ROOK = auto()
    WHITE_QUEENSIDE_ROOK = auto()
    BLACK_KINGSIDE_ROOK = auto()
    BLACK_QUEENSIDE_ROOK = auto()

    @classmethod
    def king(cls, color: Color) -> CastlingMoves:
        return cls.WHITE_KING if color == Color.WHITE else cls.BLACK_KING

    @classmethod
    def rook(cls, color: Color, side: CastlingSide) -> CastlingMoves:
        if color == Color.WHITE:
            if side == CastlingSide.KINGSIDE:
                return cls.WHITE_KINGSIDE_ROOK
            return cls.WHITE_QUEENSIDE_ROOK
        if side == CastlingSide.KINGSIDE:
            return cls.BLACK_KINGSIDE_ROOK
        return cls.BLACK_QUEENSIDE_ROOK


class GameResult(IntEnum):
    """Outcome of a finished game. ``None`` stands for "in progress"."""

    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS

    @classmethod
    def parse(cls, text: str) -> GameResult:
        """Inverse of ``str()``: ``"white"``, ``"black"`` or ``"draw"``."""
        if text == "draw":
            return cls.DRAW
        return cls.win_for(Color.parse(text))

    @property
    def winner(self) -> Color | None:
        if self == GameResult.WHITE_WINS:
            return Color.WHITE
        if self == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    def __str__(self) -> str:
        winner = self.winner
        return "draw" if winner is None else str(winner)


class GameEndReason(IntEnum):
    """Why a match stopped."""

    CHECKMATE = auto()
    STALEMATE = auto()
    KING_LOST = auto()
    HILL = auto()
    TIMEOUT = auto()


class VariantKind(Enum):
    """Every variant the engine knows about, keyed by its transport name."""

    STANDARD = "standard"
    ATOMIC = "atomic"
    KING_OF_THE_HILL = "kingofthehill"
    BATTLE_ROYALE = "battleroyale"
    PORTAL = "portal"

    def __str__(self) -> str:
        return self.value
