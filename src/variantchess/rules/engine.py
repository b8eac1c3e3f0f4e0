"""RuleEngine - generic legality, move application and termination.

King safety is tested by simulating the whole move on a copied board and
probing the mover's king afterwards. The same simulation backs
:meth:`RuleEngine.apply_move`, so variant capture rules apply identically
to both.
"""

from __future__ import annotations

import logging
from typing import Any

from variantchess.core.board import (
    Board,
    clone,
    find_king,
    pieces_of,
)
from variantchess.core.enums import (
    CastlingMoves,
    CastlingSide,
    Color,
    GameEndReason,
    GameResult,
    PieceType,
)
from variantchess.core.fen import FenFlags
from variantchess.core.move import Move, MoveOutcome
from variantchess.core.piece import (
    is_kind,
    is_white,
    make_token,
    piece_color,
    piece_glyph,
    piece_kind,
)
from variantchess.core.types import Square, to_algebraic
from variantchess.rules.geometry import BISHOP_DIRS, QUEEN_DIRS, ROOK_DIRS
from variantchess.rules.variants.base import VariantRules

_LOGGER = logging.getLogger(__name__)

_HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

_ROOK_CORNERS: dict[Square, CastlingMoves] = {
    (7, 0): CastlingMoves.WHITE_QUEENSIDE_ROOK,
    (7, 7): CastlingMoves.WHITE_KINGSIDE_ROOK,
    (0, 0): CastlingMoves.BLACK_QUEENSIDE_ROOK,
    (0, 7): CastlingMoves.BLACK_KINGSIDE_ROOK,
}

# side -> (rook column, rook destination, must be empty, must not be attacked)
_CASTLING_LAYOUT: dict[CastlingSide, tuple[int, int, tuple[int, ...], tuple[int, ...]]] = {
    CastlingSide.KINGSIDE: (7, 5, (5, 6), (4, 5, 6)),
    CastlingSide.QUEENSIDE: (0, 3, (1, 2, 3), (4, 3, 2)),
}

_STATE_KINGS: dict[str, CastlingMoves] = {
    "white": CastlingMoves.WHITE_KING,
    "black": CastlingMoves.BLACK_KING,
}
_STATE_ROOKS: dict[str, CastlingMoves] = {
    "white_kingside": CastlingMoves.WHITE_KINGSIDE_ROOK,
    "white_queenside": CastlingMoves.WHITE_QUEENSIDE_ROOK,
    "black_kingside": CastlingMoves.BLACK_KINGSIDE_ROOK,
    "black_queenside": CastlingMoves.BLACK_QUEENSIDE_ROOK,
}


def _castling_side(dst_col: int) -> CastlingSide:
    return CastlingSide.KINGSIDE if dst_col == 6 else CastlingSide.QUEENSIDE


class RuleEngine:
    """Legality and move application for one variant.

    Owns the castling "has moved" flags and the last-move record; the board
    itself is always passed in and never stored.
    """

    __slots__ = ("variant", "moved", "last_move")

    def __init__(self, variant: VariantRules | None = None) -> None:
        if variant is None:
            from variantchess.rules.variants.standard import StandardRules

            variant = StandardRules()
        self.variant = variant
        self.moved = CastlingMoves.NONE
        self.last_move: Move | None = None

    # ── Geometry ─────────────────────────────────────────────────────────

    def check_basic_move(
        self,
        board: Board,
        src: Square,
        dst: Square,
        piece: str,
        ignore_safety: bool = False,
    ) -> bool:
        """Geometric/occlusion legality of one piece, ignoring turn and check.

        With *ignore_safety* pawns report only their diagonal attacks, which
        turns this into an "attacks this square" probe.
        """
        if src == dst or not self.variant.is_square_playable(dst):
            return False

        fr, fc = src
        tr, tc = dst
        row_diff = abs(tr - fr)
        col_diff = abs(tc - fc)
        kind = piece_kind(piece)

        if kind == PieceType.PAWN:
            direction = -1 if is_white(piece) else 1
            if ignore_safety:
                return tr == fr + direction and col_diff == 1

            target = board[tr][tc]
            if fc == tc and target is None:
                if tr == fr + direction:
                    return True
                start_row = 6 if is_white(piece) else 1
                return (
                    fr == start_row
                    and tr == fr + 2 * direction
                    and board[fr + direction][fc] is None
                )
            return (
                col_diff == 1
                and tr == fr + direction
                and (target is not None or self.can_capture_en_passant(board, src, dst))
            )

        if kind == PieceType.KNIGHT:
            return (row_diff, col_diff) in ((2, 1), (1, 2))
        if kind == PieceType.BISHOP:
            return self.variant.reaches_by_slide(board, src, dst, BISHOP_DIRS)
        if kind == PieceType.ROOK:
            return self.variant.reaches_by_slide(board, src, dst, ROOK_DIRS)
        if kind == PieceType.QUEEN:
            return self.variant.reaches_by_slide(board, src, dst, QUEEN_DIRS)
        return max(row_diff, col_diff) == 1

    def is_square_attacked(
        self, board: Board, row: int, col: int, defender: Color
    ) -> bool:
        """Is (*row*, *col*) attacked by any piece of *defender*'s opponent?"""
        target = (row, col)
        for sq in pieces_of(board, defender.opposite):
            piece = board[sq[0]][sq[1]]
            assert piece is not None
            if self.check_basic_move(board, sq, target, piece, ignore_safety=True):
                return True
        return False

    def is_in_check(self, board: Board, color: Color) -> bool:
        king = find_king(board, color)
        if king is None:
            return False
        return self.is_square_attacked(board, king[0], king[1], color)

    # ── Special moves ────────────────────────────────────────────────────

    def can_castle(self, board: Board, color: Color, side: CastlingSide) -> bool:
        if self.moved & (CastlingMoves.king(color) | CastlingMoves.rook(color, side)):
            return False

        row = _HOME_ROW[color]
        rook_col, _rook_to, between, transit = _CASTLING_LAYOUT[side]
        if board[row][4] != make_token(color, PieceType.KING):
            return False
        if board[row][rook_col] != make_token(color, PieceType.ROOK):
            return False
        if any(board[row][c] is not None for c in between):
            return False
        return not any(self.is_square_attacked(board, row, c, color) for c in transit)

    def can_capture_en_passant(self, board: Board, src: Square, dst: Square) -> bool:
        """True only right after an enemy pawn's two-rank push beside *src*."""
        last = self.last_move
        mover = board[src[0]][src[1]]
        if last is None or mover is None or not is_kind(mover, PieceType.PAWN):
            return False
        if not is_kind(last.piece, PieceType.PAWN):
            return False
        if piece_color(last.piece) == piece_color(mover):
            return False
        return (
            abs(last.from_sq[0] - last.to_sq[0]) == 2
            and last.to_sq[0] == src[0]
            and last.to_sq[1] == dst[1]
        )

    @staticmethod
    def _is_castling(src: Square, dst: Square, piece: str) -> bool:
        return (
            is_kind(piece, PieceType.KING)
            and src[0] == dst[0]
            and abs(dst[1] - src[1]) == 2
        )

    @staticmethod
    def _is_castling_request(src: Square, dst: Square, piece: str) -> bool:
        if not is_kind(piece, PieceType.KING):
            return False
        home = _HOME_ROW[piece_color(piece)]
        return src == (home, 4) and dst[0] == home and dst[1] in (2, 6)

    # ── Simulation / safety ──────────────────────────────────────────────

    def simulate_move(
        self, board: Board, src: Square, dst: Square, piece: str
    ) -> tuple[Board, list[Square]]:
        """Resolve a move on a copy of *board*.

        Handles captures (through the variant), en passant, castling rook
        relocation and promotion to queen. Returns the new board and the
        variant's extra affected squares.
        """
        new_board = clone(board)
        fr, fc = src
        tr, tc = dst

        capture_sq: Square | None = None
        if board[tr][tc] is not None:
            capture_sq = dst
        elif self.can_capture_en_passant(board, src, dst):
            capture_sq = (fr, tc)

        affected: list[Square] = []
        if capture_sq is not None:
            affected = self.variant.resolve_capture(new_board, src, dst, piece, capture_sq)
        else:
            new_board[fr][fc] = None
            new_board[tr][tc] = piece
            if self._is_castling(src, dst, piece):
                rook_col, rook_to, _between, _transit = _CASTLING_LAYOUT[_castling_side(tc)]
                new_board[tr][rook_to] = new_board[tr][rook_col]
                new_board[tr][rook_col] = None

        if (
            new_board[tr][tc] == piece
            and is_kind(piece, PieceType.PAWN)
            and tr in (0, 7)
        ):
            new_board[tr][tc] = make_token(piece_color(piece), PieceType.QUEEN)

        return new_board, affected

    def is_move_safe(self, board: Board, src: Square, dst: Square, piece: str) -> bool:
        """Does the move leave the mover's king (if any) unattacked?"""
        if not self.variant.permits_move(self, board, src, dst, piece):
            return False

        color = piece_color(piece)
        future, _affected = self.simulate_move(board, src, dst, piece)

        if find_king(future, color.opposite) is None:
            return True

        king = find_king(future, color)
        if king is None:
            # Losing a king you never had is fine; destroying your own is not.
            return find_king(board, color) is None
        return not self.is_square_attacked(future, king[0], king[1], color)

    # ── Move generation ──────────────────────────────────────────────────

    def get_valid_moves(
        self, board: Board, from_row: int, from_col: int, current_player: Color
    ) -> list[Square]:
        """Legal destinations for the piece on (*from_row*, *from_col*), row-major."""
        piece = board[from_row][from_col]
        if piece is None or piece_color(piece) != current_player:
            return []

        src = (from_row, from_col)
        moves: list[Square] = []
        for r in range(8):
            for c in range(8):
                dst = (r, c)
                if dst == src:
                    continue
                target = board[r][c]
                if target is not None and piece_color(target) == current_player:
                    continue
                if not self.variant.is_square_playable(dst):
                    continue

                if self._is_castling_request(src, dst, piece):
                    possible = self.can_castle(board, current_player, _castling_side(c))
                else:
                    possible = self.check_basic_move(board, src, dst, piece)

                if possible and self.is_move_safe(board, src, dst, piece):
                    moves.append(dst)
        return moves

    def has_any_legal_move(self, board: Board, color: Color) -> bool:
        return any(
            self.get_valid_moves(board, r, c, color) for r, c in pieces_of(board, color)
        )

    # ── Application ──────────────────────────────────────────────────────

    def apply_move(self, board: Board, src: Square, dst: Square, piece: str) -> MoveOutcome:
        """Apply an already-validated move and return the new board.

        Raises:
            ValueError: if the origin square does not hold *piece*.
        """
        origin = board[src[0]][src[1]]
        if origin is None:
            raise ValueError(f"No piece on {to_algebraic(*src)}")
        if origin != piece:
            raise ValueError(
                f"Square {to_algebraic(*src)} holds {origin!r}, not {piece!r}"
            )

        is_capture = (
            board[dst[0]][dst[1]] is not None
            or self.can_capture_en_passant(board, src, dst)
        )
        new_board, affected = self.simulate_move(board, src, dst, piece)

        if self._is_castling(src, dst, piece):
            notation = "O-O" if dst[1] == 6 else "O-O-O"
        else:
            notation = f"{piece_glyph(piece)} {to_algebraic(*dst)}"
        if is_capture:
            notation += f" {self.variant.capture_marker}"

        self._record_moved(src, dst, piece)
        move = Move(src, dst, piece)
        self.last_move = move

        outcome = MoveOutcome(new_board, notation, affected)
        self.variant.after_move(self, move, outcome)
        _LOGGER.debug("Applied %s (%s)", move, outcome.notation)
        return outcome

    def _record_moved(self, src: Square, dst: Square, piece: str) -> None:
        moved = self.moved
        if is_kind(piece, PieceType.KING):
            moved |= CastlingMoves.king(piece_color(piece))
        for sq in (src, dst):
            if sq in _ROOK_CORNERS:
                moved |= _ROOK_CORNERS[sq]
        self.moved = moved

    # ── Termination ──────────────────────────────────────────────────────

    @staticmethod
    def king_loss_result(board: Board) -> GameResult | None:
        """``None`` unless a king is missing from the board."""
        white_king = find_king(board, Color.WHITE)
        black_king = find_king(board, Color.BLACK)
        if white_king is None and black_king is None:
            return GameResult.DRAW
        if white_king is None:
            return GameResult.BLACK_WINS
        if black_king is None:
            return GameResult.WHITE_WINS
        return None

    def mate_result(
        self, board: Board, side_to_move: Color | None = None
    ) -> GameResult | None:
        """Checkmate / stalemate for *side_to_move* (both sides if omitted)."""
        colors = tuple(Color) if side_to_move is None else (side_to_move,)
        stalemated = False
        for color in colors:
            if self.has_any_legal_move(board, color):
                continue
            if self.is_in_check(board, color):
                return GameResult.win_for(color.opposite)
            stalemated = True
        return GameResult.DRAW if stalemated else None

    def check_game_over(
        self, board: Board, side_to_move: Color | None = None
    ) -> GameResult | None:
        return self.variant.game_over(self, board, side_to_move)

    def end_reason(self, board: Board, result: GameResult) -> GameEndReason:
        return self.variant.end_reason(self, board, result)

    # ── State ────────────────────────────────────────────────────────────

    def get_state(self) -> dict[str, Any]:
        state: dict[str, Any] = {
            "king_moved": {
                name: bool(self.moved & flag) for name, flag in _STATE_KINGS.items()
            },
            "rook_moved": {
                name: bool(self.moved & flag) for name, flag in _STATE_ROOKS.items()
            },
            "last_move": self.last_move.to_dict() if self.last_move else None,
        }
        state.update(self.variant.get_state())
        return state

    def set_state(self, state: dict[str, Any]) -> None:
        """Restore what :meth:`get_state` produced; missing keys are kept."""
        moved = self.moved
        for key, table in (("king_moved", _STATE_KINGS), ("rook_moved", _STATE_ROOKS)):
            flags = state.get(key)
            if flags is None:
                continue
            for name, flag in table.items():
                if name not in flags:
                    continue
                moved = moved | flag if flags[name] else moved & ~flag
        self.moved = moved

        if "last_move" in state:
            last = state["last_move"]
            self.last_move = Move.from_dict(last) if last else None
        self.variant.set_state(state)

    def reset(self) -> None:
        self.moved = CastlingMoves.NONE
        self.last_move = None
        self.variant.reset()

    def fen_flags(self) -> FenFlags:
        castling = ""
        for color, letters in ((Color.WHITE, "KQ"), (Color.BLACK, "kq")):
            if self.moved & CastlingMoves.king(color):
                continue
            for side, letter in zip(CastlingSide, letters):
                if not self.moved & CastlingMoves.rook(color, side):
                    castling += letter

        en_passant = "-"
        last = self.last_move
        if last is not None and is_kind(last.piece, PieceType.PAWN):
            (fr, fc), (tr, tc) = last.from_sq, last.to_sq
            if abs(fr - tr) == 2:
                en_passant = to_algebraic((fr + tr) // 2, tc)

        return FenFlags(castling or "-", en_passant)
