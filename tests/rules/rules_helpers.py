"""Board-building helpers shared by the rules tests."""

from __future__ import annotations

from variantchess.core.board import Board, empty_board, find_king, pieces_of
from variantchess.core.enums import Color
from variantchess.core.types import from_algebraic, parse_coordinate_move
from variantchess.rules.engine import RuleEngine


def make_board(placement: dict[str, str]) -> Board:
    """``{"e1": "K", "e8": "k"}`` -> board."""
    board = empty_board()
    for name, token in placement.items():
        row, col = from_algebraic(name)
        board[row][col] = token
    return board


def play(engine: RuleEngine, board: Board, *moves: str) -> Board:
    """Apply coordinate moves in order, asserting each one is legal."""
    for text in moves:
        src, dst = parse_coordinate_move(text)
        piece = board[src[0]][src[1]]
        assert piece is not None, text
        color = Color.WHITE if piece.isupper() else Color.BLACK
        assert dst in engine.get_valid_moves(board, src[0], src[1], color), text
        board = engine.apply_move(board, src, dst, piece).board
    return board


def assert_moves_sound(engine: RuleEngine, board: Board, color: Color) -> None:
    """Every generated move is geometric, safe, and keeps the king safe."""
    for row, col in pieces_of(board, color):
        piece = board[row][col]
        assert piece is not None
        had_king = find_king(board, color) is not None
        for dst in engine.get_valid_moves(board, row, col, color):
            src = (row, col)
            is_castle = piece.lower() == "k" and abs(dst[1] - col) == 2
            assert is_castle or engine.check_basic_move(board, src, dst, piece)
            assert engine.is_move_safe(board, src, dst, piece)

            future, _affected = engine.simulate_move(board, src, dst, piece)
            if find_king(future, color.opposite) is None:
                continue
            king = find_king(future, color)
            if had_king:
                assert king is not None
            if king is not None:
                assert not engine.is_square_attacked(future, king[0], king[1], color)
