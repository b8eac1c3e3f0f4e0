"""Tests for FEN emission."""

from variantchess.core.board import empty_board, initial_board
from variantchess.core.enums import Color
from variantchess.core.fen import FenFlags, board_to_fen

_START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def _rank_width(rank: str) -> int:
    return sum(int(ch) if ch.isdigit() else 1 for ch in rank)


class TestBoardToFen:
    def test_starting_position(self) -> None:
        fen = board_to_fen(initial_board(), Color.WHITE, FenFlags("KQkq", "-"))
        assert fen == _START

    def test_shape(self) -> None:
        board = initial_board()
        board[4][4] = "P"
        board[6][4] = None
        fen = board_to_fen(board, Color.BLACK, FenFlags("KQkq", "e3"), 1)
        fields = fen.split(" ")
        assert len(fields) == 6
        ranks = fields[0].split("/")
        assert len(ranks) == 8
        assert fields[0].count("/") == 7
        assert all(_rank_width(rank) == 8 for rank in ranks)

    def test_side_and_flags(self) -> None:
        fen = board_to_fen(initial_board(), Color.BLACK, FenFlags("Kq", "d6"), 12)
        assert fen.split(" ")[1:] == ["b", "Kq", "d6", "0", "12"]

    def test_empty_board(self) -> None:
        fen = board_to_fen(empty_board(), Color.WHITE, FenFlags())
        assert fen == "8/8/8/8/8/8/8/8 w - - 0 1"
