"""Tests for Atomic rules."""

import pytest

from rules_helpers import assert_moves_sound, make_board, play

from variantchess.core.board import find_king, initial_board
from variantchess.core.enums import Color, GameEndReason, GameResult
from variantchess.rules.engine import RuleEngine
from variantchess.rules.variants import AtomicRules


@pytest.fixture
def engine() -> RuleEngine:
    return RuleEngine(AtomicRules())


class TestExplosion:
    def test_pawns_are_immune(self, engine: RuleEngine) -> None:
        board = make_board(
            {"c1": "B", "f4": "n", "g5": "p", "e4": "r", "h1": "K", "a8": "k"}
        )
        assert (4, 5) in engine.get_valid_moves(board, 7, 2, Color.WHITE)

        outcome = engine.apply_move(board, (7, 2), (4, 5), "B")
        assert outcome.board[3][6] == "p"
        assert outcome.board[4][4] is None
        assert outcome.board[4][5] is None
        assert outcome.board[7][2] is None
        assert outcome.affected_squares[0] == (4, 5)
        assert set(outcome.affected_squares) == {(4, 5), (4, 4)}
        assert outcome.notation == "♗ f4 💥"

    def test_capturing_pawn_detonates(self, engine: RuleEngine) -> None:
        board = make_board({"e4": "P", "d5": "n", "e1": "K", "e8": "k"})
        outcome = engine.apply_move(board, (4, 4), (3, 3), "P")
        assert outcome.board[4][4] is None
        assert outcome.board[3][3] is None

    def test_no_promotion_on_capture(self, engine: RuleEngine) -> None:
        board = make_board({"b7": "P", "a8": "n", "e1": "K", "h6": "k"})
        outcome = engine.apply_move(board, (1, 1), (0, 0), "P")
        assert outcome.board[0][0] is None
        assert outcome.board[1][1] is None

    def test_en_passant_blast_centres_on_passed_pawn(self, engine: RuleEngine) -> None:
        board = make_board({"e1": "K", "e8": "k", "e5": "P", "d7": "p", "c5": "N"})
        board = play(engine, board, "d7d5")
        outcome = engine.apply_move(board, (3, 4), (2, 3), "P")
        assert outcome.affected_squares[0] == (3, 3)
        assert (3, 2) in outcome.affected_squares
        assert outcome.board[3][2] is None
        assert outcome.board[3][4] is None
        assert outcome.board[2][3] is None
        assert outcome.notation == "♙ d6 💥"

    def test_quiet_move_is_standard(self, engine: RuleEngine) -> None:
        outcome = engine.apply_move(initial_board(), (6, 4), (4, 4), "P")
        assert outcome.notation == "♙ e4"
        assert outcome.affected_squares == []
        assert outcome.board[4][4] == "P"


class TestKingRules:
    def test_king_may_not_capture(self, engine: RuleEngine) -> None:
        board = make_board({"e1": "K", "e2": "p", "e8": "k"})
        assert engine.check_basic_move(board, (7, 4), (6, 4), "K")
        assert (6, 4) not in engine.get_valid_moves(board, 7, 4, Color.WHITE)

    def test_blast_next_to_own_king_is_illegal(self, engine: RuleEngine) -> None:
        board = make_board({"e1": "K", "b1": "N", "d2": "n", "e8": "k"})
        assert engine.get_valid_moves(board, 7, 1, Color.WHITE) == [(5, 0), (5, 2)]

    def test_blowing_up_enemy_king_wins(self, engine: RuleEngine) -> None:
        board = make_board({"e8": "k", "d8": "n", "d1": "R", "a1": "K"})
        assert (0, 3) in engine.get_valid_moves(board, 7, 3, Color.WHITE)

        board = engine.apply_move(board, (7, 3), (0, 3), "R").board
        assert find_king(board, Color.BLACK) is None
        assert engine.check_game_over(board, Color.BLACK) == GameResult.WHITE_WINS
        assert engine.end_reason(board, GameResult.WHITE_WINS) == GameEndReason.KING_LOST

    def test_double_king_loss_is_draw(self, engine: RuleEngine) -> None:
        board = make_board({"e3": "K", "c5": "k", "d4": "n", "a4": "R"})
        assert engine.is_move_safe(board, (4, 0), (4, 3), "R")

        board = engine.apply_move(board, (4, 0), (4, 3), "R").board
        assert engine.check_game_over(board) == GameResult.DRAW


class TestSoundness:
    def test_generated_moves_are_safe(self, engine: RuleEngine) -> None:
        board = initial_board()
        assert_moves_sound(engine, board, Color.WHITE)
        board = play(engine, board, "e2e4", "d7d5", "g1f3", "c8g4")
        assert_moves_sound(engine, board, Color.WHITE)
        assert_moves_sound(engine, board, Color.BLACK)
