"""Tests for Portal (toroidal) rules."""

import pytest

from rules_helpers import assert_moves_sound, make_board, play

from variantchess.core.board import empty_board, initial_board
from variantchess.core.enums import Color
from variantchess.rules.engine import RuleEngine
from variantchess.rules.variants import PortalRules
from variantchess.rules.variants.portal import wrapped_ray


@pytest.fixture
def engine() -> RuleEngine:
    return RuleEngine(PortalRules())


class TestWrappedRay:
    def test_wraps_and_stops_before_origin(self) -> None:
        ray = wrapped_ray((4, 6), (0, 1))
        assert ray == [(4, 7), (4, 0), (4, 1), (4, 2), (4, 3), (4, 4), (4, 5)]

    def test_diagonal_wraps_both_axes(self) -> None:
        assert wrapped_ray((0, 0), (-1, -1))[0] == (7, 7)


class TestSliders:
    def test_rook_wraps_round_own_blocker(self, engine: RuleEngine) -> None:
        board = make_board({"a4": "R", "b4": "P", "e1": "K", "e8": "k"})
        moves = engine.get_valid_moves(board, 4, 0, Color.WHITE)
        assert (4, 7) in moves
        assert (4, 2) in moves
        assert (4, 1) not in moves

        standard = RuleEngine()
        assert (4, 7) not in standard.get_valid_moves(board, 4, 0, Color.WHITE)

    def test_wrapped_path_is_occluded(self, engine: RuleEngine) -> None:
        board = make_board({"a4": "R", "b4": "P", "h4": "n", "e1": "K", "e8": "k"})
        moves = engine.get_valid_moves(board, 4, 0, Color.WHITE)
        assert (4, 7) in moves
        assert (4, 6) not in moves
        assert (4, 2) not in moves

    def test_bishop_wraps(self, engine: RuleEngine) -> None:
        board = empty_board()
        assert engine.check_basic_move(board, (4, 7), (3, 0), "B")
        assert not RuleEngine().check_basic_move(board, (4, 7), (3, 0), "B")

    def test_destinations_are_unique(self, engine: RuleEngine) -> None:
        board = make_board({"d4": "R", "h1": "K", "a8": "k"})
        moves = engine.get_valid_moves(board, 4, 3, Color.WHITE)
        assert len(moves) == len(set(moves)) == 14


class TestNonSliders:
    def test_knight_does_not_wrap(self, engine: RuleEngine) -> None:
        assert not engine.check_basic_move(empty_board(), (7, 0), (6, 6), "N")

    def test_king_does_not_wrap(self, engine: RuleEngine) -> None:
        assert not engine.check_basic_move(empty_board(), (4, 0), (4, 7), "K")

    def test_pawn_does_not_wrap(self, engine: RuleEngine) -> None:
        board = make_board({"a7": "p"})
        assert not engine.check_basic_move(board, (1, 0), (0, 0), "p")
        assert not engine.check_basic_move(board, (1, 0), (2, 7), "p", ignore_safety=True)


class TestCheck:
    def test_check_through_portal(self, engine: RuleEngine) -> None:
        board = make_board({"h4": "K", "b4": "r", "e4": "P", "a8": "k"})
        assert engine.is_in_check(board, Color.WHITE)
        assert not RuleEngine().is_in_check(board, Color.WHITE)

    def test_generated_moves_are_safe(self, engine: RuleEngine) -> None:
        board = play(engine, initial_board(), "e2e4", "e7e5", "d1h5")
        assert_moves_sound(engine, board, Color.BLACK)
