"""Tests for Player implementations."""

from variantchess.core.enums import Color
from variantchess.game.player import EnginePlayer, HumanPlayer

_START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
_AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_prompts_are_ignored(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.request_move(_START)
        p.cancel()
        p.settle()


class TestEnginePlayer:
    def test_properties(self) -> None:
        p = EnginePlayer(Color.BLACK, "Oracle")
        assert p.color == Color.BLACK
        assert p.name == "Oracle"
        assert p.is_human is False
        assert p.pending_fen is None

    def test_request_move_forwards_fen(self) -> None:
        called_with: list[str] = []
        p = EnginePlayer(Color.BLACK, on_request_move=called_with.append)
        p.request_move(_START)
        assert called_with == [_START]
        assert p.pending_fen == _START

    def test_repeated_prompt_is_dropped(self) -> None:
        called_with: list[str] = []
        p = EnginePlayer(Color.BLACK, on_request_move=called_with.append)
        p.request_move(_START)
        p.request_move(_START)
        p.request_move(_AFTER_E4)
        assert called_with == [_START, _AFTER_E4]

    def test_cancel_only_when_pending(self) -> None:
        cancelled: list[bool] = []
        p = EnginePlayer(Color.BLACK, on_cancel=lambda: cancelled.append(True))
        p.cancel()
        assert cancelled == []
        p.request_move(_START)
        p.cancel()
        p.cancel()
        assert cancelled == [True]
        assert p.pending_fen is None

    def test_settle_clears_without_cancelling(self) -> None:
        cancelled: list[bool] = []
        called_with: list[str] = []
        p = EnginePlayer(
            Color.BLACK,
            on_request_move=called_with.append,
            on_cancel=lambda: cancelled.append(True),
        )
        p.request_move(_START)
        p.settle()
        p.cancel()
        assert cancelled == []
        p.request_move(_START)
        assert called_with == [_START, _START]

    def test_no_callback_no_error(self) -> None:
        p = EnginePlayer(Color.BLACK)
        p.request_move(_START)
        p.cancel()
