"""Match - the selection / move / termination state machine.

Coordinates the board, one RuleEngine, the clock and the players.
Emits events via simple callbacks so a renderer, a network sync layer or
tests can subscribe; nothing outside this class mutates its state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from variantchess.core.board import (
    Board,
    clone,
    eliminated_pieces,
    flatten,
    initial_board,
    unflatten,
)
from variantchess.core.enums import Color, GameEndReason, GameResult, VariantKind
from variantchess.core.fen import board_to_fen
from variantchess.core.piece import piece_color
from variantchess.core.types import Square, parse_coordinate_move, to_algebraic
from variantchess.game.clock import Clock
from variantchess.game.interfaces import (
    ClickOutcome,
    IPlayer,
    MatchConfig,
    MatchMode,
)
from variantchess.game.player import HumanPlayer
from variantchess.rules.engine import RuleEngine
from variantchess.rules.variants import VariantRules, create_rules

_LOGGER = logging.getLogger(__name__)

# ── Records ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One applied move plus the board as it stood right after it."""

    from_sq: Square
    to_sq: Square
    piece: str
    notation: str
    board: Board
    affected_squares: tuple[Square, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": list(self.from_sq),
            "to": list(self.to_sq),
            "piece": self.piece,
            "notation": self.notation,
            "board": flatten(self.board),
            "affected_squares": [list(sq) for sq in self.affected_squares],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MoveRecord:
        return cls(
            from_sq=_square(data["from"]),
            to_sq=_square(data["to"]),
            piece=str(data["piece"]),
            notation=str(data.get("notation", "")),
            board=unflatten(data["board"]),
            affected_squares=tuple(_square(sq) for sq in data.get("affected_squares", ())),
        )


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    """Everything a remote peer needs to mirror a match."""

    board: list[str | None]
    turn: Color
    history: tuple[MoveRecord, ...]
    variant_state: dict[str, Any]
    white_time: float | None = None
    black_time: float | None = None
    result: GameResult | None = None
    end_reason: GameEndReason | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": list(self.board),
            "turn": str(self.turn),
            "history": [record.to_dict() for record in self.history],
            "variant_state": dict(self.variant_state),
            "white_time": self.white_time,
            "black_time": self.black_time,
            "result": None if self.result is None else str(self.result),
            "end_reason": None if self.end_reason is None else self.end_reason.name.lower(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchSnapshot:
        result = data.get("result")
        reason = data.get("end_reason")
        return cls(
            board=list(data["board"]),
            turn=Color.parse(data["turn"]),
            history=tuple(MoveRecord.from_dict(r) for r in data.get("history") or ()),
            variant_state=dict(data.get("variant_state") or {}),
            white_time=data.get("white_time"),
            black_time=data.get("black_time"),
            result=GameResult.parse(result) if result else None,
            end_reason=GameEndReason[reason.upper()] if reason else None,
        )


def _square(value: Any) -> Square:
    return (int(value[0]), int(value[1]))


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]
StateCallback = Callable[[], None]
InvalidMoveCallback = Callable[[Square], None]


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_invalid_move: list[InvalidMoveCallback] = field(default_factory=list)


# ── Match ────────────────────────────────────────────────────────────────────


class Match:
    """One game of one variant.

    States are *no selection* and *piece selected*; :meth:`click` drives
    them. Every applied move goes through :meth:`submit_move`, whether it
    came from a click or from an engine answer.

    Args:
        variant: Variant kind (or transport name), or a ready rule set.
        mode: Local, AI or online play.
        player_color: The side this board controls in AI / online mode.
        config: Clock and annotation timing.
        white, black: Players; humans by default.
    """

    __slots__ = (
        "_engine",
        "_mode",
        "_player_color",
        "_config",
        "_clock",
        "_players",
        "_board",
        "_turn",
        "_selected",
        "_result",
        "_end_reason",
        "_history",
        "_review_index",
        "_affected",
        "_affected_expires",
        "_opponent_connected",
        "events",
    )

    def __init__(
        self,
        variant: VariantKind | str | VariantRules = VariantKind.STANDARD,
        *,
        mode: MatchMode = MatchMode.LOCAL,
        player_color: Color = Color.WHITE,
        config: MatchConfig | None = None,
        white: IPlayer | None = None,
        black: IPlayer | None = None,
    ) -> None:
        rules = variant if isinstance(variant, VariantRules) else create_rules(variant)
        self._engine = RuleEngine(rules)
        self._mode = mode
        self._player_color = player_color
        self._config = config or MatchConfig()
        tc = self._config.time_control
        self._clock: Clock | None = Clock(tc) if tc is not None else None
        self._players: dict[Color, IPlayer] = {
            Color.WHITE: white or HumanPlayer(Color.WHITE),
            Color.BLACK: black or HumanPlayer(Color.BLACK),
        }
        self._opponent_connected = False
        self.events = MatchEvents()

        self._board: Board = initial_board()
        self._turn = Color.WHITE
        self._selected: Square | None = None
        self._result: GameResult | None = None
        self._end_reason: GameEndReason | None = None
        self._history: list[MoveRecord] = []
        self._review_index = -1
        self._affected: list[Square] = []
        self._affected_expires = 0.0

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> RuleEngine:
        return self._engine

    @property
    def variant(self) -> VariantKind:
        return self._engine.variant.kind

    @property
    def mode(self) -> MatchMode:
        return self._mode

    @property
    def player_color(self) -> Color:
        return self._player_color

    @property
    def config(self) -> MatchConfig:
        return self._config

    @property
    def clock(self) -> Clock | None:
        return self._clock

    @property
    def board(self) -> Board:
        """The live board. Treat as read-only."""
        return self._board

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def result(self) -> GameResult | None:
        return self._result

    @property
    def end_reason(self) -> GameEndReason | None:
        return self._end_reason

    @property
    def is_over(self) -> bool:
        return self._result is not None

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def review_index(self) -> int:
        return self._review_index

    @property
    def opponent_connected(self) -> bool:
        return self._opponent_connected

    @property
    def affected_squares(self) -> list[Square]:
        """Transient blast / collapse annotation; empty once expired."""
        if self._affected and time.monotonic() >= self._affected_expires:
            self._affected = []
        return list(self._affected)

    @property
    def display_board(self) -> Board:
        """The live board, or the reviewed historical one."""
        if self._review_index == -1:
            return self._board
        return self._history[self._review_index].board

    def player(self, color: Color) -> IPlayer:
        return self._players[color]

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start the clock (when allowed) and prompt an engine to move."""
        self._resume_clock()
        self._prompt_current_player()
        self._emit_state_changed()

    def reset(self) -> None:
        """Back to the initial position with fresh engine and clock state."""
        self._cancel_players()
        self._engine.reset()
        self._board = initial_board()
        self._turn = Color.WHITE
        self._selected = None
        self._result = None
        self._end_reason = None
        self._history = []
        self._review_index = -1
        self._affected = []
        if self._clock is not None:
            self._clock.reset()
        _LOGGER.info("Match reset (%s)", self.variant)
        self.start()

    def set_opponent_connected(self, connected: bool) -> None:
        self._opponent_connected = connected
        if connected:
            self._resume_clock()
        elif self._mode == MatchMode.ONLINE and self._clock is not None:
            self._clock.pause()
        self._emit_state_changed()

    # ── Input ────────────────────────────────────────────────────────────

    def click(self, row: int, col: int) -> ClickOutcome:
        """Feed one "square clicked" event into the selection machine."""
        if not self._accepts_input():
            return ClickOutcome.IGNORED

        square = (row, col)
        token = self._board[row][col]
        is_friendly = token is not None and piece_color(token) == self._turn

        if self._selected is None:
            if not is_friendly:
                return ClickOutcome.IGNORED
            self._selected = square
            self._emit_state_changed()
            return ClickOutcome.SELECTED

        if square == self._selected:
            self._selected = None
            self._affected = []
            self._emit_state_changed()
            return ClickOutcome.DESELECTED

        if is_friendly:
            self._selected = square
            self._emit_state_changed()
            return ClickOutcome.SELECTED

        if square in self.valid_moves_for_selection():
            if self.submit_move(self._selected, square):
                return ClickOutcome.MOVED
            return ClickOutcome.IGNORED

        self._selected = None
        self._affected = []
        self._reject(square)
        self._emit_state_changed()
        return ClickOutcome.INVALID

    def valid_moves_for_selection(self) -> list[Square]:
        if self._selected is None:
            return []
        return self._engine.get_valid_moves(
            self._board, self._selected[0], self._selected[1], self._turn
        )

    def submit_coordinate_move(self, text: str) -> bool:
        """Play an engine answer such as ``"e7e5"`` through normal validation."""
        try:
            src, dst = parse_coordinate_move(text)
        except ValueError:
            _LOGGER.warning("Ignoring malformed engine move %r", text)
            return False
        return self.submit_move(src, dst)

    def submit_move(self, src: Square, dst: Square) -> bool:
        """Validate and apply one move for the side to move.

        Returns ``False`` when the match is over or the move is not legal,
        leaving state untouched, and also when the mover.s flag has fallen,
        which ends the match on time instead.
        """
        if self.is_over:
            return False

        piece = self._board[src[0]][src[1]]
        if piece is None or dst not in self._engine.get_valid_moves(
            self._board, src[0], src[1], self._turn
        ):
            _LOGGER.debug(
                "Rejected %s%s for %s", to_algebraic(*src), to_algebraic(*dst), self._turn
            )
            self._reject(dst)
            return False

        mover = self._turn

        if (
            self._clock is not None
            and self._clock.is_running
            and not self._clock.complete_move(mover)
        ):
            self._finish(GameResult.win_for(mover.opposite), GameEndReason.TIMEOUT)
            self._emit_state_changed()
            return False

        outcome = self._engine.apply_move(self._board, src, dst, piece)
        self._board = outcome.board
        record = MoveRecord(
            src,
            dst,
            piece,
            outcome.notation,
            clone(outcome.board),
            tuple(outcome.affected_squares),
        )
        self._history.append(record)
        self._players[mover].settle()
        self._review_index = -1
        self._selected = None
        self._turn = mover.opposite
        self._set_affected(outcome.affected_squares)

        for cb in self.events.on_move:
            cb(record)

        result = self._engine.check_game_over(self._board, self._turn)
        if result is not None:
            self._finish(result, self._engine.end_reason(self._board, result))
        else:
            self._resume_clock()
            self._prompt_current_player()
        self._emit_state_changed()
        return True

    def tick(self) -> None:
        """Periodic housekeeping: expire annotations and detect flag fall."""
        if self._affected and time.monotonic() >= self._affected_expires:
            self.clear_affected_squares()
        if self.is_over or self._clock is None or not self._clock.is_running:
            return
        if self._clock.has_flagged(self._turn):
            self._finish(GameResult.win_for(self._turn.opposite), GameEndReason.TIMEOUT)
            self._emit_state_changed()

    def clear_affected_squares(self) -> None:
        if not self._affected:
            return
        self._affected = []
        self._emit_state_changed()

    # ── Review ───────────────────────────────────────────────────────────

    def set_review_index(self, index: int) -> bool:
        """Show the board after history[*index*] (``-1`` = live).

        Only allowed once the match has ended.
        """
        if not self.is_over or not -1 <= index < len(self._history):
            return False
        self._review_index = index
        self._emit_state_changed()
        return True

    def step_review(self, step: int) -> bool:
        """``-2`` first, ``-1`` back, ``1`` forward, ``2`` last move."""
        last = len(self._history) - 1
        current = self._review_index
        if step == -2:
            index = 0
        elif step == 2:
            index = last
        elif step == -1:
            index = last if current == -1 else max(0, current - 1)
        elif step == 1:
            index = -1 if current in (-1, last) else current + 1
        else:
            raise ValueError(f"Invalid review step: {step}")
        return self.set_review_index(index)

    # ── Views ────────────────────────────────────────────────────────────

    def fen(self) -> str:
        return board_to_fen(
            self._board,
            self._turn,
            self._engine.fen_flags(),
            len(self._history) // 2 + 1,
        )

    def eliminated_pieces(self) -> dict[Color, list[str]]:
        return eliminated_pieces(self._board)

    # ── Sync ─────────────────────────────────────────────────────────────

    def snapshot(self) -> MatchSnapshot:
        white_time = black_time = None
        if self._clock is not None:
            white_time = self._clock.remaining(Color.WHITE)
            black_time = self._clock.remaining(Color.BLACK)
        return MatchSnapshot(
            board=flatten(self._board),
            turn=self._turn,
            history=tuple(self._history),
            variant_state=self._engine.get_state(),
            white_time=white_time,
            black_time=black_time,
            result=self._result,
            end_reason=self._end_reason,
        )

    def sync_state(self, snapshot: MatchSnapshot) -> None:
        """Overwrite live state with a remote peer's snapshot."""
        if self._clock is not None:
            self._clock.pause()
        self._board = unflatten(snapshot.board)
        self._turn = snapshot.turn
        self._history = list(snapshot.history)
        self._engine.set_state(snapshot.variant_state)
        self._selected = None
        self._review_index = -1
        self._affected = []
        if self._clock is not None:
            if snapshot.white_time is not None:
                self._clock.set_remaining(Color.WHITE, snapshot.white_time)
            if snapshot.black_time is not None:
                self._clock.set_remaining(Color.BLACK, snapshot.black_time)

        self._result = snapshot.result
        self._end_reason = snapshot.end_reason
        if self._result is None:
            self._resume_clock()
            self._prompt_current_player()
        else:
            self._cancel_players()
        self._emit_state_changed()

    # ── Internal ─────────────────────────────────────────────────────────

    def _accepts_input(self) -> bool:
        if self.is_over:
            return False
        if self._mode in (MatchMode.AI, MatchMode.ONLINE) and self._turn != self._player_color:
            return False
        return self._mode != MatchMode.ONLINE or self._opponent_connected

    def _clock_may_run(self) -> bool:
        if self._clock is None or self.is_over:
            return False
        if self._mode == MatchMode.ONLINE:
            return self._opponent_connected and bool(self._history)
        return True

    def _resume_clock(self) -> None:
        if self._clock_may_run():
            assert self._clock is not None
            self._clock.resume(self._turn)

    def _set_affected(self, squares: list[Square]) -> None:
        self._affected = list(squares)
        self._affected_expires = time.monotonic() + self._config.affected_squares_ms / 1000

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        if self._clock is not None:
            self._clock.pause()
        self._result = result
        self._end_reason = reason
        self._selected = None
        self._cancel_players()
        _LOGGER.info("Match over: %s (%s)", result, reason.name.lower())
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _prompt_current_player(self) -> None:
        player = self._players[self._turn]
        if not player.is_human and not self.is_over:
            player.request_move(self.fen())

    def _cancel_players(self) -> None:
        for player in self._players.values():
            if not player.is_human:
                player.cancel()

    def _reject(self, square: Square) -> None:
        for cb in self.events.on_invalid_move:
            cb(square)

    def _emit_state_changed(self) -> None:
        for cb in self.events.on_state_changed:
            cb()
