"""Qt bridge that runs a Match on the Qt event loop.

The event loop is the only scheduler: a repeating timer drives clock
ticks and a single-shot timer expires the affected-squares annotation.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from variantchess.core.enums import Color, GameEndReason, GameResult
from variantchess.core.types import Square
from variantchess.game.interfaces import ClickOutcome
from variantchess.game.match import Match, MoveRecord


class MatchDriver(QObject):
    """Forwards clicks to a :class:`Match` and re-emits its events as signals."""

    state_changed = pyqtSignal()
    move_applied = pyqtSignal(object)  # MoveRecord
    invalid_move = pyqtSignal(int, int)
    game_over = pyqtSignal(object, object)  # GameResult, GameEndReason
    clock_updated = pyqtSignal(float, float)  # white, black seconds

    def __init__(self, match: Match, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._match = match

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(match.config.tick_interval_ms)
        self._tick_timer.timeout.connect(self._tick)

        self._affected_timer = QTimer(self)
        self._affected_timer.setSingleShot(True)
        self._affected_timer.timeout.connect(self._expire_affected)

        events = match.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_state_changed.append(self.state_changed.emit)
        events.on_invalid_move.append(self._on_invalid_move)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def match(self) -> Match:
        return self._match

    @property
    def is_running(self) -> bool:
        return self._tick_timer.isActive()

    # ── Control ──────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start ticking and let the match prompt its first player."""
        self._tick_timer.start()
        self._match.start()

    def stop(self) -> None:
        self._tick_timer.stop()
        self._affected_timer.stop()
        if self._match.clock is not None:
            self._match.clock.pause()

    @pyqtSlot(int, int)
    def click(self, row: int, col: int) -> None:
        if self._match.click(row, col) in (ClickOutcome.DESELECTED, ClickOutcome.INVALID):
            self._affected_timer.stop()

    @pyqtSlot(str)
    def submit_engine_move(self, text: str) -> None:
        self._match.submit_coordinate_move(text)

    # ── Internal ─────────────────────────────────────────────────────────

    def _tick(self) -> None:
        self._match.tick()
        clock = self._match.clock
        if clock is not None:
            self.clock_updated.emit(clock.remaining(Color.WHITE), clock.remaining(Color.BLACK))
        if self._match.is_over:
            self._tick_timer.stop()

    def _expire_affected(self) -> None:
        self._match.clear_affected_squares()

    def _on_move(self, record: MoveRecord) -> None:
        if record.affected_squares:
            self._affected_timer.start(self._match.config.affected_squares_ms)
        self.move_applied.emit(record)

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self.game_over.emit(result, reason)

    def _on_invalid_move(self, square: Square) -> None:
        self.invalid_move.emit(square[0], square[1])
