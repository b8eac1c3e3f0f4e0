"""Tests for the Qt match driver."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from variantchess.core.enums import Color, GameEndReason, GameResult, VariantKind
from variantchess.game.interfaces import MatchConfig, TimeControl
from variantchess.game.match import Match, MoveRecord
from variantchess.game.qt_bridge import MatchDriver


@pytest.fixture
def driver(qapp: object) -> MatchDriver:
    del qapp
    return MatchDriver(Match(config=MatchConfig(time_control=None)))


class TestMatchDriver:
    def test_wraps_slotted_match(self, qapp: object) -> None:
        del qapp
        match = Match(VariantKind.ATOMIC, config=MatchConfig(time_control=None))
        driver = MatchDriver(match)
        assert driver.match is match
        assert not driver.is_running

    def test_click_move_emits_signals(self, driver: MatchDriver) -> None:
        moved = QSignalSpy(driver.move_applied)
        changed = QSignalSpy(driver.state_changed)

        driver.click(6, 4)
        driver.click(4, 4)

        assert len(moved) == 1
        record = moved[0][0]
        assert isinstance(record, MoveRecord)
        assert record.notation == "♙ e4"
        assert len(changed) >= 2
        assert driver.match.turn == Color.BLACK

    def test_invalid_click_emits_square(self, driver: MatchDriver) -> None:
        invalid = QSignalSpy(driver.invalid_move)

        driver.click(6, 4)
        driver.click(3, 4)

        assert len(invalid) == 1
        assert invalid[0][0] == 3
        assert invalid[0][1] == 4

    def test_game_over_signal(self, driver: MatchDriver) -> None:
        over = QSignalSpy(driver.game_over)
        for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
            driver.submit_engine_move(text)

        assert len(over) == 1
        assert over[0][0] == GameResult.BLACK_WINS
        assert over[0][1] == GameEndReason.CHECKMATE

    def test_start_and_stop(self, driver: MatchDriver) -> None:
        driver.start()
        assert driver.is_running
        driver.stop()
        assert not driver.is_running

    def test_tick_reports_clock(self, qapp: object) -> None:
        del qapp
        match = Match(config=MatchConfig(time_control=TimeControl(300, 0)))
        driver = MatchDriver(match)
        updates = QSignalSpy(driver.clock_updated)

        driver.start()
        driver._tick()

        assert len(updates) == 1
        assert updates[0][0] <= 300.0
        assert updates[0][1] == 300.0
        driver.stop()

    def test_timeout_through_tick(self, qapp: object) -> None:
        del qapp
        match = Match(config=MatchConfig(time_control=TimeControl(0.0, 0)))
        driver = MatchDriver(match)
        over = QSignalSpy(driver.game_over)

        driver.start()
        driver._tick()

        assert len(over) == 1
        assert over[0][0] == GameResult.BLACK_WINS
        assert over[0][1] == GameEndReason.TIMEOUT
        assert not driver.is_running

    def test_affected_squares_cleared_by_timer(self, qapp: object) -> None:
        del qapp
        config = MatchConfig(time_control=None, affected_squares_ms=10)
        driver = MatchDriver(Match(VariantKind.ATOMIC, config=config))
        for text in ("e2e4", "d7d5", "e4d5"):
            driver.submit_engine_move(text)
        assert driver.match.affected_squares == [(3, 3)]

        changed = QSignalSpy(driver.state_changed)
        assert changed.wait(500)
        assert driver.match.affected_squares == []

    def test_invalid_click_discards_affected_squares(self, qapp: object) -> None:
        del qapp
        driver = MatchDriver(Match(VariantKind.ATOMIC, config=MatchConfig(time_control=None)))
        for text in ("e2e4", "d7d5", "e4d5"):
            driver.submit_engine_move(text)
        invalid = QSignalSpy(driver.invalid_move)

        driver.click(1, 0)
        driver.click(4, 0)

        assert len(invalid) == 1
        assert driver.match.affected_squares == []
