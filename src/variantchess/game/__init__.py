"""Game management layer - match state machine, players, clock.

Quick start::

    from variantchess.game import Match, MatchConfig, TimeControl

    match = Match("atomic", config=MatchConfig(TimeControl.blitz_5m()))
    match.start()
    match.click(6, 4)
    match.click(4, 4)

The Qt driver lives in :mod:`variantchess.game.qt_bridge` and is not
imported here, so the rest of the layer works without a Qt runtime.
"""

from variantchess.game.clock import Clock
from variantchess.game.interfaces import (
    ClickOutcome,
    IClock,
    IPlayer,
    MatchConfig,
    MatchMode,
    TimeControl,
)
from variantchess.game.match import Match, MatchEvents, MatchSnapshot, MoveRecord
from variantchess.game.player import EnginePlayer, HumanPlayer

__all__ = [
    # Interfaces / config
    "ClickOutcome",
    "IClock",
    "IPlayer",
    "MatchConfig",
    "MatchMode",
    "TimeControl",
    # Concrete
    "Clock",
    "EnginePlayer",
    "HumanPlayer",
    "Match",
    "MatchEvents",
    "MatchSnapshot",
    "MoveRecord",
]
