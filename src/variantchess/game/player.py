"""Match participants: click-driven humans and callback-driven engines."""

from __future__ import annotations

import logging
from collections.abc import Callable

from variantchess.core.enums import Color
from variantchess.game.interfaces import IPlayer

_LOGGER = logging.getLogger(__name__)


class _Seat(IPlayer):
    """Colour and display name shared by every participant."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class HumanPlayer(_Seat):
    """A person at the board; moves arrive through ``Match.click``."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, fen: str) -> None:
        pass

    def cancel(self) -> None:
        pass


class EnginePlayer(_Seat):
    """An external move oracle reached through callbacks.

    At most one request is outstanding. Prompting again for the position
    already being searched is ignored, so a peer sync that leaves the
    board unchanged does not restart the search. ``cancel`` only reaches
    the oracle while a request is outstanding.

    Args:
        color: Side the engine plays.
        name: Display name.
        on_request_move: ``(fen) -> None``, called when it is this side's turn.
        on_cancel: ``() -> None``, called to abort an outstanding request.
    """

    __slots__ = ("_on_request_move", "_on_cancel", "_pending_fen")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[str], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel
        self._pending_fen: str | None = None

    @property
    def is_human(self) -> bool:
        return False

    @property
    def pending_fen(self) -> str | None:
        """Position the oracle is currently asked about."""
        return self._pending_fen

    def request_move(self, fen: str) -> None:
        if fen == self._pending_fen:
            return
        self._pending_fen = fen
        _LOGGER.debug("%s asked to move in %s", self._name, fen)
        if self._on_request_move is not None:
            self._on_request_move(fen)

    def cancel(self) -> None:
        if self._pending_fen is None:
            return
        _LOGGER.debug("%s request withdrawn", self._name)
        self._pending_fen = None
        if self._on_cancel is not None:
            self._on_cancel()

    def settle(self) -> None:
        self._pending_fen = None
