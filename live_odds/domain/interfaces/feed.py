from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..entities.odds import Odds
from ..value_objects.enums import ConnectionState

if TYPE_CHECKING:  # pragma: no cover
    from live_odds.infrastructure.subject import Subject


class OddsFeed(Protocol):
    """Push channel of odds updates plus its connection state.

    >>> feed.start()  # doctest: +SKIP
    >>> feed.state  # doctest: +SKIP
    <ConnectionState.CONNECTED: 'connected'>
    """

    odds_events: "Subject[Odds]"
    connection_states: "Subject[ConnectionState]"

    @property
    def state(self) -> ConnectionState: ...

    def start(self) -> None:
        """Connect and begin emitting; a no-op when already running."""

    def stop(self) -> None:
        """Stop emitting; emits ``DISCONNECTED`` only if it was running."""

    def close(self) -> None:
        """Tear down, cancelling any deferred work."""
