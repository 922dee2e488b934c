from __future__ import annotations

import logging
from typing import Mapping, Optional

from pydantic import ValidationError

from live_odds.domain.entities.match import Match
from live_odds.domain.entities.odds import Odds, odds_map
from live_odds.domain.interfaces.data_source import HistoricalDataSource
from live_odds.domain.interfaces.feed import OddsFeed
from live_odds.domain.value_objects.enums import ConnectionState
from live_odds.domain.value_objects.ids import MatchId
from live_odds.infrastructure.data_sources import DataSourceError
from live_odds.infrastructure.subject import Subject, Subscription

logger = logging.getLogger(__name__)


class MatchListReconciler:
    """View model holding the authoritative match list and odds map.

    - ``load_initial`` replaces both from the historical data source.
    - Feed odds are upserted one by one (last writer wins).
    - Feed connection states are republished unchanged.

    Every change is published on ``matches_changed``, ``odds_changed`` or
    ``connection_state_changed``. Published odds maps are fresh dicts, so an
    observer may keep the previous one to diff against.

    State is only touched from the feed's event loop.
    """

    def __init__(self, data_source: HistoricalDataSource, feed: OddsFeed) -> None:
        self._data_source = data_source
        self._feed = feed
        self._matches: list[Match] = []
        self._odds: dict[MatchId, Odds] = {}
        self._connection_state: ConnectionState = feed.state

        self.matches_changed: Subject[list[Match]] = Subject("matches_changed")
        self.odds_changed: Subject[dict[MatchId, Odds]] = Subject("odds_changed")
        self.connection_state_changed: Subject[ConnectionState] = Subject(
            "connection_state_changed"
        )

        self._subscriptions: list[Subscription] = [
            feed.odds_events.subscribe(self.apply_odds),
            feed.connection_states.subscribe(self._on_connection_state),
        ]

    @property
    def matches(self) -> list[Match]:
        return list(self._matches)

    @property
    def odds(self) -> Mapping[MatchId, Odds]:
        return dict(self._odds)

    @property
    def connection_state(self) -> ConnectionState:
        return self._connection_state

    def odds_for(self, match_id: MatchId) -> Optional[Odds]:
        return self._odds.get(match_id)

    async def load_initial(self) -> bool:
        """Fetch matches and odds and replace the current state.

        On failure the previous state stays visible, the error is logged and
        ``False`` is returned; nothing is raised to the caller.
        """
        try:
            matches = await self._data_source.fetch_matches()
            odds = await self._data_source.fetch_odds()
        except (DataSourceError, ValidationError) as exc:
            logger.error(
                "Initial load failed: %s",
                exc,
                extra={"error": type(exc).__name__},
            )
            return False

        self._matches = sorted(matches, key=lambda m: m.start_time, reverse=True)
        # Feed updates that raced ahead of the fetch are discarded with the old map
        self._odds = odds_map(odds)
        logger.info(
            "Initial load complete",
            extra={"matches": len(self._matches), "odds": len(self._odds)},
        )
        self.matches_changed.send(self.matches)
        self.odds_changed.send(dict(self._odds))
        return True

    def apply_odds(self, odds: Odds) -> None:
        self._odds[odds.match_id] = odds
        self.odds_changed.send(dict(self._odds))

    def start(self) -> None:
        self._feed.start()

    def stop(self) -> None:
        self._feed.stop()

    def close(self) -> None:
        """Tear the feed down, then detach from it."""
        self._feed.close()
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()

    def _on_connection_state(self, state: ConnectionState) -> None:
        self._connection_state = state
        self.connection_state_changed.send(state)
