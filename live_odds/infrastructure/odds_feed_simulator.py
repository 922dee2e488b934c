from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from live_odds.config.settings import FeedSettings
from live_odds.domain.entities.odds import Odds
from live_odds.domain.value_objects.enums import ConnectionState
from live_odds.domain.value_objects.ids import MatchId
from live_odds.infrastructure.subject import Subject

logger = logging.getLogger(__name__)


class OddsFeedSimulator:
    """Stand-in for a live odds push channel.

    Features:
    - A periodic tick on the owning event loop emits ``sample_size`` odds
      updates for distinct ids drawn from the configured pool.
    - Each tick may instead simulate a dropped connection: the feed stops,
      reports ``RECONNECTING`` and calls :meth:`start` again after
      ``reconnect_delay``.
    - ``stop()`` cancels the tick but leaves an armed reconnect in place, so
      a stopped feed can come back by itself. ``close()`` cancels both.

    All callbacks run on ``loop``; subscribers are invoked from there.
    """

    def __init__(
        self,
        settings: Optional[FeedSettings] = None,
        *,
        rng: Optional[random.Random] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._settings = settings if settings is not None else FeedSettings()
        self._rng = rng if rng is not None else random.Random()
        self._loop = loop
        self._pool: list[int] = list(self._settings.pool)

        self.odds_events: Subject[Odds] = Subject("odds_events")
        self.connection_states: Subject[ConnectionState] = Subject("connection_states")

        self._state = ConnectionState.DISCONNECTED
        self._running = False
        self._next_tick_at = 0.0
        self._tick_handle: Optional[asyncio.TimerHandle] = None
        self._reconnect_handle: Optional[asyncio.TimerHandle] = None

    @property
    def settings(self) -> FeedSettings:
        return self._settings

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_handle is not None

    def start(self) -> None:
        if self._running:
            return
        loop = self._get_loop()
        self._running = True
        logger.info("Odds feed connected", extra={"pool_size": len(self._pool)})
        self._set_state(ConnectionState.CONNECTED)
        # A subscriber may have stopped or restarted us while handling CONNECTED
        if self._running and self._tick_handle is None:
            self._next_tick_at = loop.time()
            self._schedule_tick()

    def stop(self) -> None:
        self._cancel_tick()
        if not self._running:
            return
        self._running = False
        logger.info("Odds feed disconnected")
        self._set_state(ConnectionState.DISCONNECTED)

    def close(self) -> None:
        """Stop the feed and drop any pending automatic reconnect."""
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None
        self.stop()

    def tick(self) -> list[Odds]:
        """Run one feed cycle and return the odds it emitted.

        Returns an empty list when the feed is not running or when this cycle
        simulated a disconnect.
        """
        if not self._running:
            return []
        s = self._settings
        if self._rng.random() < s.disconnect_probability:
            self._simulate_disconnect()
            return []

        emitted: list[Odds] = []
        for match_id in self._rng.sample(self._pool, s.sample_size):
            odds = Odds(
                match_id=MatchId(match_id),
                team_a_odds=self._rng.uniform(s.odds_min, s.odds_max),
                team_b_odds=self._rng.uniform(s.odds_min, s.odds_max),
            )
            emitted.append(odds)
            self.odds_events.send(odds)
            if not self._running:
                # Stopped by a subscriber mid-cycle
                break
        logger.debug("Odds feed tick", extra={"emitted": len(emitted)})
        return emitted

    def _simulate_disconnect(self) -> None:
        delay = self._settings.reconnect_delay
        logger.info("Simulating odds feed disconnect", extra={"reconnect_delay": delay})
        self.stop()
        self._set_state(ConnectionState.RECONNECTING)
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
        self._reconnect_handle = self._get_loop().call_later(delay, self._reconnect)

    def _reconnect(self) -> None:
        self._reconnect_handle = None
        logger.info("Odds feed reconnecting")
        self.start()

    def _schedule_tick(self) -> None:
        # Fixed-rate; missed deadlines are skipped, not replayed
        loop = self._get_loop()
        period = self._settings.tick_period
        self._next_tick_at += period
        if self._next_tick_at < loop.time():
            self._next_tick_at = loop.time() + period
        self._tick_handle = loop.call_at(self._next_tick_at, self._on_timer)

    def _on_timer(self) -> None:
        self._tick_handle = None
        self.tick()
        if self._running and self._tick_handle is None:
            self._schedule_tick()

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        self.connection_states.send(state)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            # Bind to the loop of the first caller; raises outside a running loop
            self._loop = asyncio.get_running_loop()
        return self._loop
