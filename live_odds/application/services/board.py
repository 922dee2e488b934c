from __future__ import annotations

from datetime import timezone
from typing import Callable, Optional

from live_odds.application.services.odds_diff import changed_match_ids
from live_odds.application.services.reconciler import MatchListReconciler
from live_odds.domain.entities.match import Match
from live_odds.domain.entities.odds import Odds
from live_odds.domain.value_objects.enums import ConnectionState
from live_odds.domain.value_objects.ids import MatchId
from live_odds.infrastructure.subject import Subscription

_STATUS_TEXT = {
    ConnectionState.CONNECTED: "connected",
    ConnectionState.DISCONNECTED: "disconnected",
    ConnectionState.RECONNECTING: "reconnecting...",
}


def format_row(match: Match, odds: Optional[Odds]) -> str:
    kickoff = match.start_time.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")
    if odds is None:
        quotes = "A - / B -"
    else:
        quotes = f"A {odds.team_a_odds:.2f} / B {odds.team_b_odds:.2f}"
    return f"[{match.match_id}] {kickoff} {match.team_a} vs {match.team_b} | odds: {quotes}"


def format_status(state: ConnectionState) -> str:
    return f"Connection: {_STATUS_TEXT[state]}"


class BoardPresenter:
    """Text rendering of the reconciler's state.

    Re-renders the whole board when the match list changes and only the rows
    whose odds changed (marked with ``*``) when the odds map changes. The diff
    is always taken against the immediately preceding published map.
    """

    def __init__(
        self, reconciler: MatchListReconciler, out: Callable[[str], None] = print
    ) -> None:
        self._reconciler = reconciler
        self._out = out
        self._last_odds: dict[MatchId, Odds] = dict(reconciler.odds)
        self._subscriptions: list[Subscription] = [
            reconciler.matches_changed.subscribe(self._on_matches),
            reconciler.odds_changed.subscribe(self._on_odds),
            reconciler.connection_state_changed.subscribe(self._on_state),
        ]

    def render_board(self) -> list[str]:
        odds = self._reconciler.odds
        return [format_row(m, odds.get(m.match_id)) for m in self._reconciler.matches]

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()

    def _on_matches(self, matches: list[Match]) -> None:
        self._out(f"--- {len(matches)} matches ---")
        for line in self.render_board():
            self._out(line)

    def _on_odds(self, new_odds: dict[MatchId, Odds]) -> None:
        changed = changed_match_ids(self._last_odds, new_odds)
        self._last_odds = new_odds
        if not changed:
            return
        for match in self._reconciler.matches:
            if match.match_id in changed:
                self._out("* " + format_row(match, new_odds.get(match.match_id)))

    def _on_state(self, state: ConnectionState) -> None:
        self._out(format_status(state))
