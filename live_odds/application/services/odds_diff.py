from __future__ import annotations

from typing import Mapping

from live_odds.domain.entities.odds import Odds
from live_odds.domain.value_objects.ids import MatchId


def changed_match_ids(
    old: Mapping[MatchId, Odds], new: Mapping[MatchId, Odds]
) -> set[MatchId]:
    """Return ids whose odds are new or differ in either quote.

    Ids present only in ``old`` are not reported.

    >>> a = Odds(match_id=1, team_a_odds=1.8, team_b_odds=1.9)
    >>> b = Odds(match_id=2, team_a_odds=2.0, team_b_odds=2.0)
    >>> sorted(changed_match_ids({1: a}, {1: a, 2: b}))
    [2]
    """
    changed: set[MatchId] = set()
    for match_id, odds in new.items():
        previous = old.get(match_id)
        if previous is None or previous.quotes != odds.quotes:
            changed.add(match_id)
    return changed
