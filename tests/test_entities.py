from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from live_odds.domain.entities.match import Match
from live_odds.domain.entities.odds import Odds, odds_map
from live_odds.domain.value_objects.enums import ConnectionState
from live_odds.domain.value_objects.ids import MatchId


def test_match_parses_json_keys_and_normalizes_to_utc() -> None:
    m = Match.model_validate(
        {"id": 7, "teamA": "A", "teamB": "B", "startTime": "2025-07-24T20:00:00+08:00"}
    )
    assert m.match_id == 7
    assert (m.team_a, m.team_b) == ("A", "B")
    assert m.start_time == datetime(2025, 7, 24, 12, 0, tzinfo=timezone.utc)


def test_match_accepts_match_id_key_and_python_names() -> None:
    a = Match.model_validate(
        {"matchID": 3, "teamA": "A", "teamB": "B", "startTime": "2025-07-24T12:00:00Z"}
    )
    b = Match(
        match_id=MatchId(3),
        team_a="A",
        team_b="B",
        start_time=datetime(2025, 7, 24, 12, tzinfo=timezone.utc),
    )
    assert a == b


@pytest.mark.parametrize(
    "start_time",
    ["24/07/2025 12:00", "2025-07-24T12:00:00", 1753358400, "", None],
)
def test_match_rejects_non_iso8601_or_naive_start(start_time: object) -> None:
    with pytest.raises(ValidationError):
        Match.model_validate({"id": 1, "teamA": "A", "teamB": "B", "startTime": start_time})


def test_match_is_immutable() -> None:
    m = Match.model_validate(
        {"id": 1, "teamA": "A", "teamB": "B", "startTime": "2025-07-24T12:00:00Z"}
    )
    with pytest.raises(ValidationError):
        m.team_a = "C"  # type: ignore[misc]


def test_match_serializes_with_wire_keys() -> None:
    m = Match.model_validate(
        {"id": 1, "teamA": "A", "teamB": "B", "startTime": "2025-07-24T12:00:00Z"}
    )
    dumped = m.model_dump(by_alias=True)
    assert set(dumped) == {"id", "teamA", "teamB", "startTime"}


def test_odds_requires_positive_prices() -> None:
    with pytest.raises(ValidationError):
        Odds(match_id=MatchId(1), team_a_odds=0.0, team_b_odds=1.9)
    with pytest.raises(ValidationError):
        Odds.model_validate({"matchID": 1, "teamAOdds": 1.8, "teamBOdds": -2})
    o = Odds.model_validate({"matchID": 1, "teamAOdds": 1.8, "teamBOdds": 1.9})
    assert o.quotes == (1.8, 1.9)


def test_odds_map_last_entry_wins() -> None:
    first = Odds(match_id=MatchId(1), team_a_odds=1.8, team_b_odds=1.9)
    other = Odds(match_id=MatchId(2), team_a_odds=2.0, team_b_odds=2.0)
    last = Odds(match_id=MatchId(1), team_a_odds=1.85, team_b_odds=1.95)
    result = odds_map([first, other, last])
    assert result == {1: last, 2: other}


def test_connection_state_values() -> None:
    assert {s.value for s in ConnectionState} == {"connected", "disconnected", "reconnecting"}
    assert ConnectionState("reconnecting") is ConnectionState.RECONNECTING
