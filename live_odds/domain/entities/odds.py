from __future__ import annotations

from typing import Iterable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..value_objects.ids import MatchId


class Odds(BaseModel):
    match_id: MatchId = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("match_id", "matchID"),
        serialization_alias="matchID",
    )
    team_a_odds: float = Field(
        ...,
        gt=0,
        strict=True,
        allow_inf_nan=False,
        validation_alias=AliasChoices("team_a_odds", "teamAOdds"),
        serialization_alias="teamAOdds",
    )
    team_b_odds: float = Field(
        ...,
        gt=0,
        strict=True,
        allow_inf_nan=False,
        validation_alias=AliasChoices("team_b_odds", "teamBOdds"),
        serialization_alias="teamBOdds",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def quotes(self) -> tuple[float, float]:
        return (self.team_a_odds, self.team_b_odds)


def odds_map(odds: Iterable[Odds]) -> dict[MatchId, Odds]:
    """Index ``odds`` by match id; a later entry replaces an earlier one."""
    out: dict[MatchId, Odds] = {}
    for o in odds:
        out[o.match_id] = o
    return out
