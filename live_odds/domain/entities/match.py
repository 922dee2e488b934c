from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..value_objects.ids import MatchId


class Match(BaseModel):
    match_id: MatchId = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("match_id", "id", "matchID"),
        serialization_alias="id",
        description="Unique identifier for the match",
    )
    team_a: str = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("team_a", "teamA"),
        serialization_alias="teamA",
    )
    team_b: str = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("team_b", "teamB"),
        serialization_alias="teamB",
    )
    start_time: datetime = Field(
        ...,
        validation_alias=AliasChoices("start_time", "startTime"),
        serialization_alias="startTime",
        description="Scheduled start in UTC",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("start_time", mode="before")
    @classmethod
    def _parse_iso8601(cls, v: Any) -> datetime:
        # Only ISO-8601 strings or aware datetimes; epoch numbers are rejected.
        if isinstance(v, str):
            try:
                v = datetime.fromisoformat(v)
            except ValueError as exc:
                raise ValueError(f"start_time is not ISO-8601: {v!r}") from exc
        if not isinstance(v, datetime):
            raise ValueError("start_time must be an ISO-8601 string")
        if v.tzinfo is None:
            raise ValueError("start_time must be timezone-aware")
        return v.astimezone(timezone.utc)
