from __future__ import annotations

from typing import Protocol

from ..entities.match import Match
from ..entities.odds import Odds


class HistoricalDataSource(Protocol):
    """Source of the initial match list and odds snapshot.

    Both calls may raise a ``DataSourceError`` subclass
    (see :mod:`live_odds.infrastructure.data_sources`).
    """

    async def fetch_matches(self) -> list[Match]: ...

    async def fetch_odds(self) -> list[Odds]: ...
