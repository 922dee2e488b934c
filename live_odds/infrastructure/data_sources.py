from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from live_odds.config.settings import BUNDLED_MOCK_DATA, DataSettings
from live_odds.domain.entities.match import Match
from live_odds.domain.entities.odds import Odds
from live_odds.domain.interfaces.data_source import HistoricalDataSource

logger = logging.getLogger(__name__)


class DataSourceError(RuntimeError):
    """Base class for failures of a historical data source."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class DataUnavailableError(DataSourceError):
    """Raised when the backing dataset is missing or unreadable."""


class DataDecodeError(DataSourceError):
    """Raised when the backing dataset is present but malformed."""


class DataSourceNotImplementedError(DataSourceError):
    """Raised by data source variants that have no backend wired up."""


class _MockDocument(BaseModel):
    matches: list[Match]
    odds: list[Odds]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _unique_match_ids(self) -> "_MockDocument":
        seen: set[int] = set()
        for m in self.matches:
            if m.match_id in seen:
                raise ValueError(f"duplicate match id {m.match_id}")
            seen.add(m.match_id)
        return self


class MockHistoricalDataSource:
    """Serve matches and odds from a bundled JSON document.

    The document is re-read on every fetch and validated as a whole, so a
    single bad record fails the call instead of being skipped.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else BUNDLED_MOCK_DATA

    async def fetch_matches(self) -> list[Match]:
        doc = await asyncio.to_thread(self._load)
        return list(doc.matches)

    async def fetch_odds(self) -> list[Odds]:
        doc = await asyncio.to_thread(self._load)
        return list(doc.odds)

    def _load(self) -> _MockDocument:
        source = str(self.path)
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise DataUnavailableError(f"Mock data not found: {source}", source) from exc
        except OSError as exc:
            raise DataUnavailableError(f"Mock data unreadable: {exc}", source) from exc

        try:
            payload: Any = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise DataDecodeError(f"Mock data is not valid UTF-8: {exc}", source) from exc
        except json.JSONDecodeError as exc:
            raise DataDecodeError(f"Mock data is not valid JSON: {exc}", source) from exc

        try:
            doc = _MockDocument.model_validate(payload)
        except ValidationError as exc:
            raise DataDecodeError(
                f"Mock data does not match the schema ({exc.error_count()} errors)", source
            ) from exc
        logger.debug(
            "Loaded mock data",
            extra={"path": source, "matches": len(doc.matches), "odds": len(doc.odds)},
        )
        return doc


class LiveHistoricalDataSource:
    """Placeholder for the production API; both calls raise."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    async def fetch_matches(self) -> list[Match]:
        raise DataSourceNotImplementedError(
            f"GET {self.base_url}/matches is not implemented", self.base_url
        )

    async def fetch_odds(self) -> list[Odds]:
        raise DataSourceNotImplementedError(
            f"GET {self.base_url}/odds is not implemented", self.base_url
        )


def build_data_source(settings: Optional[DataSettings] = None) -> HistoricalDataSource:
    if settings is None:
        from live_odds.config.settings import settings as _app_settings

        settings = _app_settings.data
    if settings.source == "live":
        return LiveHistoricalDataSource(settings.api_url)
    return MockHistoricalDataSource(settings.mock_data_path)
