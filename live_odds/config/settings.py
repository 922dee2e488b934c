"""Runtime settings for the odds feed simulator and the historical data source.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through immutable Pydantic settings objects.

Probabilities such as ``LIVE_ODDS_DISCONNECT_PROBABILITY`` may be written as a
decimal (``0.0333``) or a fraction (``1/30``).
"""

from __future__ import annotations

import os
from fractions import Fraction
from pathlib import Path
from typing import Callable, Literal, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_POOL_START = 1001
DEFAULT_POOL_END = 1100  # inclusive
DEFAULT_TICK_PERIOD = 1.0  # seconds
DEFAULT_DISCONNECT_PROBABILITY = 1 / 30
DEFAULT_RECONNECT_DELAY = 2.0  # seconds
DEFAULT_ODDS_MIN = 1.70
DEFAULT_ODDS_MAX = 2.20
DEFAULT_SAMPLE_SIZE = 10
BUNDLED_MOCK_DATA = Path(__file__).resolve().parents[1] / "data" / "mock_data.json"
DEFAULT_API_URL = "https://api.example.invalid/v1/"

_T = TypeVar("_T")


class FeedSettings(BaseModel):
    """Knobs of :class:`~live_odds.infrastructure.odds_feed_simulator.OddsFeedSimulator`."""

    pool_start: int = DEFAULT_POOL_START
    pool_end: int = DEFAULT_POOL_END
    tick_period: float = DEFAULT_TICK_PERIOD
    disconnect_probability: float = DEFAULT_DISCONNECT_PROBABILITY
    reconnect_delay: float = DEFAULT_RECONNECT_DELAY
    odds_min: float = DEFAULT_ODDS_MIN
    odds_max: float = DEFAULT_ODDS_MAX
    sample_size: int = DEFAULT_SAMPLE_SIZE

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_ranges(self) -> "FeedSettings":
        if self.pool_end < self.pool_start:
            raise ValueError("pool_end must not be below pool_start")
        if self.tick_period <= 0 or self.reconnect_delay <= 0:
            raise ValueError("tick_period and reconnect_delay must be positive")
        if not 0.0 <= self.disconnect_probability <= 1.0:
            raise ValueError("disconnect_probability must be within [0, 1]")
        if self.odds_min <= 0 or self.odds_max < self.odds_min:
            raise ValueError("odds range must be positive with odds_min <= odds_max")
        if not 0 <= self.sample_size <= len(self.pool):
            raise ValueError("sample_size must fit in the identifier pool")
        return self

    @property
    def pool(self) -> range:
        return range(self.pool_start, self.pool_end + 1)


class DataSettings(BaseModel):
    """Where the initial match list and odds snapshot come from."""

    source: Literal["mock", "live"] = "mock"
    mock_data_path: Path = BUNDLED_MOCK_DATA
    api_url: str = DEFAULT_API_URL

    model_config = ConfigDict(frozen=True)


class Settings(BaseModel):
    feed: FeedSettings = FeedSettings()
    data: DataSettings = DataSettings()

    model_config = ConfigDict(frozen=True)


def _env(name: str, default: _T, cast: Callable[[str], _T]) -> _T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{name} has an invalid value: {raw!r}") from exc


def _probability(raw: str) -> float:
    """Parse a decimal (``0.0333``) or a fraction (``1/30``)."""
    try:
        return float(Fraction(raw))
    except ZeroDivisionError as exc:
        raise ValueError(raw) from exc


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    try:
        feed = FeedSettings(
            pool_start=_env("LIVE_ODDS_POOL_START", DEFAULT_POOL_START, int),
            pool_end=_env("LIVE_ODDS_POOL_END", DEFAULT_POOL_END, int),
            tick_period=_env("LIVE_ODDS_TICK_PERIOD", DEFAULT_TICK_PERIOD, float),
            disconnect_probability=_env(
                "LIVE_ODDS_DISCONNECT_PROBABILITY", DEFAULT_DISCONNECT_PROBABILITY, _probability
            ),
            reconnect_delay=_env("LIVE_ODDS_RECONNECT_DELAY", DEFAULT_RECONNECT_DELAY, float),
            odds_min=_env("LIVE_ODDS_MIN", DEFAULT_ODDS_MIN, float),
            odds_max=_env("LIVE_ODDS_MAX", DEFAULT_ODDS_MAX, float),
            sample_size=_env("LIVE_ODDS_SAMPLE_SIZE", DEFAULT_SAMPLE_SIZE, int),
        )
        data = DataSettings(
            source=os.getenv("LIVE_ODDS_SOURCE", "mock").strip().lower(),
            mock_data_path=Path(os.getenv("LIVE_ODDS_MOCK_DATA") or BUNDLED_MOCK_DATA),
            api_url=os.getenv("LIVE_ODDS_API_URL", DEFAULT_API_URL),
        )
    except ValidationError as exc:
        raise RuntimeError(f"Invalid live-odds configuration: {exc}") from exc
    return Settings(feed=feed, data=data)


# Public settings instance
settings = _build_settings()
