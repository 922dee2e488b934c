"""Collaborator protocols consumed by the reconciler."""

from .data_source import HistoricalDataSource
from .feed import OddsFeed

__all__ = [
    "HistoricalDataSource",
    "OddsFeed",
]
