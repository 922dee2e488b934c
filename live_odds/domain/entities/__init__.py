from .match import Match
from .odds import Odds, odds_map

__all__ = [
    "Match",
    "Odds",
    "odds_map",
]
