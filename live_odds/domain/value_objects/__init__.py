from .enums import ConnectionState
from .ids import MatchId

__all__ = [
    "ConnectionState",
    "MatchId",
]
