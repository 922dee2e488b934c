from typing import NewType

MatchId = NewType("MatchId", int)
