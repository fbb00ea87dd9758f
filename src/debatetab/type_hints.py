"""Type hints used in Debate Tab."""

from typing import Dict, List, Literal, Optional

# Side type alias
Side = Literal["aff", "neg"]
MaybeSide = Optional[Side]

# Ballot winner literals
BallotWinner = Literal["aff", "neg", "bye"]

# Outcome literals, from the competitor's point of view
OutcomeType = Literal[
    "win", "loss", "bye", "forfeit_given", "forfeit_received", "pending"
]

TiebreakerType = Literal[
    "wins",
    "losses",
    "speaks",
    "ranks",
    "adjusted_speaks",
    "adjusted_ranks",
    "double_adjusted_speaks",
    "double_adjusted_ranks",
    "opp_wins",
    "opp_win_pct",
    "head_to_head",
    "coin_flip",
]

# -1 = first ranks higher, 0 = tie, 1 = second ranks higher
ComparisonResult = Literal[-1, 0, 1]

# Ordered tiebreaker policy
TiebreakerOrder = List[str]
# registration_id -> that competitor's head-to-head records
HeadToHeadMap = Dict[str, List["HeadToHead"]]
