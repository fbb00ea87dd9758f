from debatetab.models.ballot import Ballot, Pairing, parse_ballot, parse_pairing
from debatetab.models.round_result import RoundResult
from debatetab.models.speaker import SpeakerResult, SpeakerStats
from debatetab.models.standing import (
    AggregatedStats,
    ComputedStanding,
    HeadToHead,
    OpponentStats,
    OpponentStrength,
)
from debatetab.models.tab_config import TabConfig

__all__ = [
    "AggregatedStats",
    "Ballot",
    "ComputedStanding",
    "HeadToHead",
    "OpponentStats",
    "OpponentStrength",
    "Pairing",
    "RoundResult",
    "SpeakerResult",
    "SpeakerStats",
    "TabConfig",
    "parse_ballot",
    "parse_pairing",
]
