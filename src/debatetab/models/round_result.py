"""Round result data class."""

# Debate Tab
# Copyright (C) 2025  Debate Tab developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Any, Dict, Optional

from debatetab.constants import OUTCOME_PENDING
from debatetab.type_hints import MaybeSide, OutcomeType


@dataclass(frozen=True)
class RoundResult:
    """One round from a single competitor's point of view.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed); results are ordered by it.
    outcome : str
        One of "win", "loss", "bye", "forfeit_given", "forfeit_received"
        or "pending".
    side : str or None
        "aff" or "neg", or None when no side was played.
    opponent_id : str or None
        Registration ID of the opponent, or None for a bye.
    speaker_points : float or None
        Speaker points from the ballot. None means nothing was entered;
        0 is a recorded value.
    rank : float or None
        Rank assigned by the judge (1 = best), or None.
    is_elimination : bool
        Whether the round belongs to the elimination bracket.
    """

    round_number: int
    outcome: OutcomeType = OUTCOME_PENDING
    side: MaybeSide = None
    opponent_id: Optional[str] = None
    speaker_points: Optional[float] = None
    rank: Optional[float] = None
    is_elimination: bool = False

    @property
    def is_pending(self) -> bool:
        return self.outcome == OUTCOME_PENDING

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round result to dictionary."""
        return {
            "round_number": self.round_number,
            "outcome": self.outcome,
            "side": self.side,
            "opponent_id": self.opponent_id,
            "speaker_points": self.speaker_points,
            "rank": self.rank,
            "is_elimination": self.is_elimination,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundResult":
        """Deserialize round result from dictionary."""
        return cls(
            round_number=data.get("round_number", 0),
            outcome=data.get("outcome", OUTCOME_PENDING),
            side=data.get("side"),
            opponent_id=data.get("opponent_id"),
            speaker_points=data.get("speaker_points"),
            rank=data.get("rank"),
            is_elimination=data.get("is_elimination", False),
        )
