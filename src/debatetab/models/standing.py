"""Data models for aggregated results, standings and head-to-head records."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from debatetab.utils import safe_number


def _parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return date_parser.isoparse(value)


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class AggregatedStats:
    """Summary of one competitor's resolved rounds.

    Attributes
    ----------
    registration_id : str
        Competitor registration ID.
    wins, losses, byes : int
        Round counts. Forfeits received count as wins, forfeits given as
        losses.
    forfeits_given, forfeits_received : int
        Forfeit counts.
    speaks_list, ranks_list : list of float
        Recorded speaker points and ranks, in round order.
    aff_rounds, neg_rounds : int
        Resolved rounds per side.
    opponent_ids : list of str
        Opponent per non-bye resolved round, duplicates preserved.
    rounds_completed : int
        Resolved (non-pending) rounds.
    last_side : str or None
        Side played in the latest resolved round.
    """

    registration_id: str
    wins: int = 0
    losses: int = 0
    byes: int = 0
    forfeits_given: int = 0
    forfeits_received: int = 0
    speaks_list: List[float] = field(default_factory=list)
    ranks_list: List[float] = field(default_factory=list)
    aff_rounds: int = 0
    neg_rounds: int = 0
    opponent_ids: List[str] = field(default_factory=list)
    rounds_completed: int = 0
    last_side: Optional[str] = None

    @property
    def total_speaks(self) -> float:
        return sum(self.speaks_list)

    @property
    def total_ranks(self) -> float:
        return sum(self.ranks_list)


@dataclass(frozen=True)
class OpponentStats:
    """Win record of one opponent, used for opponent strength."""

    wins: float = 0
    rounds: int = 0

    @property
    def win_pct(self) -> float:
        return self.wins / self.rounds if self.rounds > 0 else 0.0


@dataclass(frozen=True)
class OpponentStrength:
    """Schedule strength: opponents' total wins and mean win percentage."""

    opp_wins: float = 0
    opp_win_pct: float = 0.0


@dataclass
class ComputedStanding:
    """Materialized standing row for one competitor.

    Every numeric tiebreaker field defaults to 0. Rank fields stay None until
    the list has been sorted.
    """

    registration_id: str
    tournament_id: Optional[str] = None
    event_id: Optional[str] = None
    id: Optional[str] = None
    # Basic record
    wins: int = 0
    losses: int = 0
    byes: int = 0
    forfeits_given: int = 0
    forfeits_received: int = 0
    # Speaks
    total_speaks: float = 0
    avg_speaks: float = 0
    adjusted_speaks: float = 0
    double_adjusted_speaks: float = 0
    # Ranks (lower is better)
    total_ranks: float = 0
    avg_ranks: float = 0
    adjusted_ranks: float = 0
    double_adjusted_ranks: float = 0
    # Opponent strength
    opp_wins: float = 0
    opp_win_pct: float = 0
    # Side balance
    aff_rounds: int = 0
    neg_rounds: int = 0
    # Rankings
    prelim_rank: Optional[int] = None
    overall_rank: Optional[int] = None
    is_breaking: bool = False
    break_seed: Optional[int] = None
    # Metadata
    rounds_completed: int = 0
    last_computed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary (timestamps as ISO-8601)."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "event_id": self.event_id,
            "registration_id": self.registration_id,
            "wins": self.wins,
            "losses": self.losses,
            "byes": self.byes,
            "forfeits_given": self.forfeits_given,
            "forfeits_received": self.forfeits_received,
            "total_speaks": self.total_speaks,
            "avg_speaks": self.avg_speaks,
            "adjusted_speaks": self.adjusted_speaks,
            "double_adjusted_speaks": self.double_adjusted_speaks,
            "total_ranks": self.total_ranks,
            "avg_ranks": self.avg_ranks,
            "adjusted_ranks": self.adjusted_ranks,
            "double_adjusted_ranks": self.double_adjusted_ranks,
            "opp_wins": self.opp_wins,
            "opp_win_pct": self.opp_win_pct,
            "aff_rounds": self.aff_rounds,
            "neg_rounds": self.neg_rounds,
            "prelim_rank": self.prelim_rank,
            "overall_rank": self.overall_rank,
            "is_breaking": self.is_breaking,
            "break_seed": self.break_seed,
            "rounds_completed": self.rounds_completed,
            "last_computed_at": _format_timestamp(self.last_computed_at),
            "updated_at": _format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComputedStanding":
        """Deserialize a stored standing row.

        Null numeric columns come back as 0.
        """

        def number(key: str) -> float:
            return safe_number(data.get(key))

        return cls(
            id=data.get("id"),
            tournament_id=data.get("tournament_id"),
            event_id=data.get("event_id"),
            registration_id=data["registration_id"],
            wins=int(number("wins")),
            losses=int(number("losses")),
            byes=int(number("byes")),
            forfeits_given=int(number("forfeits_given")),
            forfeits_received=int(number("forfeits_received")),
            total_speaks=number("total_speaks"),
            avg_speaks=number("avg_speaks"),
            adjusted_speaks=number("adjusted_speaks"),
            double_adjusted_speaks=number("double_adjusted_speaks"),
            total_ranks=number("total_ranks"),
            avg_ranks=number("avg_ranks"),
            adjusted_ranks=number("adjusted_ranks"),
            double_adjusted_ranks=number("double_adjusted_ranks"),
            opp_wins=number("opp_wins"),
            opp_win_pct=number("opp_win_pct"),
            aff_rounds=int(number("aff_rounds")),
            neg_rounds=int(number("neg_rounds")),
            prelim_rank=data.get("prelim_rank"),
            overall_rank=data.get("overall_rank"),
            is_breaking=bool(data.get("is_breaking", False)),
            break_seed=data.get("break_seed"),
            rounds_completed=int(number("rounds_completed")),
            last_computed_at=_parse_timestamp(data.get("last_computed_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


@dataclass(frozen=True)
class HeadToHead:
    """Directed record of ``registration_id`` against ``opponent_id``.

    Attributes
    ----------
    registration_id : str
        The competitor this record belongs to.
    opponent_id : str
        The opponent faced.
    wins, losses : int
        Decided meetings won and lost against that opponent.
    total_speaks_for, total_speaks_against : float
        Speaker points scored by and against the competitor in those meetings.
    """

    registration_id: str
    opponent_id: str
    wins: int = 0
    losses: int = 0
    total_speaks_for: float = 0
    total_speaks_against: float = 0
    tournament_id: Optional[str] = None
    event_id: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize head-to-head record to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "event_id": self.event_id,
            "registration_id": self.registration_id,
            "opponent_id": self.opponent_id,
            "wins": self.wins,
            "losses": self.losses,
            "total_speaks_for": self.total_speaks_for,
            "total_speaks_against": self.total_speaks_against,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HeadToHead":
        """Deserialize a stored head-to-head row."""
        return cls(
            id=data.get("id"),
            tournament_id=data.get("tournament_id"),
            event_id=data.get("event_id"),
            registration_id=data["registration_id"],
            opponent_id=data["opponent_id"],
            wins=int(safe_number(data.get("wins"))),
            losses=int(safe_number(data.get("losses"))),
            total_speaks_for=safe_number(data.get("total_speaks_for")),
            total_speaks_against=safe_number(data.get("total_speaks_against")),
        )
