"""Standings pipeline: from round results to ranked ComputedStanding rows.

``compute_standings`` runs the whole pass for one event: aggregate every
competitor, derive opponent strength, build the standing rows, sort them with
the configured tiebreaker order, then assign ranks and the break. Storage is
kept behind a ``StandingsRepository`` that callers pass in explicitly.
"""

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

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
)

from debatetab.exceptions import StandingsComputationException
from debatetab.models.ballot import Pairing, parse_pairing
from debatetab.models.round_result import RoundResult
from debatetab.models.standing import ComputedStanding, HeadToHead
from debatetab.models.tab_config import TabConfig
from debatetab.tabulation.aggregator import (
    aggregate,
    build_computed_standing,
    build_head_to_head_records,
    calculate_opponent_strength,
    opponent_stats_for,
    round_results_from_pairings,
)
from debatetab.tabulation.tiebreaker_engine import sort_by_tiebreakers
from debatetab.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class StandingsResult:
    """Output of one standings computation.

    Attributes:
        standings: Ranked standings, best first
        computed_at: Timestamp stamped on every row
        rounds_included: Distinct rounds with at least one resolved result
        teams_ranked: Number of ranked competitors
        head_to_head: Records used for the head_to_head criterion
    """

    standings: List[ComputedStanding]
    computed_at: Optional[datetime]
    rounds_included: int
    teams_ranked: int
    head_to_head: List[HeadToHead] = field(default_factory=list)


# ========== Rank Assignment ==========


def assign_ranks(standings: Iterable[ComputedStanding]) -> List[ComputedStanding]:
    """Set ``prelim_rank`` and ``overall_rank`` from list position (1-based)."""
    return [
        replace(standing, prelim_rank=position, overall_rank=position)
        for position, standing in enumerate(standings, start=1)
    ]


def mark_break(
    standings: Iterable[ComputedStanding], break_to: int
) -> List[ComputedStanding]:
    """Mark the first ``break_to`` standings as breaking.

    Breaking standings get ``break_seed`` equal to their position; everyone
    else has ``is_breaking=False`` and no seed.
    """
    marked = []
    for position, standing in enumerate(standings, start=1):
        breaking = position <= break_to
        marked.append(
            replace(
                standing,
                is_breaking=breaking,
                break_seed=position if breaking else None,
            )
        )
    return marked


# ========== Computation ==========


def _count_rounds_included(results: Iterable[RoundResult]) -> int:
    return len({r.round_number for r in results if not r.is_pending})


def compute_standings(
    results_by_competitor: Mapping[str, Iterable[RoundResult]],
    config: Optional[TabConfig] = None,
    tournament_id: Optional[str] = None,
    event_id: Optional[str] = None,
    head_to_head_records: Optional[Iterable[HeadToHead]] = None,
    computed_at: Optional[datetime] = None,
) -> StandingsResult:
    """Compute ranked standings for one event.

    Args:
        results_by_competitor: Registration ID -> that competitor's results
        config: Tabulation settings; defaults to ``TabConfig()``
        tournament_id: Stamped on every standing
        event_id: Stamped on every standing
        head_to_head_records: Records for the head_to_head criterion
        computed_at: Timestamp stamped on every standing

    Returns:
        StandingsResult with the ranked standings

    Competitors are processed in registration ID order, so the output is
    the same for the same inputs regardless of mapping order.
    """
    config = config or TabConfig()

    filtered: Dict[str, List[RoundResult]] = {}
    for registration_id in sorted(results_by_competitor):
        filtered[registration_id] = [
            result
            for result in results_by_competitor[registration_id]
            if config.include_elims or not result.is_elimination
        ]

    stats_map = {
        registration_id: aggregate(
            registration_id, results, bye_counts_as_win=config.bye_counts_as_win
        )
        for registration_id, results in filtered.items()
    }

    standings = []
    for stats in stats_map.values():
        strength = calculate_opponent_strength(
            opponent_stats_for(stats.opponent_ids, stats_map)
        )
        standings.append(
            build_computed_standing(
                stats,
                opponent_strength=strength,
                config=config,
                tournament_id=tournament_id,
                event_id=event_id,
                computed_at=computed_at,
            )
        )

    h2h_records = (
        list(head_to_head_records) if head_to_head_records is not None else None
    )
    ranked = assign_ranks(
        sort_by_tiebreakers(standings, config.tiebreaker_order, h2h_records)
    )
    if config.break_to is not None:
        ranked = mark_break(ranked, config.break_to)

    rounds_included = _count_rounds_included(
        result for results in filtered.values() for result in results
    )
    logger.info(
        f"Ranked {len(ranked)} competitors over {rounds_included} rounds "
        f"(tournament={tournament_id}, event={event_id})"
    )

    return StandingsResult(
        standings=ranked,
        computed_at=computed_at,
        rounds_included=rounds_included,
        teams_ranked=len(ranked),
        head_to_head=h2h_records or [],
    )


def compute_standings_from_pairings(
    pairings: Iterable[Pairing],
    config: Optional[TabConfig] = None,
    tournament_id: Optional[str] = None,
    event_id: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> StandingsResult:
    """Compute standings straight from pairings and their ballots.

    Head-to-head records are built from the same pairings, after the
    elimination filter has been applied.
    """
    config = config or TabConfig()
    included = [p for p in pairings if config.include_elims or not p.is_elimination]

    h2h_records = build_head_to_head_records(included, tournament_id, event_id)
    return compute_standings(
        round_results_from_pairings(included),
        config=config,
        tournament_id=tournament_id,
        event_id=event_id,
        head_to_head_records=h2h_records,
        computed_at=computed_at,
    )


# ========== Data Access ==========


class StandingsRepository(Protocol):
    """Storage the standings pipeline reads from and writes to."""

    def load_tab_config(
        self, tournament_id: str, event_id: Optional[str]
    ) -> Union[TabConfig, Mapping[str, Any], None]: ...

    def load_pairings(
        self, tournament_id: str, event_id: Optional[str]
    ) -> Sequence[Union[Pairing, Mapping[str, Any]]]: ...

    def save_standings(
        self,
        tournament_id: str,
        event_id: Optional[str],
        standings: List[ComputedStanding],
    ) -> None: ...

    def save_head_to_head(
        self,
        tournament_id: str,
        event_id: Optional[str],
        records: List[HeadToHead],
    ) -> None: ...


def _coerce_config(raw: Union[TabConfig, Mapping[str, Any], None]) -> TabConfig:
    if raw is None:
        return TabConfig()
    if isinstance(raw, TabConfig):
        return raw
    if isinstance(raw, Mapping):
        return TabConfig.from_dict(dict(raw))
    raise StandingsComputationException(
        f"Unsupported tab configuration type: {type(raw).__name__}"
    )


def _coerce_pairings(raw: Any) -> List[Pairing]:
    """Convert repository pairings, skipping rows without usable IDs."""
    if not isinstance(raw, (list, tuple)):
        raise StandingsComputationException(
            f"Expected a list of pairings, got {type(raw).__name__}"
        )

    pairings = []
    for index, item in enumerate(raw):
        if isinstance(item, Pairing):
            pairing = item
            if not pairing.has_registrations:
                logger.warning(f"Skipping pairing {index} without registration IDs")
                continue
        elif isinstance(item, Mapping):
            pairing = parse_pairing(dict(item))
            if pairing is None:
                continue
        else:
            raise StandingsComputationException(
                f"Pairing {index} has unsupported type {type(item).__name__}"
            )
        pairings.append(pairing)
    return pairings


def recompute_and_save_standings(
    repository: StandingsRepository,
    tournament_id: str,
    event_id: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> StandingsResult:
    """Recompute an event's standings and head-to-head records and store them.

    Raises:
        StandingsComputationException: If the repository returns data that
            cannot be read as pairings or a tab configuration
        InvalidConfigurationException: If a stored configuration is invalid
    """
    config = _coerce_config(repository.load_tab_config(tournament_id, event_id))
    pairings = _coerce_pairings(repository.load_pairings(tournament_id, event_id))

    result = compute_standings_from_pairings(
        pairings,
        config=config,
        tournament_id=tournament_id,
        event_id=event_id,
        computed_at=computed_at,
    )

    repository.save_standings(tournament_id, event_id, result.standings)
    repository.save_head_to_head(tournament_id, event_id, result.head_to_head)
    return result


EventKey = Tuple[str, Optional[str]]


class InMemoryStandingsRepository:
    """Dictionary-backed StandingsRepository."""

    def __init__(self):
        self.tab_configs: Dict[EventKey, TabConfig] = {}
        self.pairings: Dict[EventKey, List[Pairing]] = {}
        self.standings: Dict[EventKey, List[ComputedStanding]] = {}
        self.head_to_head: Dict[EventKey, List[HeadToHead]] = {}

    def set_tab_config(
        self, tournament_id: str, config: TabConfig, event_id: Optional[str] = None
    ) -> None:
        self.tab_configs[(tournament_id, event_id)] = config

    def add_pairings(
        self,
        tournament_id: str,
        pairings: Iterable[Pairing],
        event_id: Optional[str] = None,
    ) -> None:
        self.pairings.setdefault((tournament_id, event_id), []).extend(pairings)

    def load_tab_config(
        self, tournament_id: str, event_id: Optional[str]
    ) -> Optional[TabConfig]:
        """Event configuration, falling back to the tournament-wide one."""
        config = self.tab_configs.get((tournament_id, event_id))
        if config is None and event_id is not None:
            config = self.tab_configs.get((tournament_id, None))
        return config

    def load_pairings(
        self, tournament_id: str, event_id: Optional[str]
    ) -> List[Pairing]:
        return list(self.pairings.get((tournament_id, event_id), []))

    def save_standings(
        self,
        tournament_id: str,
        event_id: Optional[str],
        standings: List[ComputedStanding],
    ) -> None:
        self.standings[(tournament_id, event_id)] = list(standings)

    def save_head_to_head(
        self,
        tournament_id: str,
        event_id: Optional[str],
        records: List[HeadToHead],
    ) -> None:
        self.head_to_head[(tournament_id, event_id)] = list(records)
