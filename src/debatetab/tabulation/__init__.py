"""Tabulation: aggregation, tiebreakers, standings and speaker awards."""

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

from debatetab.tabulation.aggregator import (
    aggregate,
    build_computed_standing,
    build_head_to_head_records,
    calculate_adjusted,
    calculate_adjusted_ranks,
    calculate_adjusted_speaks,
    calculate_adjusted_value,
    calculate_opponent_strength,
    opponent_stats_for,
    round_results_from_pairings,
)
from debatetab.tabulation.speaker_awards import (
    SpeakerAwardsResult,
    aggregate_speaker_points,
    calculate_speaker_awards,
)
from debatetab.tabulation.standings import (
    InMemoryStandingsRepository,
    StandingsRepository,
    StandingsResult,
    assign_ranks,
    compute_standings,
    compute_standings_from_pairings,
    mark_break,
    recompute_and_save_standings,
)
from debatetab.tabulation.tiebreaker_engine import (
    TiebreakerComparison,
    TiebreakerDecision,
    build_head_to_head_map,
    compare_tiebreaker,
    compare_tiebreaker_order,
    create_tiebreaker_comparator,
    describe_adjacent_decisions,
    deterministic_coin_flip,
    get_deciding_tiebreaker,
    get_head_to_head_record,
    group_into_tiers,
    safe_get_value,
    sort_by_tiebreakers,
)

__all__ = [
    # Aggregation
    "aggregate",
    "build_computed_standing",
    "build_head_to_head_records",
    "calculate_adjusted",
    "calculate_adjusted_ranks",
    "calculate_adjusted_speaks",
    "calculate_adjusted_value",
    "calculate_opponent_strength",
    "opponent_stats_for",
    "round_results_from_pairings",
    # Tiebreakers
    "TiebreakerComparison",
    "TiebreakerDecision",
    "build_head_to_head_map",
    "compare_tiebreaker",
    "compare_tiebreaker_order",
    "create_tiebreaker_comparator",
    "describe_adjacent_decisions",
    "deterministic_coin_flip",
    "get_deciding_tiebreaker",
    "get_head_to_head_record",
    "group_into_tiers",
    "safe_get_value",
    "sort_by_tiebreakers",
    # Standings
    "InMemoryStandingsRepository",
    "StandingsRepository",
    "StandingsResult",
    "assign_ranks",
    "compute_standings",
    "compute_standings_from_pairings",
    "mark_break",
    "recompute_and_save_standings",
    # Speaker awards
    "SpeakerAwardsResult",
    "aggregate_speaker_points",
    "calculate_speaker_awards",
]
