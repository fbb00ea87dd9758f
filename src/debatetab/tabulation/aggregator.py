"""Aggregation of round results into per-competitor statistics.

This module turns a competitor's round-by-round results into a single
``AggregatedStats`` summary and derives the values the tiebreaker engine
compares: adjusted speaks/ranks, opponent strength and head-to-head records.
Everything here is a pure function of its inputs. Partial data degrades to
zeros and empty lists rather than raising, since standings are recomputed
mid-event.
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

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from debatetab.constants import (
    DEFAULT_DROP_COUNT,
    DOUBLE_DROP_COUNT,
    OUTCOME_BYE,
    OUTCOME_FORFEIT_GIVEN,
    OUTCOME_FORFEIT_RECEIVED,
    OUTCOME_LOSS,
    OUTCOME_PENDING,
    OUTCOME_WIN,
    SIDE_AFF,
    SIDE_NEG,
)
from debatetab.models.ballot import Pairing
from debatetab.models.round_result import RoundResult
from debatetab.models.standing import (
    AggregatedStats,
    ComputedStanding,
    HeadToHead,
    OpponentStats,
    OpponentStrength,
)
from debatetab.models.tab_config import TabConfig
from debatetab.utils import safe_number, setup_logger

logger = setup_logger(__name__)


def _round_order(result: RoundResult) -> float:
    return safe_number(result.round_number)


def aggregate(
    registration_id: str,
    round_results: Iterable[RoundResult],
    bye_counts_as_win: bool = False,
) -> AggregatedStats:
    """Aggregate all round results of one competitor.

    Results may arrive in any order; they are sorted by round number first so
    that speaks/ranks lists and ``last_side`` follow the round sequence.
    Pending rounds contribute nothing and are not counted as completed.

    Args:
        registration_id: The competitor's registration ID
        round_results: Every RoundResult for that competitor
        bye_counts_as_win: Also credit a win for each bye

    Returns:
        The competitor's AggregatedStats
    """
    stats = AggregatedStats(registration_id=registration_id)

    for result in sorted(round_results, key=_round_order):
        outcome = result.outcome
        if outcome == OUTCOME_PENDING:
            continue

        if outcome in (OUTCOME_WIN, OUTCOME_FORFEIT_RECEIVED):
            stats.wins += 1
            if outcome == OUTCOME_FORFEIT_RECEIVED:
                stats.forfeits_received += 1
        elif outcome in (OUTCOME_LOSS, OUTCOME_FORFEIT_GIVEN):
            stats.losses += 1
            if outcome == OUTCOME_FORFEIT_GIVEN:
                stats.forfeits_given += 1
        elif outcome == OUTCOME_BYE:
            stats.byes += 1
            if bye_counts_as_win:
                stats.wins += 1
        else:
            logger.warning(
                f"{registration_id}: ignoring round {result.round_number} "
                f"with unknown outcome {outcome!r}"
            )
            continue

        stats.rounds_completed += 1

        if result.side == SIDE_AFF:
            stats.aff_rounds += 1
            stats.last_side = SIDE_AFF
        elif result.side == SIDE_NEG:
            stats.neg_rounds += 1
            stats.last_side = SIDE_NEG

        if outcome != OUTCOME_BYE and result.opponent_id is not None:
            stats.opponent_ids.append(result.opponent_id)

        # A recorded 0 is kept; None means nothing was entered
        speaks = safe_number(result.speaker_points, default=None)
        if speaks is not None:
            stats.speaks_list.append(speaks)
        rank = safe_number(result.rank, default=None)
        if rank is not None:
            stats.ranks_list.append(rank)

    logger.debug(
        f"Aggregated {registration_id}: {stats.wins}W-{stats.losses}L, "
        f"{stats.byes} byes, {stats.rounds_completed} rounds completed"
    )
    return stats


def calculate_adjusted_value(
    values: Sequence[float],
    drop_count: int = DEFAULT_DROP_COUNT,
    preference: str = "high",
) -> float:
    """Sum values after dropping ``drop_count`` from each end.

    The drop is positional: values are sorted and sliced, so repeated
    extremes are dropped only as many times as ``drop_count``. When fewer
    than ``2 * drop_count + 1`` values exist nothing is dropped.

    Args:
        values: Speaker point or rank values
        drop_count: Number of values dropped from each end
        preference: "high" for speaks, "low" for ranks. Both ends are
            trimmed either way, so the sum does not depend on it.

    Returns:
        The adjusted sum, 0 for an empty list

    Example:
        >>> calculate_adjusted_value([25, 27, 28, 29, 30], 1)
        84
    """
    if not values:
        return 0
    if drop_count <= 0 or len(values) < drop_count * 2 + 1:
        return sum(values)

    ordered = sorted(values)
    return sum(ordered[drop_count : len(ordered) - drop_count])


def calculate_adjusted(
    values: Sequence[float],
    drop_count: int = DEFAULT_DROP_COUNT,
    lower_is_better: bool = False,
) -> float:
    """Drop-high-drop-low sum; ``calculate_adjusted([1, 5, 9]) == 5``."""
    return calculate_adjusted_value(
        values, drop_count, "low" if lower_is_better else "high"
    )


def calculate_adjusted_speaks(
    speaks: Sequence[float], drop_count: int = DEFAULT_DROP_COUNT
) -> float:
    return calculate_adjusted_value(speaks, drop_count, "high")


def calculate_adjusted_ranks(
    ranks: Sequence[float], drop_count: int = DEFAULT_DROP_COUNT
) -> float:
    return calculate_adjusted_value(ranks, drop_count, "low")


def opponent_stats_for(
    opponent_ids: Iterable[str], stats_map: Mapping[str, AggregatedStats]
) -> List[OpponentStats]:
    """Collect the win record of every distinct opponent faced.

    Opponents missing from ``stats_map`` are skipped. Order follows the
    first meeting with each opponent.
    """
    seen = set()
    opponents = []
    for opponent_id in opponent_ids:
        if opponent_id in seen:
            continue
        seen.add(opponent_id)
        opponent = stats_map.get(opponent_id)
        if opponent is None:
            logger.warning(f"Opponent {opponent_id} has no aggregated stats")
            continue
        opponents.append(
            OpponentStats(wins=opponent.wins, rounds=opponent.rounds_completed)
        )
    return opponents


def calculate_opponent_strength(
    opponent_stats: Iterable[OpponentStats],
) -> OpponentStrength:
    """Calculate schedule strength from the opponents' records.

    ``opp_wins`` is the sum of opponent wins and ``opp_win_pct`` the mean of
    their win percentages. An opponent without completed rounds contributes
    a win percentage of 0.

    Example:
        >>> calculate_opponent_strength([OpponentStats(2, 3), OpponentStats(1, 3)])
        OpponentStrength(opp_wins=3, opp_win_pct=0.5)
    """
    opponents = list(opponent_stats)
    if not opponents:
        return OpponentStrength()

    opp_wins = sum(safe_number(o.wins) for o in opponents)
    opp_win_pct = sum(o.win_pct for o in opponents) / len(opponents)
    return OpponentStrength(opp_wins=opp_wins, opp_win_pct=opp_win_pct)


def build_computed_standing(
    stats: AggregatedStats,
    opponent_strength: Optional[OpponentStrength] = None,
    config: Optional[TabConfig] = None,
    tournament_id: Optional[str] = None,
    event_id: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> ComputedStanding:
    """Materialize a ComputedStanding from aggregated stats.

    Averages are taken over recorded values only. Adjusted values use the
    configured drop counts; double adjusted values always drop two.
    """
    config = config or TabConfig()
    strength = opponent_strength or OpponentStrength()
    speaks = stats.speaks_list
    ranks = stats.ranks_list

    return ComputedStanding(
        id=f"computed-{stats.registration_id}",
        tournament_id=tournament_id,
        event_id=event_id,
        registration_id=stats.registration_id,
        wins=stats.wins,
        losses=stats.losses,
        byes=stats.byes,
        forfeits_given=stats.forfeits_given,
        forfeits_received=stats.forfeits_received,
        total_speaks=stats.total_speaks,
        avg_speaks=stats.total_speaks / len(speaks) if speaks else 0,
        adjusted_speaks=calculate_adjusted_speaks(speaks, config.drop_high_low_speaks),
        double_adjusted_speaks=calculate_adjusted_speaks(speaks, DOUBLE_DROP_COUNT),
        total_ranks=stats.total_ranks,
        avg_ranks=stats.total_ranks / len(ranks) if ranks else 0,
        adjusted_ranks=calculate_adjusted_ranks(ranks, config.drop_high_low_ranks),
        double_adjusted_ranks=calculate_adjusted_ranks(ranks, DOUBLE_DROP_COUNT),
        opp_wins=strength.opp_wins,
        opp_win_pct=strength.opp_win_pct,
        aff_rounds=stats.aff_rounds,
        neg_rounds=stats.neg_rounds,
        rounds_completed=stats.rounds_completed,
        last_computed_at=computed_at,
        updated_at=computed_at,
    )


# ========== Conversion From Pairings ==========


def round_results_from_pairings(
    pairings: Iterable[Pairing],
) -> Dict[str, List[RoundResult]]:
    """Split pairings into per-competitor round results.

    - Bye: the aff competitor gets a "bye" (no opponent, no speaks unless
      the ballot carries some). A second team listed on a bye ballot is
      recorded as "pending" so it stays in the standings.
    - No ballot: both sides are "pending".
    - Forfeit: winner gets "forfeit_received", loser "forfeit_given"; no
      speaks or ranks are recorded.
    - Otherwise "win"/"loss" with each side's speaks and rank.

    Returns:
        Mapping of registration ID to that competitor's results
    """
    results: Dict[str, List[RoundResult]] = defaultdict(list)

    for pairing in pairings:
        ballot = pairing.ballot

        if pairing.is_bye:
            results[pairing.aff_id].append(
                RoundResult(
                    round_number=pairing.round_number,
                    outcome=OUTCOME_BYE,
                    side=None,
                    opponent_id=None,
                    speaker_points=ballot.aff_speaks if ballot else None,
                    rank=ballot.aff_rank if ballot else None,
                    is_elimination=pairing.is_elimination,
                )
            )
            if pairing.neg_id is not None:
                logger.warning(
                    f"Round {pairing.round_number}: bye ballot for {pairing.aff_id} "
                    f"also lists {pairing.neg_id}; recording it as pending"
                )
                results[pairing.neg_id].append(
                    RoundResult(
                        round_number=pairing.round_number,
                        outcome=OUTCOME_PENDING,
                        side=None,
                        opponent_id=None,
                        is_elimination=pairing.is_elimination,
                    )
                )
            continue

        for side in (SIDE_AFF, SIDE_NEG):
            registration_id = pairing.registration_for(side)
            opponent_id = pairing.registration_for(
                SIDE_NEG if side == SIDE_AFF else SIDE_AFF
            )

            if ballot is None or ballot.winner not in (SIDE_AFF, SIDE_NEG):
                outcome = OUTCOME_PENDING
            elif ballot.forfeit:
                outcome = (
                    OUTCOME_FORFEIT_RECEIVED
                    if ballot.winner == side
                    else OUTCOME_FORFEIT_GIVEN
                )
            else:
                outcome = OUTCOME_WIN if ballot.winner == side else OUTCOME_LOSS

            scored = outcome in (OUTCOME_WIN, OUTCOME_LOSS)
            results[registration_id].append(
                RoundResult(
                    round_number=pairing.round_number,
                    outcome=outcome,
                    side=side,
                    opponent_id=opponent_id,
                    speaker_points=ballot.speaks_for(side) if scored else None,
                    rank=ballot.rank_for(side) if scored else None,
                    is_elimination=pairing.is_elimination,
                )
            )

    return dict(results)


def build_head_to_head_records(
    pairings: Iterable[Pairing],
    tournament_id: Optional[str] = None,
    event_id: Optional[str] = None,
) -> List[HeadToHead]:
    """Build directed head-to-head records from decided pairings.

    Each decided, non-bye pairing updates the record of both competitors
    against each other. Records are returned sorted by registration ID,
    then opponent ID.
    """
    # (registration_id, opponent_id) -> [wins, losses, speaks_for, speaks_against]
    totals: Dict[tuple, list] = {}

    for pairing in pairings:
        ballot = pairing.ballot
        if pairing.is_bye or ballot is None:
            continue
        if ballot.winner not in (SIDE_AFF, SIDE_NEG):
            continue

        aff_key = (pairing.aff_id, pairing.neg_id)
        neg_key = (pairing.neg_id, pairing.aff_id)
        aff_totals = totals.setdefault(aff_key, [0, 0, 0, 0])
        neg_totals = totals.setdefault(neg_key, [0, 0, 0, 0])

        if ballot.winner == SIDE_AFF:
            aff_totals[0] += 1
            neg_totals[1] += 1
        else:
            neg_totals[0] += 1
            aff_totals[1] += 1

        aff_speaks = safe_number(ballot.aff_speaks)
        neg_speaks = safe_number(ballot.neg_speaks)
        aff_totals[2] += aff_speaks
        aff_totals[3] += neg_speaks
        neg_totals[2] += neg_speaks
        neg_totals[3] += aff_speaks

    return [
        HeadToHead(
            id=f"h2h-{registration_id}-{opponent_id}",
            tournament_id=tournament_id,
            event_id=event_id,
            registration_id=registration_id,
            opponent_id=opponent_id,
            wins=wins,
            losses=losses,
            total_speaks_for=speaks_for,
            total_speaks_against=speaks_against,
        )
        for (registration_id, opponent_id), (
            wins,
            losses,
            speaks_for,
            speaks_against,
        ) in sorted(totals.items())
    ]
