"""Tiebreaker comparison and sorting for tournament standings.

The engine is stateless: every call receives the standings, the ordered
tiebreaker criteria and, when head-to-head is configured, the head-to-head
records. It never raises for partial data. A criterion that cannot be
evaluated reports a tie so the next criterion in the order gets a chance.

Supported criteria:
- wins, opp_wins, opp_win_pct, speaks, adjusted_speaks,
  double_adjusted_speaks: higher value ranks first
- losses, ranks, adjusted_ranks, double_adjusted_ranks: lower value ranks first
- head_to_head: more wins in direct meetings ranks first
- coin_flip: deterministic choice from the two registration IDs, never a tie
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

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from debatetab.constants import (
    NUMERIC_TIEBREAKER_FIELDS,
    TB_COIN_FLIP,
    TB_HEAD_TO_HEAD,
)
from debatetab.models.standing import HeadToHead
from debatetab.type_hints import ComparisonResult, HeadToHeadMap, TiebreakerOrder
from debatetab.utils import safe_number, setup_logger

logger = setup_logger(__name__)

Comparator = Callable[[Any, Any], int]


@dataclass(frozen=True)
class TiebreakerDecision:
    """Outcome of comparing two standings over a full tiebreaker order.

    Attributes:
        decided_by: The criterion that decided, or None if still tied
        result: -1 if the first standing ranks higher, 1 if the second, 0 if tied
    """

    decided_by: Optional[str]
    result: ComparisonResult


@dataclass(frozen=True)
class TiebreakerComparison:
    """Deciding criterion between two neighbouring standings."""

    registration_a: str
    registration_b: str
    decided_by: Optional[str]
    result: ComparisonResult


def _get_field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def safe_get_value(standing: Any, field_name: str) -> float:
    """Read a numeric field from a standing, treating null/missing as 0."""
    return safe_number(_get_field(standing, field_name))


def _registration_id(standing: Any) -> str:
    value = _get_field(standing, "registration_id")
    return "" if value is None else str(value)


# ========== Head-to-Head Lookup ==========


def build_head_to_head_map(records: Optional[Iterable[Any]]) -> HeadToHeadMap:
    """Group head-to-head records by registration ID for O(1) lookups."""
    h2h_map: HeadToHeadMap = {}
    for record in records or ():
        registration_id = _get_field(record, "registration_id")
        if registration_id is None:
            continue
        h2h_map.setdefault(registration_id, []).append(record)
    return h2h_map


def _optional_head_to_head_map(
    records: Optional[Iterable[Any]],
) -> Optional[HeadToHeadMap]:
    return build_head_to_head_map(records) if records is not None else None


def get_head_to_head_record(
    registration_id: str, opponent_id: str, h2h_map: HeadToHeadMap
) -> Optional[HeadToHead]:
    """Find the record of ``registration_id`` against ``opponent_id``.

    Returns:
        The record, or None if the two never met
    """
    for record in h2h_map.get(registration_id, ()):
        if _get_field(record, "opponent_id") == opponent_id:
            return record
    return None


def _compare_head_to_head(a: Any, b: Any, h2h_map: Optional[HeadToHeadMap]) -> int:
    if not h2h_map:
        return 0

    a_id = _get_field(a, "registration_id")
    b_id = _get_field(b, "registration_id")
    a_vs_b = get_head_to_head_record(a_id, b_id, h2h_map)
    b_vs_a = get_head_to_head_record(b_id, a_id, h2h_map)

    # Never met
    if a_vs_b is None and b_vs_a is None:
        return 0

    a_wins = safe_get_value(a_vs_b, "wins") if a_vs_b is not None else 0
    b_wins = safe_get_value(b_vs_a, "wins") if b_vs_a is not None else 0
    if a_wins > b_wins:
        return -1
    if a_wins < b_wins:
        return 1
    return 0


# ========== Coin Flip ==========


def _rolling_hash(text: str) -> int:
    value = 0
    for char in text:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    return value


def deterministic_coin_flip(id_a: str, id_b: str) -> int:
    """Pick a winner between two registration IDs without real randomness.

    The IDs are put into canonical order and hashed together, so the same
    competitor wins regardless of argument order and across recomputations.

    Returns:
        -1 if ``id_a`` wins, 1 if ``id_b`` wins (never 0)

    Example:
        >>> flip = deterministic_coin_flip("abc", "xyz")
        >>> flip == -deterministic_coin_flip("xyz", "abc")
        True
    """
    first, second = sorted((str(id_a), str(id_b)))
    # Lower canonical ID wins on an even hash
    winner = first if _rolling_hash(first + second) % 2 == 0 else second
    return -1 if str(id_a) == winner else 1


# ========== Comparison ==========


def compare_tiebreaker(
    a: Any,
    b: Any,
    tiebreaker: str,
    head_to_head_map: Optional[HeadToHeadMap] = None,
) -> ComparisonResult:
    """Compare two standings on a single tiebreaker.

    Args:
        a: First standing
        b: Second standing
        tiebreaker: Criterion name
        head_to_head_map: Lookup from ``build_head_to_head_map``, needed for
            the head_to_head criterion

    Returns:
        -1 if ``a`` ranks higher, 1 if ``b`` ranks higher, 0 if tied or the
        criterion is unknown
    """
    numeric = NUMERIC_TIEBREAKER_FIELDS.get(tiebreaker)
    if numeric is not None:
        field_name, higher_is_better = numeric
        a_val = safe_get_value(a, field_name)
        b_val = safe_get_value(b, field_name)
        if a_val == b_val:
            return 0
        a_first = a_val > b_val if higher_is_better else a_val < b_val
        return -1 if a_first else 1

    if tiebreaker == TB_HEAD_TO_HEAD:
        return _compare_head_to_head(a, b, head_to_head_map)

    if tiebreaker == TB_COIN_FLIP:
        return deterministic_coin_flip(_registration_id(a), _registration_id(b))

    logger.debug(f"Unknown tiebreaker {tiebreaker!r} treated as a tie")
    return 0


def compare_tiebreaker_order(
    a: Any,
    b: Any,
    tiebreaker_order: Sequence[str],
    head_to_head_map: Optional[HeadToHeadMap] = None,
) -> TiebreakerDecision:
    """Walk the tiebreaker order until one criterion separates the pair."""
    for tiebreaker in tiebreaker_order:
        result = compare_tiebreaker(a, b, tiebreaker, head_to_head_map)
        if result != 0:
            return TiebreakerDecision(decided_by=tiebreaker, result=result)
    return TiebreakerDecision(decided_by=None, result=0)


def get_deciding_tiebreaker(
    a: Any,
    b: Any,
    tiebreaker_order: Sequence[str],
    head_to_head_map: Optional[HeadToHeadMap] = None,
) -> Optional[str]:
    """Return the first criterion that separates two standings.

    Returns:
        The deciding criterion, or None if the pair ties on every criterion
    """
    return compare_tiebreaker_order(a, b, tiebreaker_order, head_to_head_map).decided_by


# ========== Sorting ==========


def create_tiebreaker_comparator(
    tiebreaker_order: TiebreakerOrder,
    head_to_head_records: Optional[Iterable[Any]] = None,
) -> Comparator:
    """Build a reusable ``cmp``-style comparator for a tiebreaker order.

    The head-to-head map is built once, when the comparator is created.

    Example:
        >>> compare = create_tiebreaker_comparator(["wins", "speaks"])
        >>> ranked = sorted(standings, key=functools.cmp_to_key(compare))
    """
    order = list(tiebreaker_order)
    h2h_map = _optional_head_to_head_map(head_to_head_records)

    def compare(a: Any, b: Any) -> int:
        return compare_tiebreaker_order(a, b, order, h2h_map).result

    return compare


def sort_by_tiebreakers(
    standings: Sequence[Any],
    tiebreaker_order: Sequence[str],
    head_to_head_records: Optional[Iterable[Any]] = None,
) -> List[Any]:
    """Sort standings by a tiebreaker order.

    The sort is stable (fully tied standings keep their input order) and
    returns a new list; the input is not mutated.

    Args:
        standings: Standings to sort
        tiebreaker_order: Criteria in priority order
        head_to_head_records: Records for the head_to_head criterion

    Returns:
        New list, best standing first
    """
    if len(standings) <= 1 or not tiebreaker_order:
        return list(standings)

    compare = create_tiebreaker_comparator(tiebreaker_order, head_to_head_records)
    return sorted(standings, key=cmp_to_key(compare))


def group_into_tiers(
    standings: Sequence[Any],
    tiebreaker_order: Sequence[str],
    head_to_head_records: Optional[Iterable[Any]] = None,
) -> List[List[Any]]:
    """Split an already sorted list into runs of fully tied standings.

    Adjacent standings that compare equal on every criterion share a tier.
    Pass an order without coin_flip to see ties that still need resolving.
    """
    if not standings:
        return []

    h2h_map = _optional_head_to_head_map(head_to_head_records)

    tiers = [[standings[0]]]
    for previous, current in zip(standings, standings[1:]):
        decision = compare_tiebreaker_order(
            previous, current, tiebreaker_order, h2h_map
        )
        if decision.result == 0:
            tiers[-1].append(current)
        else:
            tiers.append([current])
    return tiers


def describe_adjacent_decisions(
    standings: Sequence[Any],
    tiebreaker_order: Sequence[str],
    head_to_head_records: Optional[Iterable[Any]] = None,
) -> List[TiebreakerComparison]:
    """Report which criterion separates each standing from the next one."""
    h2h_map = _optional_head_to_head_map(head_to_head_records)
    comparisons = []
    for previous, current in zip(standings, standings[1:]):
        decision = compare_tiebreaker_order(
            previous, current, tiebreaker_order, h2h_map
        )
        comparisons.append(
            TiebreakerComparison(
                registration_a=_registration_id(previous),
                registration_b=_registration_id(current),
                decided_by=decision.decided_by,
                result=decision.result,
            )
        )
    return comparisons
