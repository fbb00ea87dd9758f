"""Individual speaker awards.

Speaker points are grouped per speaker (registration plus speaker name, or
speaking position when the ballot has no name), totalled and ranked. Breaking
teams can be excluded and results can be limited to one division.
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

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from debatetab.constants import DEFAULT_DROP_COUNT, DEFAULT_TOP_SPEAKERS
from debatetab.models.speaker import SpeakerResult, SpeakerStats
from debatetab.tabulation.aggregator import calculate_adjusted_value
from debatetab.utils import safe_number, setup_logger

logger = setup_logger(__name__)


@dataclass
class SpeakerAwardsResult:
    """Ranked speakers after filtering, the top slice, and known divisions."""

    speakers: List[SpeakerStats] = field(default_factory=list)
    top_speakers: List[SpeakerStats] = field(default_factory=list)
    divisions: List[str] = field(default_factory=list)


def aggregate_speaker_points(
    results: Iterable[SpeakerResult], breaking_ids: Iterable[str] = ()
) -> Dict[Tuple[str, Union[str, int]], SpeakerStats]:
    """Group speaker results into per-speaker stats, keyed by ``speaker_key``.

    Results without points are skipped. Adjusted points drop one high and
    one low score once a speaker has three or more rounds.
    """
    breaking = set(breaking_ids)
    speakers: Dict[Tuple[str, Union[str, int]], SpeakerStats] = {}

    for result in results:
        points = safe_number(result.speaker_points, default=None)
        if points is None:
            continue

        key = result.speaker_key
        stats = speakers.get(key)
        if stats is None:
            stats = SpeakerStats(
                speaker_id=result.speaker_id,
                speaker_name=result.speaker_name
                or f"Speaker {result.speaker_position}",
                registration_id=result.registration_id,
                division=result.division,
                is_breaking=result.registration_id in breaking,
            )
            speakers[key] = stats
        stats.points.append(points)

    for stats in speakers.values():
        stats.adjusted_points = calculate_adjusted_value(
            stats.points, DEFAULT_DROP_COUNT
        )
    return speakers


def calculate_speaker_awards(
    results: Iterable[SpeakerResult],
    top_n: int = DEFAULT_TOP_SPEAKERS,
    drop_high_low: int = 0,
    breaking_ids: Iterable[str] = (),
    exclude_breaking: bool = False,
    division: Optional[str] = None,
) -> SpeakerAwardsResult:
    """Rank speakers by total points.

    Args:
        results: One entry per speaker per round
        top_n: Size of the ``top_speakers`` slice
        drop_high_low: Scores dropped from each end before ranking; 0 ranks
            by raw total
        breaking_ids: Registration IDs of breaking teams
        exclude_breaking: Leave speakers on breaking teams out of the ranking
        division: Only rank speakers in this division (case-insensitive)

    Returns:
        SpeakerAwardsResult; ``divisions`` lists every division seen, before
        filtering

    Speakers with equal scores keep the order in which they first appear.
    """
    speakers_map = aggregate_speaker_points(results, breaking_ids)

    speakers = list(speakers_map.values())
    if drop_high_low > 0:
        for stats in speakers:
            stats.adjusted_points = calculate_adjusted_value(
                stats.points, drop_high_low
            )

    if division:
        wanted = division.lower()
        speakers = [s for s in speakers if (s.division or "").lower() == wanted]

    if exclude_breaking:
        speakers = [s for s in speakers if not s.is_breaking]

    if drop_high_low > 0:
        speakers.sort(key=lambda s: s.adjusted_points, reverse=True)
    else:
        speakers.sort(key=lambda s: s.total_points, reverse=True)

    for position, stats in enumerate(speakers, start=1):
        stats.rank = position

    divisions = sorted({s.division for s in speakers_map.values() if s.division})
    logger.debug(f"Ranked {len(speakers)} of {len(speakers_map)} speakers")

    return SpeakerAwardsResult(
        speakers=speakers,
        top_speakers=speakers[: max(top_n, 0)],
        divisions=divisions,
    )
