"""Speaker result and speaker award data classes."""

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
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class SpeakerResult:
    """Points one speaker earned in one round.

    Attributes
    ----------
    registration_id : str
        Team registration the speaker belongs to.
    speaker_position : int
        Speaking position on the ballot, used when no name is known.
    speaker_name : str or None
        Speaker name as entered on the ballot.
    speaker_points : float or None
        Points awarded. None means the result is skipped.
    division : str or None
        Division of the team (e.g. "novice", "open").
    """

    registration_id: str
    speaker_position: int = 1
    speaker_name: Optional[str] = None
    speaker_points: Optional[float] = None
    division: Optional[str] = None

    @property
    def speaker_key(self) -> Tuple[str, Union[str, int]]:
        """Grouping key: registration plus name, or position when unnamed."""
        return (self.registration_id, self.speaker_name or self.speaker_position)

    @property
    def speaker_id(self) -> str:
        return f"{self.registration_id}-{self.speaker_name or self.speaker_position}"


@dataclass
class SpeakerStats:
    """Aggregated points for one speaker."""

    speaker_id: str
    speaker_name: str
    registration_id: str
    division: Optional[str] = None
    points: List[float] = field(default_factory=list)
    adjusted_points: float = 0.0
    is_breaking: bool = False
    rank: Optional[int] = None

    @property
    def rounds_spoken(self) -> int:
        return len(self.points)

    @property
    def total_points(self) -> float:
        return sum(self.points)

    @property
    def avg_points(self) -> float:
        return self.total_points / len(self.points) if self.points else 0.0

    @property
    def high_point(self) -> float:
        return max(self.points) if self.points else 0.0

    @property
    def low_point(self) -> float:
        return min(self.points) if self.points else 0.0
