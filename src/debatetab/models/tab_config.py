"""TabConfig data class."""

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
from typing import Any, Dict, Optional

from debatetab.constants import (
    DEFAULT_DROP_COUNT,
    DEFAULT_TIEBREAKER_ORDER,
    TIEBREAKER_PRESETS,
)
from debatetab.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from debatetab.type_hints import TiebreakerOrder
from debatetab.utils.validation import validate_drop_count, validate_tiebreaker_order


@dataclass
class TabConfig:
    """Tabulation settings for one tournament or event.

    Attributes
    ----------
    tiebreaker_order : list of str
        Tiebreaker criteria in priority order.
    drop_high_low_speaks : int
        Values dropped from each end for adjusted speaks.
    drop_high_low_ranks : int
        Values dropped from each end for adjusted ranks.
    speaker_point_min, speaker_point_max : float or None
        Allowed speaker point range for ballot validation.
    rank_scale : int or None
        Highest rank a judge may assign.
    prelim_rounds : int or None
        Number of preliminary rounds.
    break_to : int or None
        Size of the break; None leaves break fields unset.
    include_elims : bool
        Count elimination rounds in standings.
    bye_counts_as_win : bool
        Also credit a win for each bye.
    """

    tiebreaker_order: TiebreakerOrder = field(
        default_factory=lambda: list(DEFAULT_TIEBREAKER_ORDER)
    )
    drop_high_low_speaks: int = DEFAULT_DROP_COUNT
    drop_high_low_ranks: int = DEFAULT_DROP_COUNT
    speaker_point_min: Optional[float] = None
    speaker_point_max: Optional[float] = None
    rank_scale: Optional[int] = None
    prelim_rounds: Optional[int] = None
    break_to: Optional[int] = None
    include_elims: bool = False
    bye_counts_as_win: bool = False

    @classmethod
    def from_preset(cls, name: str, **overrides: Any) -> "TabConfig":
        """Create a configuration from a named tiebreaker preset.

        Raises:
            MissingConfigurationException: If no preset has that name
        """
        if name not in TIEBREAKER_PRESETS:
            raise MissingConfigurationException(f"Unknown tiebreaker preset: {name}")
        _, order = TIEBREAKER_PRESETS[name]
        return cls(tiebreaker_order=list(order), **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "tiebreaker_order": list(self.tiebreaker_order),
            "drop_high_low_speaks": self.drop_high_low_speaks,
            "drop_high_low_ranks": self.drop_high_low_ranks,
            "speaker_point_min": self.speaker_point_min,
            "speaker_point_max": self.speaker_point_max,
            "rank_scale": self.rank_scale,
            "prelim_rounds": self.prelim_rounds,
            "break_to": self.break_to,
            "include_elims": self.include_elims,
            "bye_counts_as_win": self.bye_counts_as_win,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TabConfig":
        """Deserialize and validate configuration from dictionary.

        Raises:
            InvalidConfigurationException: If the tiebreaker order or a drop
                count is invalid
        """
        order = data.get("tiebreaker_order")
        if order is None:
            order = list(DEFAULT_TIEBREAKER_ORDER)
        order_result = validate_tiebreaker_order(order)
        if not order_result:
            raise InvalidConfigurationException(order_result.error_message)

        drops = {}
        for key in ("drop_high_low_speaks", "drop_high_low_ranks"):
            value = data.get(key)
            if value is None:
                value = DEFAULT_DROP_COUNT
            drop_result = validate_drop_count(value)
            if not drop_result:
                raise InvalidConfigurationException(
                    f"{key}: {drop_result.error_message}"
                )
            drops[key] = value

        break_to = data.get("break_to")
        if break_to is not None and (
            isinstance(break_to, bool) or not isinstance(break_to, int) or break_to < 0
        ):
            raise InvalidConfigurationException(
                f"break_to must be a non-negative integer: {break_to!r}"
            )

        return cls(
            tiebreaker_order=order_result.sanitized_value,
            speaker_point_min=data.get("speaker_point_min"),
            speaker_point_max=data.get("speaker_point_max"),
            rank_scale=data.get("rank_scale"),
            prelim_rounds=data.get("prelim_rounds"),
            break_to=break_to,
            include_elims=bool(data.get("include_elims", False)),
            bye_counts_as_win=bool(data.get("bye_counts_as_win", False)),
            **drops,
        )
