"""Ballot and pairing data classes.

Persisted ballot payloads are loosely shaped dictionaries. They are converted
into the validated ``Ballot`` type here, before anything reaches tabulation.
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
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from debatetab.constants import BALLOT_WINNERS, SIDE_AFF, SIDE_NEG, WINNER_BYE
from debatetab.exceptions import InvalidBallotException, InvalidPairingException
from debatetab.type_hints import BallotWinner, Side
from debatetab.utils import safe_number, setup_logger
from debatetab.utils.validation import validate_speaker_points

if TYPE_CHECKING:
    from debatetab.models.tab_config import TabConfig

logger = setup_logger(__name__)

_SCORE_FIELDS = ("aff_speaks", "neg_speaks", "aff_rank", "neg_rank")
_TRUE_STRINGS = ("true", "yes", "y", "1")


def _parse_flag(value: Any) -> bool:
    """Read a stored boolean that may have been saved as text."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if value is None:
        return False
    return bool(value)


@dataclass(frozen=True)
class Ballot:
    """A finalized judge decision for one pairing.

    Attributes
    ----------
    winner : str
        "aff", "neg" or "bye".
    aff_speaks, neg_speaks : float or None
        Speaker points per side. None means not entered.
    aff_rank, neg_rank : float or None
        Judge ranks per side (1 = best). None means not entered.
    forfeit : bool
        The losing side forfeited the round.
    """

    winner: BallotWinner
    aff_speaks: Optional[float] = None
    neg_speaks: Optional[float] = None
    aff_rank: Optional[float] = None
    neg_rank: Optional[float] = None
    forfeit: bool = False

    @property
    def is_bye(self) -> bool:
        return self.winner == WINNER_BYE

    @property
    def loser(self) -> Optional[str]:
        if self.winner == SIDE_AFF:
            return SIDE_NEG
        if self.winner == SIDE_NEG:
            return SIDE_AFF
        return None

    def speaks_for(self, side: Side) -> Optional[float]:
        return self.aff_speaks if side == SIDE_AFF else self.neg_speaks

    def rank_for(self, side: Side) -> Optional[float]:
        return self.aff_rank if side == SIDE_AFF else self.neg_rank

    def validate(self, config: "TabConfig") -> List[str]:
        """Check speaker points against the configured range.

        Returns:
            List of error messages, empty when the ballot is acceptable
        """
        errors = []
        for side in (SIDE_AFF, SIDE_NEG):
            result = validate_speaker_points(
                self.speaks_for(side),
                config.speaker_point_min,
                config.speaker_point_max,
            )
            if not result:
                errors.append(f"{side}: {result.error_message}")
        if config.rank_scale is not None:
            for side in (SIDE_AFF, SIDE_NEG):
                rank = self.rank_for(side)
                if rank is not None and not 1 <= rank <= config.rank_scale:
                    errors.append(
                        f"{side}: rank {rank} outside 1-{config.rank_scale}"
                    )
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Serialize ballot to dictionary."""
        return {
            "winner": self.winner,
            "aff_speaks": self.aff_speaks,
            "neg_speaks": self.neg_speaks,
            "aff_rank": self.aff_rank,
            "neg_rank": self.neg_rank,
            "forfeit": self.forfeit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ballot":
        """Deserialize a ballot, rejecting payloads that cannot be read.

        Accepts the persisted ``aff_ranks``/``neg_ranks`` spelling as well.

        Raises:
            InvalidBallotException: If the winner is missing or unknown, or a
                score field is not numeric
        """
        if not isinstance(data, dict):
            raise InvalidBallotException(f"Ballot payload must be a dict: {data!r}")

        winner = data.get("winner")
        if isinstance(winner, str):
            winner = winner.strip().lower()
        if winner not in BALLOT_WINNERS:
            raise InvalidBallotException(f"Unknown ballot winner: {winner!r}")

        scores = {}
        for name in _SCORE_FIELDS:
            raw = data.get(name)
            if raw is None and name.endswith("_rank"):
                raw = data.get(name + "s")
            if raw is None:
                scores[name] = None
                continue
            value = safe_number(raw, default=None)
            if value is None:
                raise InvalidBallotException(f"{name} is not numeric: {raw!r}")
            scores[name] = value

        return cls(winner=winner, forfeit=_parse_flag(data.get("forfeit")), **scores)


def parse_ballot(data: Optional[Dict[str, Any]]) -> Optional[Ballot]:
    """Lenient ballot parsing for stored rows.

    Missing or undecided payloads return None (the round is pending).
    Unreadable payloads are logged and also treated as pending.
    """
    if not data or (isinstance(data, dict) and not data.get("winner")):
        return None
    try:
        return Ballot.from_dict(data)
    except InvalidBallotException as e:
        logger.warning(f"Ignoring unreadable ballot: {e}")
        return None


@dataclass(frozen=True)
class Pairing:
    """One scheduled matchup in a round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    aff_id : str
        Registration ID on the affirmative side (the bye recipient for byes).
    neg_id : str or None
        Registration ID on the negative side, or None for a bye.
    ballot : Ballot or None
        Finalized ballot, or None while the round is pending.
    is_elimination : bool
        Whether the round belongs to the elimination bracket.
    round_id : str or None
        Identifier of the stored round, when known.
    """

    round_number: int
    aff_id: str
    neg_id: Optional[str] = None
    ballot: Optional[Ballot] = None
    is_elimination: bool = False
    round_id: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.neg_id is None or (self.ballot is not None and self.ballot.is_bye)

    @property
    def is_decided(self) -> bool:
        return self.ballot is not None

    def registration_for(self, side: Side) -> Optional[str]:
        return self.aff_id if side == SIDE_AFF else self.neg_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "round_number": self.round_number,
            "aff_id": self.aff_id,
            "neg_id": self.neg_id,
            "ballot": self.ballot.to_dict() if self.ballot else None,
            "is_elimination": self.is_elimination,
            "round_id": self.round_id,
            "flags": ["bye"] if self.neg_id is None else [],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize a stored pairing row.

        Accepts both this module's keys and the stored
        ``aff_registration_id``/``neg_registration_id``/``result`` keys.
        A ``flags`` list containing "bye" or "forfeit" is honored. A missing
        negative side is only read as a bye when the flags or the ballot
        say so.

        Raises:
            InvalidPairingException: If the affirmative registration ID is
                missing, or the negative one is missing on a non-bye row
        """
        aff_id = data.get("aff_id", data.get("aff_registration_id"))
        neg_id = data.get("neg_id", data.get("neg_registration_id"))
        raw_ballot = data.get("ballot", data.get("result"))
        flags = data.get("flags") or []

        if not aff_id or not isinstance(aff_id, str):
            raise InvalidPairingException(
                f"Pairing has no aff registration: {aff_id!r}"
            )

        if isinstance(raw_ballot, Ballot):
            ballot = raw_ballot
        else:
            if raw_ballot and "forfeit" in flags:
                raw_ballot = dict(raw_ballot, forfeit=True)
            ballot = parse_ballot(raw_ballot)

        if "bye" in flags:
            neg_id = None
        elif not neg_id or not isinstance(neg_id, str):
            if ballot is None or not ballot.is_bye:
                raise InvalidPairingException(
                    f"Pairing for {aff_id} has no neg registration and is not a bye"
                )
            neg_id = None

        return cls(
            round_number=data.get("round_number", 0),
            aff_id=aff_id,
            neg_id=neg_id,
            ballot=ballot,
            is_elimination=_parse_flag(data.get("is_elimination")),
            round_id=data.get("round_id"),
        )

    @property
    def has_registrations(self) -> bool:
        """Whether both sides (or the bye recipient) carry a usable ID."""
        if not self.aff_id or not isinstance(self.aff_id, str):
            return False
        if self.neg_id is None:
            return True
        return isinstance(self.neg_id, str) and bool(self.neg_id)


def parse_pairing(data: Dict[str, Any]) -> Optional[Pairing]:
    """Lenient pairing parsing for stored rows.

    Rows without usable registration IDs are logged and skipped (None).
    """
    try:
        return Pairing.from_dict(data)
    except InvalidPairingException as e:
        logger.warning(f"Skipping unusable pairing row: {e}")
        return None
