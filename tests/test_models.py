import logging
from datetime import datetime, timezone

import pytest

from debatetab.exceptions import (
    DebateTabException,
    InvalidBallotException,
    InvalidPairingException,
)
from debatetab.models import (
    Ballot,
    ComputedStanding,
    HeadToHead,
    Pairing,
    RoundResult,
    TabConfig,
    parse_ballot,
    parse_pairing,
)


def test_ballot_from_dict():
    ballot = Ballot.from_dict(
        {"winner": " AFF ", "aff_speaks": "28.5", "neg_speaks": 27, "neg_ranks": 2}
    )
    assert ballot.winner == "aff"
    assert ballot.aff_speaks == 28.5
    assert ballot.neg_rank == 2
    assert ballot.aff_rank is None
    assert ballot.loser == "neg"
    assert not ballot.forfeit


@pytest.mark.parametrize(
    "payload",
    [
        {"winner": "draw"},
        {"aff_speaks": 28},
        {"winner": "aff", "aff_speaks": "lots"},
        ["aff"],
    ],
)
def test_ballot_from_dict_rejects_bad_payloads(payload):
    with pytest.raises(InvalidBallotException):
        Ballot.from_dict(payload)


def test_parse_ballot_is_lenient(caplog):
    assert parse_ballot(None) is None
    assert parse_ballot({}) is None
    assert parse_ballot({"winner": None}) is None
    with caplog.at_level(logging.WARNING, logger="debatetab"):
        assert parse_ballot({"winner": "aff", "aff_speaks": "lots"}) is None
    assert "Ignoring unreadable ballot" in caplog.text
    assert parse_ballot({"winner": "neg"}) == Ballot("neg")


def test_ballot_validate_against_config():
    config = TabConfig(speaker_point_min=20, speaker_point_max=30, rank_scale=2)
    assert Ballot("aff", 29, 28, 1, 2).validate(config) == []

    errors = Ballot("aff", 31, 28, 1, 3).validate(config)
    assert len(errors) == 2
    assert errors[0].startswith("aff:")
    assert errors[1].startswith("neg:")


def test_pairing_from_stored_row():
    pairing = Pairing.from_dict(
        {
            "round_number": 2,
            "aff_registration_id": "A",
            "neg_registration_id": "B",
            "result": {"winner": "neg", "aff_speaks": 27, "neg_speaks": 28},
            "flags": ["forfeit"],
        }
    )
    assert (pairing.aff_id, pairing.neg_id) == ("A", "B")
    assert pairing.ballot.forfeit
    assert pairing.is_decided
    assert not pairing.is_bye
    assert pairing.registration_for("neg") == "B"


def test_pairing_byes():
    assert Pairing(1, "A").is_bye
    assert Pairing(1, "A", "B", Ballot("bye")).is_bye
    flagged = Pairing.from_dict(
        {"round_number": 1, "aff_id": "A", "neg_id": "B", "flags": ["bye"]}
    )
    assert flagged.is_bye
    assert flagged.ballot is None


@pytest.mark.parametrize(
    "stored,expected",
    [
        (True, True),
        (False, False),
        (None, False),
        ("true", True),
        (" Yes ", True),
        ("false", False),
        ("no", False),
        ("0", False),
        (1, True),
        (0, False),
    ],
)
def test_ballot_forfeit_flag_spellings(stored, expected):
    assert Ballot.from_dict({"winner": "aff", "forfeit": stored}).forfeit is expected


def test_pairing_without_aff_registration_is_rejected(caplog):
    row = {
        "round_number": 1,
        "aff_registration_id": None,
        "neg_registration_id": "A",
        "result": {"winner": "neg"},
    }
    with pytest.raises(InvalidPairingException):
        Pairing.from_dict(row)

    with caplog.at_level(logging.WARNING, logger="debatetab"):
        assert parse_pairing(row) is None
    assert "Skipping unusable pairing row" in caplog.text


def test_missing_neg_registration_needs_a_bye_marker():
    row = {
        "round_number": 1,
        "aff_id": "A",
        "neg_id": None,
        "result": {"winner": "aff"},
    }
    with pytest.raises(InvalidPairingException):
        Pairing.from_dict(row)

    by_ballot = Pairing.from_dict(dict(row, result={"winner": "bye"}))
    assert by_ballot.is_bye
    by_flag = Pairing.from_dict(dict(row, result=None, flags=["bye"]))
    assert by_flag.is_bye


def test_pairing_round_trips_through_to_dict():
    pending_bye = Pairing(3, "A", is_elimination=True)
    assert Pairing.from_dict(pending_bye.to_dict()) == pending_bye

    decided = Pairing(1, "A", "B", Ballot("aff", 28, 27), round_id="r1")
    assert Pairing.from_dict(decided.to_dict()) == decided


def test_round_result_defaults_to_pending():
    result = RoundResult.from_dict({"round_number": 3})
    assert result.is_pending
    assert result.speaker_points is None


def test_computed_standing_from_stored_row():
    standing = ComputedStanding.from_dict(
        {
            "registration_id": "A",
            "wins": 3,
            "total_speaks": None,
            "opp_win_pct": "0.75",
            "is_breaking": True,
            "break_seed": 2,
            "last_computed_at": "2025-03-01T12:00:00+00:00",
        }
    )
    assert standing.wins == 3
    assert standing.total_speaks == 0
    assert standing.opp_win_pct == 0.75
    assert standing.is_breaking
    assert standing.last_computed_at == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
    assert standing.updated_at is None
    assert standing.to_dict()["last_computed_at"] == "2025-03-01T12:00:00+00:00"


def test_head_to_head_from_stored_row():
    record = HeadToHead.from_dict(
        {"registration_id": "A", "opponent_id": "B", "wins": "2", "losses": None}
    )
    assert (record.wins, record.losses) == (2, 0)
    assert record.to_dict()["opponent_id"] == "B"


def test_exceptions_share_a_root():
    assert issubclass(InvalidBallotException, DebateTabException)
