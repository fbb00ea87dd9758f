from datetime import datetime, timezone

import pytest

from debatetab.models import Ballot, ComputedStanding, Pairing


@pytest.fixture
def computed_at():
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_standing():
    def _make(registration_id, **fields):
        return ComputedStanding(registration_id=registration_id, **fields)

    return _make


@pytest.fixture
def four_team_pairings():
    """Two prelim rounds: A goes 2-0, D and B 1-1, C 0-2.

    Speaks: A 57, D 57.5, B 54.5, C 55.
    """
    return [
        Pairing(1, "A", "B", Ballot("aff", 29, 27, 1, 2)),
        Pairing(1, "C", "D", Ballot("neg", 28, 28.5, 2, 1)),
        Pairing(2, "A", "D", Ballot("aff", 28, 29, 1, 2)),
        Pairing(2, "B", "C", Ballot("aff", 27.5, 27, 1, 2)),
    ]
