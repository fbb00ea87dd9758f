import pytest

from debatetab.exceptions import (
    SpeakerPointsValidationException,
    TiebreakerValidationException,
    ValidationException,
)
from debatetab.utils import safe_number
from debatetab.utils.validation import (
    validate_drop_count,
    validate_speaker_points,
    validate_speaker_points_strict,
    validate_tiebreaker_order,
    validate_tiebreaker_order_strict,
)


def test_tiebreaker_order_is_normalized():
    result = validate_tiebreaker_order([" Wins", "HEAD_TO_HEAD", "coin_flip"])
    assert result
    assert result.sanitized_value == ["wins", "head_to_head", "coin_flip"]


def test_tiebreaker_order_rejections():
    assert not validate_tiebreaker_order(["wins", "elo"])
    assert not validate_tiebreaker_order(["wins", "Wins"])
    assert not validate_tiebreaker_order("wins")
    assert not validate_tiebreaker_order(["wins", 3])
    assert validate_tiebreaker_order(None).sanitized_value == []
    assert validate_tiebreaker_order([]).sanitized_value == []


def test_tiebreaker_order_strict():
    assert validate_tiebreaker_order_strict(["speaks"]) == ["speaks"]
    with pytest.raises(TiebreakerValidationException) as excinfo:
        validate_tiebreaker_order_strict(["elo"])
    assert "elo" in str(excinfo.value)
    assert isinstance(excinfo.value, ValidationException)


def test_speaker_points_range():
    assert validate_speaker_points(27.5, 20, 30).sanitized_value == 27.5
    assert validate_speaker_points("28", 20, 30).sanitized_value == 28.0
    assert not validate_speaker_points(31, 20, 30)
    assert not validate_speaker_points(19.5, 20, 30)
    assert not validate_speaker_points("abc")
    assert validate_speaker_points(None)
    assert not validate_speaker_points(None, required=True)


def test_speaker_points_strict():
    assert validate_speaker_points_strict(0) == 0
    with pytest.raises(SpeakerPointsValidationException):
        validate_speaker_points_strict(40, 20, 30)


def test_drop_count():
    assert validate_drop_count(0)
    assert validate_drop_count(2).sanitized_value == 2
    assert not validate_drop_count(-1)
    assert not validate_drop_count(1.5)
    assert not validate_drop_count(True)


def test_safe_number():
    assert safe_number(None) == 0
    assert safe_number("27.5") == 27.5
    assert safe_number("n/a") == 0
    assert safe_number(float("nan")) == 0
    assert safe_number(True) == 0
    assert safe_number(None, default=None) is None
    assert safe_number(0, default=None) == 0
