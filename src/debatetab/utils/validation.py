"""Validation utilities for Debate Tab.

This module provides reusable validation functions with consistent error handling.
Validation happens at the edges (configuration, ballots); the tabulation core
itself never raises for partial data.
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

from typing import Any, Iterable, Optional

from debatetab.constants import TIEBREAKER_TYPES
from debatetab.exceptions import (
    SpeakerPointsValidationException,
    TiebreakerValidationException,
)
from debatetab.utils import safe_number


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Tiebreaker Order Validation ==========


def validate_tiebreaker_order(order: Optional[Iterable[Any]]) -> ValidationResult:
    """Validate a configured tiebreaker order.

    Names are stripped and lower-cased before checking. Unknown names and
    duplicates are rejected; an empty order is valid (it sorts nothing).

    Args:
        order: Sequence of tiebreaker names, in priority order

    Returns:
        ValidationResult whose sanitized value is the normalized list

    Example:
        >>> result = validate_tiebreaker_order(["Wins", " speaks "])
        >>> result.sanitized_value
        ['wins', 'speaks']
    """
    if order is None:
        return ValidationResult(is_valid=True, sanitized_value=[])

    if isinstance(order, str):
        return ValidationResult(
            is_valid=False,
            error_message="Tiebreaker order must be a list of names, not a string",
        )

    normalized = []
    for entry in order:
        if not isinstance(entry, str):
            return ValidationResult(
                is_valid=False,
                error_message=f"Tiebreaker names must be strings: {entry!r}",
            )
        name = entry.strip().lower()
        if name not in TIEBREAKER_TYPES:
            return ValidationResult(
                is_valid=False,
                error_message=f"Unknown tiebreaker: {entry!r}",
            )
        if name in normalized:
            return ValidationResult(
                is_valid=False,
                error_message=f"Duplicate tiebreaker: {name!r}",
            )
        normalized.append(name)

    return ValidationResult(is_valid=True, sanitized_value=normalized)


def validate_tiebreaker_order_strict(order: Optional[Iterable[Any]]) -> list:
    """Validate a tiebreaker order and raise exception if invalid.

    Args:
        order: Sequence of tiebreaker names

    Returns:
        The normalized order

    Raises:
        TiebreakerValidationException: If the order is invalid
    """
    result = validate_tiebreaker_order(order)
    if not result.is_valid:
        raise TiebreakerValidationException(result.error_message)
    return result.sanitized_value


# ========== Speaker Points Validation ==========


def validate_speaker_points(
    points: Any,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    required: bool = False,
) -> ValidationResult:
    """Validate a speaker point value against an optional range.

    Args:
        points: Speaker points to validate
        minimum: Lowest allowed value (inclusive), or None for no bound
        maximum: Highest allowed value (inclusive), or None for no bound
        required: Whether a missing value is invalid

    Returns:
        ValidationResult with the numeric value as sanitized value
    """
    if points is None or (isinstance(points, str) and not points.strip()):
        if required:
            return ValidationResult(
                is_valid=False, error_message="Speaker points are required"
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    value = safe_number(points, default=None)
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Speaker points must be numeric: {points!r}",
        )

    if minimum is not None and value < minimum:
        return ValidationResult(
            is_valid=False,
            error_message=f"Speaker points {value} below minimum {minimum}",
        )
    if maximum is not None and value > maximum:
        return ValidationResult(
            is_valid=False,
            error_message=f"Speaker points {value} above maximum {maximum}",
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_speaker_points_strict(
    points: Any, minimum: Optional[float] = None, maximum: Optional[float] = None
) -> Optional[float]:
    """Validate speaker points and raise exception if invalid.

    Raises:
        SpeakerPointsValidationException: If the value is invalid
    """
    result = validate_speaker_points(points, minimum, maximum)
    if not result.is_valid:
        raise SpeakerPointsValidationException(result.error_message)
    return result.sanitized_value


# ========== Drop Count Validation ==========


def validate_drop_count(count: Any) -> ValidationResult:
    """Validate the number of values dropped from each end of a list."""
    if isinstance(count, bool) or not isinstance(count, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"Drop count must be an integer: {count!r}",
        )
    if count < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Drop count cannot be negative: {count}",
        )
    return ValidationResult(is_valid=True, sanitized_value=count)
