"""Exceptions for use in Debate Tab"""

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


# ========== Base Application Exception ==========


class DebateTabException(Exception):
    """Base exception for all Debate Tab errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every package-specific error with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(DebateTabException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when tab configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass


# ========== Result Exceptions ==========


class ResultException(DebateTabException):
    """Base exception for ballot and round result errors."""

    pass


class InvalidBallotException(ResultException):
    """Raised when a ballot payload cannot be converted into a Ballot."""

    pass


class InvalidPairingException(ResultException):
    """Raised when a stored pairing row has no usable registration IDs."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(DebateTabException):
    """Base exception for validation errors."""

    pass


class TiebreakerValidationException(ValidationException):
    """Raised when a configured tiebreaker order is invalid."""

    pass


class SpeakerPointsValidationException(ValidationException):
    """Raised when a speaker point value is outside the allowed range."""

    pass


# ========== Tabulation Exceptions ==========


class TabulationException(DebateTabException):
    """Base exception for standings computation errors."""

    pass


class StandingsComputationException(TabulationException):
    """Raised when a data source hands the standings pipeline unusable data."""

    pass
