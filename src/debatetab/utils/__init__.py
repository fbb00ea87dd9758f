"""Utility helpers shared across Debate Tab."""

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

import logging
import math
import os
from numbers import Real
from typing import Any, Optional

from debatetab.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "debatetab"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for a Debate Tab module.

    The package root logger is configured once, with its level taken from
    the ``DEBATETAB_LOG_LEVEL`` environment variable.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


def safe_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Coerce a loosely typed value into a number.

    ``None`` and anything that cannot be read as a number become ``default``.
    Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Real):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
    if math.isnan(number):
        return default
    return number


__all__ = ["setup_logger", "safe_number"]
