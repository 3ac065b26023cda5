#!/usr/bin/env python3
"""Utility functions for qBittorrent ratio cleanup."""

import logging
import os
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

Number = TypeVar("Number", int, float)

_BOOL_TRUE = frozenset(('true', '1', 'yes', 'on'))
_BOOL_FALSE = frozenset(('false', '0', 'no', 'off'))

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def parse_bool(env_var: str, default: bool = False) -> bool:
    """
    Parse boolean environment variable.

    Args:
        env_var: Environment variable name
        default: Default value if not set

    Returns:
        Parsed boolean value
    """
    raw = os.environ.get(env_var)
    if raw is None or not raw.strip():
        return default
    lower = raw.strip().lower()
    if lower not in _BOOL_TRUE and lower not in _BOOL_FALSE:
        logger.warning(f"{env_var}='{raw}' is not a recognized boolean, using default {default}")
        return default
    return lower in _BOOL_TRUE


def _parse_number(env_var: str, default: Number, min_val: Optional[Number],
                  cast: Callable[[str], Number], kind: str) -> Number:
    raw = os.environ.get(env_var)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        logger.warning(f"Invalid {kind} value for {env_var}='{raw}', using default {default}")
        return default
    if min_val is not None and value < min_val:
        logger.warning(f"{env_var}={value} is below minimum {min_val}, using minimum")
        return min_val
    return value


def parse_float(env_var: str, default: float, min_val: Optional[float] = None) -> float:
    """Parse float environment variable with optional minimum value."""
    return _parse_number(env_var, default, min_val, float, "float")


def parse_int(env_var: str, default: int, min_val: Optional[int] = None) -> int:
    """Parse integer environment variable with optional minimum value."""
    return _parse_number(env_var, default, min_val, int, "integer")


def parse_log_level(env_var: str = "LOG_LEVEL", default: int = logging.INFO) -> int:
    """
    Parse a logging level name such as ``debug`` or ``WARNING``.

    Args:
        env_var: Environment variable name
        default: Level used when unset or unrecognized

    Returns:
        Numeric logging level
    """
    raw = os.environ.get(env_var, "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVELS:
        logger.warning(f"{env_var}='{raw}' is not a log level, using {logging.getLevelName(default)}")
        return default
    return getattr(logging, raw)


def format_ratio(value: Optional[float]) -> str:
    """Format a ratio with two decimals, or ``n/a`` when unknown."""
    return "n/a" if value is None else f"{value:.2f}"
