#!/usr/bin/env python3
"""Constants and enumerations for qBittorrent ratio cleanup."""

from enum import Enum
from typing import Final

# Time constants
SECONDS_PER_DAY: Final[int] = 86400
DAYS_PER_YEAR: Final[int] = 365
SECONDS_PER_YEAR: Final[int] = DAYS_PER_YEAR * SECONDS_PER_DAY

# Policy defaults
DEFAULT_AGE_DAYS: Final[int] = 100
DEFAULT_RATIO: Final[float] = 10.0

# Connection defaults
DEFAULT_ENDPOINT: Final[str] = "http://127.0.0.1:8080"
DEFAULT_USERNAME: Final[str] = "admin"
DEFAULT_PASSWORD: Final[str] = "adminadmin"

# Network constants
DEFAULT_TIMEOUT: Final[int] = 30
MAX_RETRY_ATTEMPTS: Final[int] = 3
RETRY_DELAY: Final[float] = 5.0


class Action(str, Enum):
    """Outcome of evaluating a single torrent."""
    TOO_YOUNG = "too_young"
    KEEP = "keep"
    REMOVE = "remove"
