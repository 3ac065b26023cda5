#!/usr/bin/env python3
"""qBittorrent ratio cleanup - remove torrents that no longer earn their seeding time."""

__version__ = "0.1.0"
__license__ = "MIT"

from .cleanup import RetentionCleanup
from .config import Config
from .evaluator import evaluate

__all__ = ["RetentionCleanup", "Config", "evaluate", "__version__"]
