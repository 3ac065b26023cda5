#!/usr/bin/env python3
"""Main entry point for qBittorrent ratio cleanup."""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from . import __version__
from .cleanup import RetentionCleanup
from .config import Config
from .errors import ConfigError
from .utils import parse_log_level

logger = logging.getLogger(__name__)


class PrettyFormatter(logging.Formatter):
    """Custom formatter with colors and symbols for prettier output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m',
        'DIM': '\033[2m',
    }

    SYMBOLS = {
        'DEBUG': '·',
        'INFO': '✔',
        'WARNING': '⚠',
        'ERROR': '✗',
        'CRITICAL': '✗',
    }

    def __init__(self, use_colors=True, use_symbols=True):
        """Initialize formatter."""
        self.use_colors = use_colors and sys.stdout.isatty()
        self.use_symbols = use_symbols
        super().__init__()

    def format(self, record):
        """Format log record with colors and symbols."""
        levelname = record.levelname
        symbol = self.SYMBOLS.get(levelname, '•') if self.use_symbols else ''
        time_str = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')

        if self.use_colors:
            color = self.COLORS.get(levelname, '')
            reset = self.COLORS['RESET']
            formatted = (
                f"{self.COLORS['DIM']}{time_str}{reset} "
                f"{color}{symbol} {levelname:8}{reset} {record.getMessage()}"
            )
        else:
            formatted = f"{time_str} {symbol} {levelname:8} {record.getMessage()}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted


def setup_logging(debug: bool = False) -> None:
    """
    Set up logging with pretty formatting.

    Without ``--debug`` the level comes from ``LOG_LEVEL`` (default INFO).
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(PrettyFormatter(use_colors=True, use_symbols=True))

    level = logging.DEBUG if debug else parse_log_level("LOG_LEVEL", logging.INFO)
    root_logger.setLevel(level)
    console_handler.setLevel(level)
    if level > logging.DEBUG:
        # Suppress some noisy loggers
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('qbittorrentapi').setLevel(logging.WARNING)

    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser. Unset options fall back to the environment."""
    parser = argparse.ArgumentParser(
        prog="qbit-cleanup",
        description="Clean up qBittorrent torrents by predicted one-year ratio and age (in days).",
    )
    parser.add_argument("--age", type=int, metavar="DAYS",
                        help="Age threshold in days (default: 100, env AGE_DAYS)")
    parser.add_argument("--ratio", type=float,
                        help="Remove torrents if predicted ratio in a year is < this value "
                             "(default: 10, env RATIO)")
    parser.add_argument("--endpoint", metavar="URL",
                        help="qBittorrent WebUI endpoint, e.g. http://127.0.0.1:8080 (env QB_ENDPOINT)")
    parser.add_argument("--username", help="qBittorrent username (env QB_USERNAME)")
    parser.add_argument("--password", help="qBittorrent password (env QB_PASSWORD)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Report decisions without deleting anything (env DRY_RUN)")
    parser.add_argument("--keep-files", action="store_true",
                        help="Remove torrents but keep their downloaded files (env DELETE_FILES=false)")
    parser.add_argument("--verify-ssl", action="store_true",
                        help="Verify the WebUI TLS certificate (env QB_VERIFY_SSL)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (env DEBUG)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    args = build_parser().parse_args(argv)
    config = Config.from_args(args)
    setup_logging(debug=config.debug)

    try:
        config.validate()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if config.policy.dry_run:
        logger.info("Mode: Dry run (no torrents will be deleted)")

    success = RetentionCleanup(config).run()
    if success:
        logger.info("Cleanup completed successfully")
    else:
        logger.error("Exiting with errors")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
