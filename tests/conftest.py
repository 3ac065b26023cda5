"""Shared fixtures for qbit-cleanup tests."""

from unittest.mock import MagicMock

import pytest

from qbit_cleanup.constants import SECONDS_PER_DAY
from qbit_cleanup.models import TorrentItem

NOW = 1_700_000_000

_ENV_VARS = (
    "QB_ENDPOINT", "QB_USERNAME", "QB_PASSWORD", "QB_VERIFY_SSL", "QB_TIMEOUT",
    "AGE_DAYS", "RATIO", "DRY_RUN", "DELETE_FILES", "DEBUG", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the configuration."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def days_ago(days, now=NOW):
    return int(now - days * SECONDS_PER_DAY)


@pytest.fixture
def make_item():
    """Factory for torrents added a number of days before NOW."""
    counter = iter(range(1, 10_000))

    def _make(age_days, ratio=1.0, name=None, identifier=None):
        n = next(counter)
        return TorrentItem(
            identifier=identifier or f"{n:040x}",
            display_name=name if name is not None else f"torrent-{n}",
            added_at=days_ago(age_days),
            current_ratio=ratio,
        )

    return _make


@pytest.fixture
def fake_client():
    """Stand-in for QBittorrentClient that never touches the network."""
    client = MagicMock(name="QBittorrentClient")
    client.get_items.return_value = []
    return client
