"""Tests for the cleanup orchestration."""

import logging
from unittest.mock import MagicMock

import pytest

from conftest import NOW
from qbit_cleanup.cleanup import RetentionCleanup
from qbit_cleanup.config import Config
from qbit_cleanup.constants import Action
from qbit_cleanup.errors import AuthError, RemovalError, SnapshotError

LOGGER_NAME = "tests.cleanup"


def make_config(age=100, ratio=2.0, dry_run=False, delete_files=True):
    config = Config()
    config.policy.age_days = age
    config.policy.ratio = ratio
    config.policy.dry_run = dry_run
    config.policy.delete_files = delete_files
    return config


@pytest.fixture
def log(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    return logging.getLogger(LOGGER_NAME)


@pytest.fixture
def snapshot(make_item):
    return [
        make_item(50, ratio=0.0, name="young"),
        make_item(200, ratio=1.0, name="poor", identifier="a" * 40),
        make_item(200, ratio=5.0, name="good"),
        make_item(365, ratio=None, name="unknown"),
        make_item(300, ratio=0.2, name="dead", identifier="b" * 40),
    ]


def test_process_removes_only_low_projection(fake_client, snapshot, log):
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)
    result = cleanup.process(snapshot, NOW)

    assert [d.action for d in result.decisions] == [
        Action.TOO_YOUNG, Action.REMOVE, Action.KEEP, Action.KEEP, Action.REMOVE
    ]
    fake_client.delete_torrents.assert_called_once_with(["a" * 40, "b" * 40], True)
    assert result.removal_requested
    assert not result.simulated


def test_process_keep_files_passes_flag(fake_client, snapshot, log):
    cleanup = RetentionCleanup(make_config(delete_files=False), client=fake_client, log=log)
    cleanup.process(snapshot, NOW)

    fake_client.delete_torrents.assert_called_once_with(["a" * 40, "b" * 40], False)


def test_dry_run_never_deletes(fake_client, snapshot, log, caplog):
    cleanup = RetentionCleanup(make_config(dry_run=True), client=fake_client, log=log)
    result = cleanup.process(snapshot, NOW)

    fake_client.delete_torrents.assert_not_called()
    assert result.simulated
    assert not result.removal_requested
    assert len(result.to_remove) == 2
    assert "Dry run - removing torrent: poor (hash=" + "a" * 40 in caplog.text
    assert "Would remove: 2" in caplog.text


def test_nothing_to_remove_skips_delete_call(fake_client, make_item, log):
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)
    result = cleanup.process([make_item(10), make_item(200, ratio=50.0)], NOW)

    fake_client.delete_torrents.assert_not_called()
    assert result.removed_hashes == []


def test_duplicate_hashes_are_requested_once(fake_client, make_item, log):
    items = [make_item(200, ratio=0.1, identifier="c" * 40) for _ in range(3)]
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)
    cleanup.process(items, NOW)

    fake_client.delete_torrents.assert_called_once_with(["c" * 40], True)


def test_per_item_log_lines(fake_client, snapshot, log, caplog):
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)
    cleanup.process(snapshot, NOW)

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Torrent too new: young") and "age_days=50" in m for m in messages)
    assert any(
        m.startswith("Removing torrent with files: poor")
        and "predicted_ratio=1.8" in m
        and "age_days=200, current_ratio=1.00" in m
        for m in messages
    )
    assert any(m.startswith("Keeping torrent: good") for m in messages)
    assert any(m.startswith("Keeping torrent: unknown") and "current_ratio=n/a" in m for m in messages)
    assert "Too new: 1 | Kept: 2 | Removed: 2" in messages


def test_run_reads_clock_once(fake_client, snapshot, log):
    fake_client.get_items.return_value = snapshot
    clock = MagicMock(return_value=float(NOW))
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log, clock=clock)

    assert cleanup.run() is True
    clock.assert_called_once_with()
    fake_client.connect.assert_called_once_with()
    fake_client.delete_torrents.assert_called_once()
    fake_client.disconnect.assert_called_once_with()


def test_run_with_empty_snapshot(fake_client, log, caplog):
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)

    assert cleanup.run() is True
    fake_client.delete_torrents.assert_not_called()
    assert "No torrents found" in caplog.text


def test_run_auth_failure_evaluates_nothing(fake_client, log, caplog):
    fake_client.connect.side_effect = AuthError("login rejected for user 'admin'")
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)

    assert cleanup.run() is False
    fake_client.get_items.assert_not_called()
    fake_client.delete_torrents.assert_not_called()
    fake_client.disconnect.assert_called_once_with()
    assert "Cleanup failed during login: login rejected" in caplog.text


def test_run_snapshot_failure_removes_nothing(fake_client, log, caplog):
    fake_client.get_items.side_effect = SnapshotError("API connection error fetching torrents")
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)

    assert cleanup.run() is False
    fake_client.delete_torrents.assert_not_called()
    assert "list torrents" in caplog.text


def test_run_removal_failure_reports_hashes(fake_client, snapshot, log, caplog):
    fake_client.get_items.return_value = snapshot
    fake_client.delete_torrents.side_effect = RemovalError("conflict", ["a" * 40])
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log, clock=lambda: NOW)

    assert cleanup.run() is False
    assert "delete torrents: conflict (hashes=" + "a" * 40 + ")" in caplog.text
    fake_client.disconnect.assert_called_once_with()


def test_run_unexpected_error_is_reported(fake_client, log, caplog):
    fake_client.get_items.side_effect = ValueError("boom")
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)

    assert cleanup.run() is False
    assert "Cleanup failed: boom" in caplog.text
    fake_client.disconnect.assert_called_once_with()


def test_summary_counts_add_up_with_duplicate_hashes(fake_client, make_item, log, caplog):
    items = [make_item(200, ratio=0.1, identifier="c" * 40) for _ in range(2)]
    items.append(make_item(10))
    cleanup = RetentionCleanup(make_config(), client=fake_client, log=log)
    result = cleanup.process(items, NOW)

    assert result.removed_hashes == ["c" * 40]
    assert "Too new: 1 | Kept: 0 | Removed: 2" in [r.getMessage() for r in caplog.records]
