#!/usr/bin/env python3
"""Exceptions raised while running a cleanup pass."""

from typing import Iterable, Optional


class CleanupError(Exception):
    """Base class for every failure that aborts a cleanup run."""

    operation = "cleanup"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        if operation is not None:
            self.operation = operation

    def __str__(self) -> str:
        return f"{self.operation}: {super().__str__()}"


class ConfigError(CleanupError):
    """Invalid configuration, detected before any network activity."""

    operation = "config"


class AuthError(CleanupError):
    """Login rejected or qBittorrent unreachable."""

    operation = "login"


class SnapshotError(CleanupError):
    """Torrent list could not be retrieved."""

    operation = "list torrents"


class RemovalError(CleanupError):
    """A removal request was rejected."""

    operation = "delete torrents"

    def __init__(self, message: str, hashes: Iterable[str] = ()):
        self.hashes = list(hashes)
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if not self.hashes:
            return base
        return f"{base} (hashes={', '.join(self.hashes)})"
