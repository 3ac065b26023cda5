#!/usr/bin/env python3
"""Data models for qBittorrent ratio cleanup."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .constants import (
    Action, DEFAULT_AGE_DAYS, DEFAULT_RATIO, SECONDS_PER_DAY
)
from .errors import ConfigError
from .utils import format_ratio


@dataclass(frozen=True)
class TorrentItem:
    """A torrent as seen in one snapshot."""
    identifier: str
    display_name: str = ""
    added_at: int = 0  # epoch seconds
    current_ratio: Optional[float] = None

    @classmethod
    def from_torrent(cls, torrent: Mapping[str, Any]) -> "TorrentItem":
        """
        Build an item from a qBittorrent torrent dictionary.

        Missing fields fall back to an empty name, an ``added_on`` of 0 and
        no ratio.

        Args:
            torrent: Raw torrent entry as returned by ``torrents_info``

        Returns:
            Converted TorrentItem
        """
        added_on = torrent.get("added_on")
        ratio = torrent.get("ratio")
        return cls(
            identifier=torrent.get("hash") or "",
            display_name=torrent.get("name") or "",
            added_at=max(0, int(added_on)) if added_on is not None else 0,
            current_ratio=float(ratio) if ratio is not None else None,
        )


@dataclass(frozen=True)
class RetentionPolicy:
    """Thresholds applied to every torrent of a run."""
    age_threshold_days: int = DEFAULT_AGE_DAYS
    ratio_threshold: float = DEFAULT_RATIO
    simulate: bool = False
    delete_files: bool = True

    def __post_init__(self):
        if self.age_threshold_days < 0:
            raise ConfigError(f"age threshold must be >= 0 days, got {self.age_threshold_days}")
        if not math.isfinite(self.ratio_threshold) or self.ratio_threshold < 0:
            raise ConfigError(f"ratio threshold must be a finite number >= 0, got {self.ratio_threshold}")

    @property
    def age_threshold_seconds(self) -> int:
        """Get the age floor in seconds."""
        return self.age_threshold_days * SECONDS_PER_DAY


@dataclass(frozen=True)
class Decision:
    """Evaluation outcome for one torrent."""
    item: TorrentItem
    action: Action
    age_seconds: int
    projected_ratio: Optional[float] = None

    @property
    def age_days(self) -> int:
        """Age in whole days."""
        return self.age_seconds // SECONDS_PER_DAY

    @property
    def should_remove(self) -> bool:
        return self.action == Action.REMOVE

    def format_reason(self) -> str:
        """Format decision details for logging."""
        parts = [f"{self.item.display_name} (hash={self.item.identifier})"]
        if self.projected_ratio is not None:
            parts.append(f"predicted_ratio={self.projected_ratio:.2f}")
        parts.append(f"age_days={self.age_days}")
        parts.append(f"current_ratio={format_ratio(self.item.current_ratio)}")
        return ", ".join(parts)


@dataclass
class RunResult:
    """Decisions made during a single cleanup pass."""
    reference_time: int
    decisions: List[Decision] = field(default_factory=list)
    simulated: bool = False
    removal_requested: bool = False

    @property
    def too_young(self) -> List[Decision]:
        return [d for d in self.decisions if d.action == Action.TOO_YOUNG]

    @property
    def kept(self) -> List[Decision]:
        return [d for d in self.decisions if d.action == Action.KEEP]

    @property
    def to_remove(self) -> List[Decision]:
        return [d for d in self.decisions if d.should_remove]

    @property
    def removed_hashes(self) -> List[str]:
        """Hashes marked for removal, each listed once in snapshot order."""
        return list(dict.fromkeys(d.item.identifier for d in self.to_remove))

    def get_stats(self) -> Dict[str, int]:
        """Get decision statistics."""
        return {
            "total": len(self.decisions),
            "too_young": len(self.too_young),
            "kept": len(self.kept),
            "remove": len(self.to_remove),
        }
