#!/usr/bin/env python3
"""Main cleanup orchestration logic."""

import logging
import time
from typing import Callable, Optional, Sequence

from .client import QBittorrentClient
from .config import Config
from .constants import Action
from .errors import CleanupError
from .evaluator import evaluate_all
from .models import Decision, RetentionPolicy, RunResult, TorrentItem
from .utils import format_ratio

logger = logging.getLogger(__name__)


class RetentionCleanup:
    """Runs one stateless cleanup pass over a torrent snapshot."""

    def __init__(self, config: Config, client: Optional[QBittorrentClient] = None,
                 log: Optional[logging.Logger] = None,
                 clock: Callable[[], float] = time.time):
        """
        Initialize cleanup orchestrator.

        Args:
            config: Application configuration
            client: qBittorrent client, built from the config if omitted
            log: Logger receiving the per-torrent report
            clock: Source of the run's reference time, read once per run
        """
        self.config = config
        self.policy: RetentionPolicy = config.to_policy()
        self.client = client or QBittorrentClient(config.connection)
        self.log = log or logger
        self.clock = clock

    def run(self) -> bool:
        """
        Run cleanup process.

        Returns:
            True if every torrent was processed and all removals succeeded
        """
        try:
            self.client.connect()

            items = self.client.get_items()
            if not items:
                self.log.info("No torrents found")
                return True
            self.log.info(f"Found {len(items)} torrents")

            reference_time = int(self.clock())
            self.process(items, reference_time)
            return True

        except CleanupError as e:
            self.log.error(f"Cleanup failed during {e}")
            return False
        except Exception as e:
            self.log.error(f"Cleanup failed: {e}", exc_info=True)
            return False
        finally:
            self.client.disconnect()

    def process(self, items: Sequence[TorrentItem], reference_time: int) -> RunResult:
        """
        Evaluate a snapshot and remove what falls below the ratio target.

        Args:
            items: Snapshot of torrents
            reference_time: Epoch seconds used as "now" for every torrent

        Returns:
            Decisions of this pass

        Raises:
            RemovalError: If the removal request fails
        """
        result = RunResult(reference_time=reference_time, simulated=self.policy.simulate)

        self._log_policy()
        result.decisions = evaluate_all(items, self.policy, reference_time)
        for decision in result.decisions:
            self._log_decision(decision)

        self._remove(result)
        self._log_summary(result)
        return result

    def _log_policy(self) -> None:
        policy = self.policy
        mode = "dry run" if policy.simulate else ("delete with files" if policy.delete_files else "delete torrent only")
        self.log.info(
            f"[Policy] age > {policy.age_threshold_days}d | "
            f"predicted ratio < {policy.ratio_threshold:.2f} | {mode}"
        )

    def _log_decision(self, decision: Decision) -> None:
        item = decision.item
        self.log.debug(
            f"Check for torrent: {item.display_name} (hash={item.identifier}), "
            f"age_days={decision.age_days}, current_ratio={format_ratio(item.current_ratio)}"
        )

        if decision.action == Action.TOO_YOUNG:
            self.log.debug(
                f"Torrent too new: {item.display_name} (hash={item.identifier}), "
                f"age_days={decision.age_days}"
            )
        elif decision.action == Action.KEEP:
            self.log.debug(f"Keeping torrent: {decision.format_reason()}")
        elif self.policy.simulate:
            self.log.info(f"Dry run - removing torrent: {decision.format_reason()}")
        elif self.policy.delete_files:
            self.log.info(f"Removing torrent with files: {decision.format_reason()}")
        else:
            self.log.info(f"Removing torrent: {decision.format_reason()}")

    def _remove(self, result: RunResult) -> None:
        hashes = result.removed_hashes
        if not hashes or self.policy.simulate:
            return

        self.client.delete_torrents(hashes, self.policy.delete_files)
        result.removal_requested = True

    def _log_summary(self, result: RunResult) -> None:
        stats = result.get_stats()
        self.log.info(
            f"Too new: {stats['too_young']} | Kept: {stats['kept']} | "
            f"{'Would remove' if result.simulated else 'Removed'}: {stats['remove']}"
        )
