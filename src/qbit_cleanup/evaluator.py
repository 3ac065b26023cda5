#!/usr/bin/env python3
"""Retention decisions based on a projected one-year share ratio."""

from typing import Iterable, List

from .constants import Action, SECONDS_PER_YEAR
from .models import Decision, RetentionPolicy, TorrentItem


def project_ratio(current_ratio: float, age_seconds: int) -> float:
    """
    Extrapolate a ratio linearly to a full year of seeding.

    A torrent that reached ``current_ratio`` in ``age_seconds`` is assumed
    to keep the same upload rate. This overestimates torrents whose rate
    is decaying and underestimates those still ramping up.

    Args:
        current_ratio: Observed ratio, negative values are clamped to 0
        age_seconds: Observed age, must be > 0

    Returns:
        Projected ratio after one year
    """
    return max(0.0, current_ratio) * (SECONDS_PER_YEAR / age_seconds)


def evaluate(item: TorrentItem, policy: RetentionPolicy, reference_time: int) -> Decision:
    """
    Decide whether a torrent should be kept or removed.

    Args:
        item: Torrent from the snapshot
        policy: Thresholds of the run
        reference_time: Epoch seconds captured once for the whole run

    Returns:
        Decision for this torrent
    """
    age_seconds = max(0, int(reference_time) - item.added_at)

    # age_seconds == 0 always lands here, so the projection never divides by zero
    if age_seconds <= policy.age_threshold_seconds:
        return Decision(item=item, action=Action.TOO_YOUNG, age_seconds=age_seconds)

    if item.current_ratio is None:
        return Decision(item=item, action=Action.KEEP, age_seconds=age_seconds)

    projected = project_ratio(item.current_ratio, age_seconds)
    action = Action.REMOVE if projected < policy.ratio_threshold else Action.KEEP
    return Decision(item=item, action=action, age_seconds=age_seconds,
                    projected_ratio=projected)


def evaluate_all(items: Iterable[TorrentItem], policy: RetentionPolicy,
                 reference_time: int) -> List[Decision]:
    """Evaluate a snapshot against one reference time, preserving order."""
    return [evaluate(item, policy, reference_time) for item in items]
