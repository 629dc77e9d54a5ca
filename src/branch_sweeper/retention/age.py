"""Branch age evaluation."""

from __future__ import annotations

from datetime import datetime


def age_in_days(last_commit_at: datetime, now: datetime) -> int:
    """Return the number of whole days between ``last_commit_at`` and ``now``."""

    return abs(now - last_commit_at).days


def is_stale(last_commit_at: datetime, threshold_days: int, now: datetime) -> bool:
    """Return True when the last commit is more than ``threshold_days`` whole days old.

    A commit dated at or after ``now`` (clock skew, future timestamps) never
    counts as stale.
    """

    if not now > last_commit_at:
        return False
    return age_in_days(last_commit_at, now) > threshold_days


__all__ = ["age_in_days", "is_stale"]
