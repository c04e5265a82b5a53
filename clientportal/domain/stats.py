from __future__ import annotations

"""Fold normalized items into dashboard statistics."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .entities import DashboardStats, WorkPackageItem
from .status import CanonicalStatus

# Per-status bucket, keyed by the DashboardStats attribute it increments.
_BUCKETS: Mapping[CanonicalStatus, str] = {
    CanonicalStatus.APPROVED: "completed",
    CanonicalStatus.IN_PROGRESS: "in_progress",
    CanonicalStatus.CHANGES_IN_PROGRESS: "in_progress",
    CanonicalStatus.NEEDS_REVIEW: "needs_review",
}

# camelCase payload key -> DashboardStats attribute
STATS_FIELDS: Mapping[str, str] = {
    "total": "total",
    "completed": "completed",
    "inProgress": "in_progress",
    "needsReview": "needs_review",
    "notStarted": "not_started",
}


def compute_stats(items: Sequence[WorkPackageItem]) -> DashboardStats:
    """Count items per status bucket in a single pass.

    APPROVED counts as completed, IN_PROGRESS and CHANGES_IN_PROGRESS as in
    progress, NEEDS_REVIEW as needs review, anything else as not started.
    """
    counts: Dict[str, int] = {"completed": 0, "in_progress": 0, "needs_review": 0, "not_started": 0}
    for item in items:
        counts[_BUCKETS.get(item.status, "not_started")] += 1
    return DashboardStats(total=len(items), **counts)


def filter_needs_review(items: Iterable[WorkPackageItem]) -> List[WorkPackageItem]:
    return [item for item in items if item.status is CanonicalStatus.NEEDS_REVIEW]


def _count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def merge_stats(provided: Mapping[str, Any], items: Sequence[WorkPackageItem]) -> DashboardStats:
    """Prefer provided counts per field and recompute the rest from ``items``.

    A field counts as provided when it is a non-negative whole number; booleans,
    strings and negative values fall back to the recomputed value.
    """
    computed = compute_stats(items)
    merged: Dict[str, int] = {}
    for key, attr in STATS_FIELDS.items():
        count = _count(provided.get(key))
        merged[attr] = count if count is not None else getattr(computed, attr)
    return DashboardStats(**merged)


__all__ = ["STATS_FIELDS", "compute_stats", "filter_needs_review", "merge_stats"]
