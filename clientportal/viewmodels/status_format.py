"""Status-token normalization and display labeling helpers for view models.

Call context:
    ``DashboardVM`` calls these helpers to map canonical and legacy status
    tokens into consistent client-facing labels, badge tones and the
    dashboard call-to-action.
"""

from __future__ import annotations

from typing import Any

from ..domain.entities import DashboardStats
from ..domain.status import status_token

_LABELS = {
    "NOT_STARTED": "Not Started",
    "IN_PROGRESS": "In Progress",
    "NEEDS_REVIEW": "Needs Review",
    "IN_REVIEW": "Needs Review",
    "CHANGES_NEEDED": "Changes Requested",
    "CHANGES_IN_PROGRESS": "Changes Being Made",
    "APPROVED": "Completed",
}

_TONES = {
    "NOT_STARTED": "neutral",
    "IN_PROGRESS": "info",
    "NEEDS_REVIEW": "attention",
    "IN_REVIEW": "attention",
    "CHANGES_NEEDED": "danger",
    "CHANGES_IN_PROGRESS": "accent",
    "APPROVED": "success",
}


def status_key(status: Any) -> str:
    """Normalize status text into the uppercase lookup token."""
    return status_token(status)


def status_label(status: Any) -> str:
    """Convert a status token into client-facing label text."""
    return _LABELS.get(status_key(status), _LABELS["NOT_STARTED"])


def status_tone(status: Any) -> str:
    """Badge tone for a status token (unknown tokens read as not started)."""
    return _TONES.get(status_key(status), _TONES["NOT_STARTED"])


def dashboard_cta(stats: DashboardStats) -> str:
    if stats.needs_review > 0:
        return "You Have Work to Review"
    if stats.in_progress > 0:
        return "Continue Your Work"
    return "Start Next Deliverable"


__all__ = ["dashboard_cta", "status_key", "status_label", "status_tone"]
