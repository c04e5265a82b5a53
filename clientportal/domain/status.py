from __future__ import annotations

"""Canonical status vocabulary and the artifact-aware item status mapper."""

from enum import Enum
from typing import Any, Iterable, Mapping, Optional


class CanonicalStatus(str, Enum):
    """Client-facing status values used for display and aggregation."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    CHANGES_IN_PROGRESS = "CHANGES_IN_PROGRESS"
    APPROVED = "APPROVED"

    def __str__(self) -> str:
        return self.value


ACTIVE_PHASE_STATUSES = frozenset(
    {
        CanonicalStatus.NOT_STARTED,
        CanonicalStatus.IN_PROGRESS,
        CanonicalStatus.CHANGES_IN_PROGRESS,
        CanonicalStatus.NEEDS_REVIEW,
    }
)

# Legacy tokens still written by the execution hub.
STATUS_ALIASES: Mapping[str, CanonicalStatus] = {
    "DRAFT": CanonicalStatus.NOT_STARTED,
    "COMPLETED": CanonicalStatus.APPROVED,
    "IN_REVIEW": CanonicalStatus.NEEDS_REVIEW,
    "CHANGES_NEEDED": CanonicalStatus.CHANGES_IN_PROGRESS,
}

_REVIEW_TOKENS = frozenset({"NEEDS_REVIEW", "IN_REVIEW"})
_IN_PROGRESS_TOKENS = frozenset({"IN_PROGRESS"})
_DONE_TOKENS = frozenset({"COMPLETED", "APPROVED"})


def status_token(value: Any) -> str:
    """Return the uppercase, trimmed token for a raw status value ("" if empty)."""
    if value is None:
        return ""
    if isinstance(value, CanonicalStatus):
        return value.value
    if isinstance(value, str):
        return value.strip().upper()
    return str(value).strip().upper()


def normalize_status(raw: Any) -> CanonicalStatus:
    """Map a raw status string (or legacy alias) onto ``CanonicalStatus``.

    Unknown, empty or missing values resolve to ``NOT_STARTED``. Canonical
    values map to themselves, so the function is idempotent.
    """
    if isinstance(raw, CanonicalStatus):
        return raw
    token = status_token(raw)
    if not token:
        return CanonicalStatus.NOT_STARTED
    alias = STATUS_ALIASES.get(token)
    if alias is not None:
        return alias
    try:
        return CanonicalStatus(token)
    except ValueError:
        return CanonicalStatus.NOT_STARTED


def _artifact_status(artifact: Any) -> str:
    if isinstance(artifact, Mapping):
        return status_token(artifact.get("status"))
    return status_token(getattr(artifact, "status", None))


def _item_status(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("status")
    if isinstance(item, (str, CanonicalStatus)) or item is None:
        return item
    return getattr(item, "status", None)


def _as_list(artifacts: Any) -> list:
    if artifacts is None or isinstance(artifacts, (str, bytes, Mapping)):
        return []
    try:
        return list(artifacts)
    except TypeError:
        return []


def map_item_status(item: Any, artifacts: Optional[Iterable[Any]] = None) -> CanonicalStatus:
    """Derive the canonical status of a deliverable item.

    Artifacts win over the item's own status field: any artifact awaiting
    review marks the item ``NEEDS_REVIEW``, otherwise any artifact in progress
    marks it ``IN_PROGRESS``, and a fully completed/approved artifact set marks
    it ``APPROVED``. Without artifacts the item's raw status is normalized
    through the alias table. A mixed artifact set that matches none of the
    rules reads as ``NOT_STARTED``.
    """
    tokens = [_artifact_status(artifact) for artifact in _as_list(artifacts)]

    if any(token in _REVIEW_TOKENS for token in tokens):
        return CanonicalStatus.NEEDS_REVIEW
    if any(token in _IN_PROGRESS_TOKENS for token in tokens):
        return CanonicalStatus.IN_PROGRESS
    if tokens and all(token in _DONE_TOKENS for token in tokens):
        return CanonicalStatus.APPROVED
    if not tokens:
        return normalize_status(_item_status(item))
    return CanonicalStatus.NOT_STARTED


__all__ = [
    "ACTIVE_PHASE_STATUSES",
    "CanonicalStatus",
    "STATUS_ALIASES",
    "map_item_status",
    "normalize_status",
    "status_token",
]
