from __future__ import annotations

"""Value objects produced by payload normalization and consumed by view models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .status import CanonicalStatus


@dataclass(frozen=True)
class Artifact:
    """Review artifact (collateral) attached to a deliverable item."""

    id: Optional[str]
    """Store identifier of the artifact, or None when the record had none."""
    status: str
    """Raw artifact status token, uppercased and trimmed ("" when absent)."""
    type: Optional[str] = None
    """Artifact kind as reported by the store (e.g. BLOG, DECK)."""
    title: Optional[str] = None
    review_requested_at: Optional[str] = None
    review_completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "type": self.type,
            "title": self.title,
            "reviewRequestedAt": self.review_requested_at,
            "reviewCompletedAt": self.review_completed_at,
        }


@dataclass(frozen=True)
class WorkPackageItem:
    """Deliverable item with its derived canonical status."""

    id: Optional[str]
    """Store identifier of the item; None only for placeholder items."""
    deliverable_label: str
    """Client-facing label, never empty."""
    status: CanonicalStatus
    """Status derived from artifacts first, then the item's own status."""
    deliverable_description: Optional[str] = None
    phase_id: Optional[str] = None
    """Identifier of the owning phase, used to attach items to phases."""
    artifacts: Tuple[Artifact, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.status, CanonicalStatus):
            raise TypeError("WorkPackageItem.status must be a CanonicalStatus.")
        object.__setattr__(self, "artifacts", tuple(self.artifacts))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "deliverableLabel": self.deliverable_label,
            "deliverableDescription": self.deliverable_description,
            "status": self.status.value,
            "phaseId": self.phase_id,
            "artifacts": [artifact.to_dict() for artifact in self.artifacts],
        }


@dataclass(frozen=True)
class WorkPackagePhase:
    """Ordered stage of a work package with its attached items."""

    id: Optional[str]
    name: str
    position: int
    """Sort key; phases are presented in ascending position order."""
    status: CanonicalStatus
    """The phase's own rolled-up status, normalized through the alias table."""
    description: Optional[str] = None
    items: Tuple[WorkPackageItem, ...] = ()
    duration_days: Optional[int] = None
    actual_start_date: Optional[str] = None
    actual_end_date: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.status, CanonicalStatus):
            raise TypeError("WorkPackagePhase.status must be a CanonicalStatus.")
        object.__setattr__(self, "items", tuple(self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "position": self.position,
            "status": self.status.value,
            "durationDays": self.duration_days,
            "actualStartDate": self.actual_start_date,
            "actualEndDate": self.actual_end_date,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class DashboardStats:
    """Item counts per status bucket."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    needs_review: int = 0
    not_started: int = 0

    @property
    def bucket_sum(self) -> int:
        return self.completed + self.in_progress + self.needs_review + self.not_started

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "completed": self.completed,
            "inProgress": self.in_progress,
            "needsReview": self.needs_review,
            "notStarted": self.not_started,
        }


@dataclass(frozen=True)
class WorkPackageSummary:
    id: Optional[str] = None
    title: str = "Unknown Work Package"
    description: Optional[str] = None
    priority_summary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "prioritySummary": self.priority_summary,
        }


@dataclass(frozen=True)
class ContactSummary:
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


@dataclass(frozen=True)
class DashboardViewModel:
    """Fully defaulted dashboard projection handed to the presentation layer."""

    work_package: WorkPackageSummary = field(default_factory=WorkPackageSummary)
    phases: Tuple[WorkPackagePhase, ...] = ()
    """Normalized phases in ascending position order."""
    items: Tuple[WorkPackageItem, ...] = ()
    """Every normalized item of the work package."""
    needs_review_items: Tuple[WorkPackageItem, ...] = ()
    """Items of ``items`` whose status is NEEDS_REVIEW."""
    current_phase: Optional[WorkPackagePhase] = None
    stats: DashboardStats = field(default_factory=DashboardStats)
    contact: ContactSummary = field(default_factory=ContactSummary)

    def __post_init__(self) -> None:
        object.__setattr__(self, "phases", tuple(self.phases))
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "needs_review_items", tuple(self.needs_review_items))

    def to_dict(self) -> Dict[str, Any]:
        """Render the JSON-serializable payload consumed by the portal UI."""
        return {
            "workPackage": self.work_package.to_dict(),
            "phases": [phase.to_dict() for phase in self.phases],
            "items": [item.to_dict() for item in self.items],
            "needsReviewItems": [item.to_dict() for item in self.needs_review_items],
            "currentPhase": self.current_phase.to_dict() if self.current_phase else None,
            "stats": self.stats.to_dict(),
            "contact": self.contact.to_dict(),
        }


__all__ = [
    "Artifact",
    "ContactSummary",
    "DashboardStats",
    "DashboardViewModel",
    "WorkPackageItem",
    "WorkPackagePhase",
    "WorkPackageSummary",
]
