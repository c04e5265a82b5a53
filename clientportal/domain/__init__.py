"""Domain package exports for value objects and the dashboard pipeline."""

from .dashboard_adapter import adapt_dashboard_payload, empty_view_model
from .entities import (
    Artifact,
    ContactSummary,
    DashboardStats,
    DashboardViewModel,
    WorkPackageItem,
    WorkPackagePhase,
    WorkPackageSummary,
)
from .payload_shapes import PayloadShape, detect_payload_shape, to_canonical_payload
from .phase_selection import determine_current_phase, next_phase
from .record_normalizer import normalize_artifact, normalize_item, normalize_phase
from .session import ClientSession
from .stats import compute_stats, filter_needs_review, merge_stats
from .status import ACTIVE_PHASE_STATUSES, CanonicalStatus, map_item_status, normalize_status

__all__ = [
    "ACTIVE_PHASE_STATUSES",
    "Artifact",
    "CanonicalStatus",
    "ClientSession",
    "ContactSummary",
    "DashboardStats",
    "DashboardViewModel",
    "PayloadShape",
    "WorkPackageItem",
    "WorkPackagePhase",
    "WorkPackageSummary",
    "adapt_dashboard_payload",
    "compute_stats",
    "detect_payload_shape",
    "determine_current_phase",
    "empty_view_model",
    "filter_needs_review",
    "map_item_status",
    "merge_stats",
    "next_phase",
    "normalize_artifact",
    "normalize_item",
    "normalize_phase",
    "normalize_status",
    "to_canonical_payload",
]
