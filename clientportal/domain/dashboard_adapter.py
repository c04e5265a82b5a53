from __future__ import annotations

"""Assemble the client dashboard view model from a raw server payload.

``adapt_dashboard_payload`` accepts every historical shape of the dashboard
response and always returns a valid, fully defaulted ``DashboardViewModel``.
Missing substructures are reported as ``ShapeMismatchWarning`` diagnostics
(logged, optionally forwarded to a callback) and never change the result.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .entities import (
    ContactSummary,
    DashboardStats,
    DashboardViewModel,
    WorkPackageItem,
    WorkPackagePhase,
    WorkPackageSummary,
)
from .errors import DiagnosticSink, ShapeMismatchWarning
from .phase_selection import determine_current_phase, sort_phases
from .record_normalizer import (
    as_sequence,
    clean_text,
    is_list_shaped,
    normalize_identifier,
    normalize_item,
    normalize_phase,
)
from .stats import compute_stats, filter_needs_review, merge_stats

LOGGER = logging.getLogger(__name__)

UNKNOWN_WORK_PACKAGE_TITLE = "Unknown Work Package"
UNTITLED_WORK_PACKAGE_TITLE = "Untitled Work Package"


class _Diagnostics:
    """Log shape mismatches and forward them to an optional sink."""

    def __init__(self, sink: Optional[DiagnosticSink]) -> None:
        self._sink = sink

    def report(self, substructure: str, message: str, level: int = logging.WARNING) -> None:
        warning = ShapeMismatchWarning(substructure=substructure, message=message, level=level)
        LOGGER.log(level, "Dashboard payload mismatch: %s", warning)
        if self._sink is None:
            return
        try:
            self._sink(warning)
        except Exception:
            LOGGER.exception("Diagnostic callback failed for %s", substructure)


def empty_view_model() -> DashboardViewModel:
    """Return the view model shown when no payload is available."""
    return DashboardViewModel(
        work_package=WorkPackageSummary(title=UNKNOWN_WORK_PACKAGE_TITLE),
        stats=DashboardStats(),
        contact=ContactSummary(),
    )


def _work_package(payload: Mapping[str, Any], diagnostics: _Diagnostics) -> WorkPackageSummary:
    raw = payload.get("workPackage")
    if not isinstance(raw, Mapping):
        diagnostics.report("workPackage", "missing work package record, using defaults")
        raw = {}
    return WorkPackageSummary(
        id=normalize_identifier(raw.get("id")) or normalize_identifier(payload.get("workPackageId")),
        title=clean_text(raw.get("title")) or UNTITLED_WORK_PACKAGE_TITLE,
        description=clean_text(raw.get("description")),
        priority_summary=clean_text(raw.get("prioritySummary")),
    )


def _contact(payload: Mapping[str, Any], diagnostics: _Diagnostics) -> ContactSummary:
    raw = payload.get("contact")
    if not isinstance(raw, Mapping):
        diagnostics.report("contact", "missing contact record, using empty contact")
        return ContactSummary()
    return ContactSummary(
        id=normalize_identifier(raw.get("id")),
        first_name=clean_text(raw.get("firstName")),
        last_name=clean_text(raw.get("lastName")),
        email=clean_text(raw.get("email")),
    )


def _current_phase_record(payload: Mapping[str, Any], diagnostics: _Diagnostics) -> Optional[Mapping[str, Any]]:
    raw = payload.get("currentPhase")
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        diagnostics.report("currentPhase", f"expected an object, got {type(raw).__name__}")
        return None
    return raw


def _collect_items(
    payload: Mapping[str, Any],
    current_phase: Optional[Mapping[str, Any]],
    diagnostics: _Diagnostics,
) -> List[WorkPackageItem]:
    raw_all = payload.get("allItems")
    if is_list_shaped(raw_all):
        return [normalize_item(entry) for entry in raw_all]

    diagnostics.report("allItems", "missing item list, rebuilding from needsReviewItems and currentPhase.items")
    candidates = [normalize_item(entry) for entry in as_sequence(payload.get("needsReviewItems"))]
    if current_phase is not None:
        candidates.extend(normalize_item(entry) for entry in as_sequence(current_phase.get("items")))

    # Deduplicate by id; a later record replaces an earlier one in place.
    by_id: Dict[str, WorkPackageItem] = {}
    dropped = 0
    for item in candidates:
        if item.id is None:
            dropped += 1
            continue
        by_id[item.id] = item
    if dropped:
        diagnostics.report("allItems", f"dropped {dropped} reconstructed item(s) without an id")
    return list(by_id.values())


def _attach_items(phase: WorkPackagePhase, items: Sequence[WorkPackageItem]) -> WorkPackagePhase:
    if phase.id is None:
        return replace(phase, items=())
    return replace(phase, items=tuple(item for item in items if item.phase_id == phase.id))


def _collect_phases(
    payload: Mapping[str, Any],
    current_phase: Optional[Mapping[str, Any]],
    items: Sequence[WorkPackageItem],
    diagnostics: _Diagnostics,
) -> List[WorkPackagePhase]:
    if current_phase is not None:
        raw_phases: List[Any] = [current_phase]
    elif is_list_shaped(payload.get("phases")):
        raw_phases = list(payload.get("phases"))
    else:
        diagnostics.report("phases", "no currentPhase or phases list, dashboard has no phases")
        return []

    phases = [_attach_items(normalize_phase(raw), items) for raw in raw_phases]
    return sort_phases(phases)


def _assemble(payload: Mapping[str, Any], diagnostics: _Diagnostics) -> DashboardViewModel:
    current_raw = _current_phase_record(payload, diagnostics)
    items = _collect_items(payload, current_raw, diagnostics)
    phases = _collect_phases(payload, current_raw, items, diagnostics)

    # Always re-derived; an incoming currentPhase may come from a partial phase list.
    current_phase = determine_current_phase(phases)
    if current_phase is None:
        diagnostics.report("currentPhase", "no phase could be selected as current")

    needs_review = filter_needs_review(items)

    raw_stats = payload.get("stats")
    if isinstance(raw_stats, Mapping):
        stats = merge_stats(raw_stats, items)
    else:
        if raw_stats is not None:
            diagnostics.report("stats", f"expected an object, got {type(raw_stats).__name__}")
        stats = compute_stats(items)

    return DashboardViewModel(
        work_package=_work_package(payload, diagnostics),
        phases=tuple(phases),
        items=tuple(items),
        needs_review_items=tuple(needs_review),
        current_phase=current_phase,
        stats=stats,
        contact=_contact(payload, diagnostics),
    )


def adapt_dashboard_payload(
    raw: Any, *, on_diagnostic: Optional[DiagnosticSink] = None
) -> DashboardViewModel:
    """Convert a raw dashboard payload into a ``DashboardViewModel``.

    Item source: ``allItems`` when list-shaped, otherwise the id-deduplicated
    union of ``needsReviewItems`` and ``currentPhase.items``. Phase source:
    ``currentPhase`` as the sole phase, otherwise ``phases``. The current
    phase, needs-review list and any missing stats field are recomputed from
    the normalized data.

    Never raises; an absent or unusable payload yields ``empty_view_model()``.
    """
    diagnostics = _Diagnostics(on_diagnostic)

    if not isinstance(raw, Mapping):
        diagnostics.report(
            "payload",
            f"expected an object, got {type(raw).__name__}; returning empty dashboard",
            level=logging.ERROR,
        )
        return empty_view_model()

    try:
        view_model = _assemble(raw, diagnostics)
    except Exception:
        LOGGER.exception("Dashboard payload assembly failed, returning empty dashboard")
        diagnostics.report("payload", "assembly failed; returning empty dashboard", level=logging.ERROR)
        return empty_view_model()

    LOGGER.debug(
        "Adapted dashboard payload: work_package=%s phases=%d items=%d needs_review=%d current_phase=%s",
        view_model.work_package.id,
        len(view_model.phases),
        len(view_model.items),
        len(view_model.needs_review_items),
        view_model.current_phase.id if view_model.current_phase else None,
    )
    return view_model


__all__ = ["adapt_dashboard_payload", "empty_view_model"]
