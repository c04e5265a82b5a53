from __future__ import annotations

"""Lift the portal's historical response shapes into the canonical dashboard input.

The portal API has served the same dashboard data in several shapes over
time. Each shape gets an explicit adapter here so ``adapt_dashboard_payload``
only ever sees the canonical contract::

    {workPackage, allItems, phases?, currentPhase?, needsReviewItems?, stats?, contact}
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping

from .record_normalizer import as_sequence, is_list_shaped, normalize_identifier

LOGGER = logging.getLogger(__name__)

# Transport flags that carry no dashboard data.
_TRANSPORT_KEYS = frozenset({"success", "error", "details"})


class PayloadShape(str, Enum):
    DASHBOARD = "dashboard"
    """``/api/client/allitems``: stats, needsReviewItems, currentPhase (and allItems)."""
    ENGAGEMENT = "engagement"
    """``/api/client/engagement``: workPackage.items[] with artifacts, no phases."""
    WORK_PACKAGE = "work_package"
    """Work package detail: workPackage.phases[].items[]."""
    EMPTY = "empty"


def detect_payload_shape(raw: Any) -> PayloadShape:
    """Classify a raw response; anything unusable is ``EMPTY``."""
    if not isinstance(raw, Mapping):
        return PayloadShape.EMPTY

    work_package = raw.get("workPackage")
    dashboard_keys = ("allItems", "needsReviewItems", "currentPhase", "stats", "phases")
    if any(key in raw for key in dashboard_keys):
        return PayloadShape.DASHBOARD
    if isinstance(work_package, Mapping):
        if is_list_shaped(work_package.get("phases")):
            return PayloadShape.WORK_PACKAGE
        if is_list_shaped(work_package.get("items")):
            return PayloadShape.ENGAGEMENT
        return PayloadShape.DASHBOARD
    if "workPackage" in raw:
        # Engagement responses send ``workPackage: null`` when nothing is assigned yet.
        return PayloadShape.EMPTY
    return PayloadShape.DASHBOARD


def _work_package_header(work_package: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": work_package.get("id"),
        "title": work_package.get("title"),
        "description": work_package.get("description"),
        "prioritySummary": work_package.get("prioritySummary"),
    }


def _contact(raw: Mapping[str, Any], work_package: Mapping[str, Any]) -> Any:
    contact = raw.get("contact")
    if isinstance(contact, Mapping):
        return dict(contact)
    return work_package.get("contact")


def _from_dashboard(raw: Mapping[str, Any]) -> Dict[str, Any]:
    payload = {key: value for key, value in raw.items() if key not in _TRANSPORT_KEYS}
    work_package = payload.get("workPackage")
    wp_id = payload.get("workPackageId")
    if isinstance(work_package, Mapping):
        if wp_id is not None and normalize_identifier(work_package.get("id")) is None:
            payload["workPackage"] = {**work_package, "id": wp_id}
    elif wp_id is not None:
        payload["workPackage"] = {"id": wp_id}
    return payload


def _from_engagement(raw: Mapping[str, Any]) -> Dict[str, Any]:
    work_package = raw["workPackage"]
    items: List[Any] = as_sequence(work_package.get("items"))
    return {
        "workPackage": _work_package_header(work_package),
        "allItems": items,
        "contact": _contact(raw, work_package),
    }


def _from_work_package(raw: Mapping[str, Any]) -> Dict[str, Any]:
    work_package = raw["workPackage"]
    phases = as_sequence(work_package.get("phases"))
    items: List[Any] = []
    for phase in phases:
        if not isinstance(phase, Mapping):
            continue
        phase_id = phase.get("id")
        for item in as_sequence(phase.get("items")):
            if isinstance(item, Mapping) and item.get("workPackagePhaseId") is None and phase_id is not None:
                item = {**item, "workPackagePhaseId": phase_id}
            items.append(item)
    # Items hung directly off the work package are kept unless a phase already listed them.
    seen = {
        normalize_identifier(entry.get("id")) for entry in items if isinstance(entry, Mapping)
    }
    for item in as_sequence(work_package.get("items")):
        item_id = normalize_identifier(item.get("id")) if isinstance(item, Mapping) else None
        if item_id is None or item_id not in seen:
            items.append(item)
    return {
        "workPackage": _work_package_header(work_package),
        "phases": phases,
        "allItems": items,
        "contact": _contact(raw, work_package),
    }


def to_canonical_payload(raw: Any) -> Dict[str, Any]:
    """Return the canonical dashboard input for any known response shape."""
    shape = detect_payload_shape(raw)
    LOGGER.debug("Detected dashboard payload shape: %s", shape.value)
    if shape is PayloadShape.EMPTY:
        if isinstance(raw, Mapping) and isinstance(raw.get("contact"), Mapping):
            return {"contact": dict(raw["contact"])}
        return {}
    if shape is PayloadShape.ENGAGEMENT:
        return _from_engagement(raw)
    if shape is PayloadShape.WORK_PACKAGE:
        return _from_work_package(raw)
    return _from_dashboard(raw)


__all__ = ["PayloadShape", "detect_payload_shape", "to_canonical_payload"]
