from __future__ import annotations

"""Normalize raw store records (artifacts, items, phases) into value objects."""

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence

from .entities import Artifact, WorkPackageItem, WorkPackagePhase
from .status import CanonicalStatus, map_item_status, normalize_status, status_token

LOGGER = logging.getLogger(__name__)

PLACEHOLDER_ITEM_LABEL = "Untitled Item"
PLACEHOLDER_PHASE_NAME = "Unknown Phase"
UNTITLED_PHASE_NAME = "Untitled Phase"


def normalize_identifier(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        token = value.strip()
    else:
        token = str(value).strip()
    return token or None


def clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def first_text(payload: Mapping[str, Any], *keys: str) -> Optional[str]:
    """Return the first non-blank text among ``keys`` in ``payload``."""
    for key in keys:
        text = clean_text(payload.get(key))
        if text:
            return text
    return None


def coerce_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        try:
            numeric = float(str(value).strip())
        except (TypeError, ValueError):
            return default
    if not math.isfinite(numeric):
        return default
    return int(numeric)


def as_sequence(value: Any) -> List[Any]:
    """Return ``value`` as a list when it is list-shaped, else an empty list."""
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return list(value)
    return []


def is_list_shaped(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def normalize_artifact(raw: Any) -> Optional[Artifact]:
    """Convert a raw collateral/artifact record; non-mapping entries yield None."""
    if isinstance(raw, Artifact):
        return raw
    if not isinstance(raw, Mapping):
        return None
    return Artifact(
        id=normalize_identifier(raw.get("id")),
        status=status_token(raw.get("status")),
        type=clean_text(raw.get("type")),
        title=clean_text(raw.get("title")),
        review_requested_at=clean_text(raw.get("reviewRequestedAt")),
        review_completed_at=clean_text(raw.get("reviewCompletedAt")),
    )


def _raw_artifacts(raw: Mapping[str, Any]) -> List[Any]:
    if "workCollateral" in raw and raw.get("workCollateral") is not None:
        return as_sequence(raw.get("workCollateral"))
    return as_sequence(raw.get("artifacts"))


def normalize_item(raw: Any) -> WorkPackageItem:
    """Convert a raw work package item into a fully defaulted ``WorkPackageItem``.

    The status is always derived through ``map_item_status`` from the item's
    artifacts (``workCollateral`` or ``artifacts``) and its own status field.
    """
    if isinstance(raw, WorkPackageItem):
        return raw
    if not isinstance(raw, Mapping):
        LOGGER.warning("Received %s item record, using placeholder item", type(raw).__name__)
        return WorkPackageItem(
            id=None,
            deliverable_label=PLACEHOLDER_ITEM_LABEL,
            status=CanonicalStatus.NOT_STARTED,
        )

    artifacts = tuple(
        artifact
        for artifact in (normalize_artifact(entry) for entry in _raw_artifacts(raw))
        if artifact is not None
    )

    return WorkPackageItem(
        id=normalize_identifier(raw.get("id")),
        deliverable_label=(
            first_text(raw, "deliverableLabel", "itemLabel", "deliverableName")
            or PLACEHOLDER_ITEM_LABEL
        ),
        deliverable_description=first_text(raw, "deliverableDescription", "itemDescription"),
        status=map_item_status(raw, artifacts),
        phase_id=(
            normalize_identifier(raw.get("workPackagePhaseId"))
            or normalize_identifier(raw.get("phaseId"))
        ),
        artifacts=artifacts,
    )


def normalize_phase(raw: Any) -> WorkPackagePhase:
    """Convert a raw phase record into a fully defaulted ``WorkPackagePhase``.

    Phases carry their own status field; it is normalized through the alias
    table independently of item-level derivation. Nested ``items`` are
    normalized when present, otherwise the phase has no items.
    """
    if isinstance(raw, WorkPackagePhase):
        return raw
    if not isinstance(raw, Mapping):
        LOGGER.warning("Received %s phase record, using placeholder phase", type(raw).__name__)
        return WorkPackagePhase(
            id=None,
            name=PLACEHOLDER_PHASE_NAME,
            position=0,
            status=CanonicalStatus.NOT_STARTED,
        )

    duration = coerce_int(raw.get("durationDays"))
    if duration is None:
        duration = coerce_int(raw.get("phaseTotalDuration"))

    return WorkPackagePhase(
        id=normalize_identifier(raw.get("id")),
        name=clean_text(raw.get("name")) or UNTITLED_PHASE_NAME,
        description=clean_text(raw.get("description")),
        position=coerce_int(raw.get("position"), 0),
        status=normalize_status(raw.get("status")),
        items=tuple(normalize_item(entry) for entry in as_sequence(raw.get("items"))),
        duration_days=duration,
        actual_start_date=clean_text(raw.get("actualStartDate")),
        actual_end_date=clean_text(raw.get("actualEndDate")),
    )


__all__ = [
    "as_sequence",
    "clean_text",
    "coerce_int",
    "first_text",
    "is_list_shaped",
    "normalize_artifact",
    "normalize_identifier",
    "normalize_item",
    "normalize_phase",
]
