from __future__ import annotations

"""Pick the phase a client should see as "what's happening now"."""

from typing import List, Optional, Sequence

from .entities import WorkPackagePhase
from .status import ACTIVE_PHASE_STATUSES, CanonicalStatus


def sort_phases(phases: Sequence[WorkPackagePhase]) -> List[WorkPackagePhase]:
    """Return phases in ascending position; ties keep their input order."""
    return sorted(phases, key=lambda phase: phase.position)


def determine_current_phase(phases: Sequence[WorkPackagePhase]) -> Optional[WorkPackagePhase]:
    """Select the current phase.

    Precedence: the earliest phase with an active status, else the latest
    APPROVED phase, else the first phase by position. Returns None when no
    phases are given.
    """
    if not phases:
        return None

    ordered = sort_phases(phases)

    for phase in ordered:
        if phase.status in ACTIVE_PHASE_STATUSES:
            return phase

    approved = [phase for phase in ordered if phase.status is CanonicalStatus.APPROVED]
    if approved:
        return approved[-1]

    return ordered[0]


def next_phase(
    phases: Sequence[WorkPackagePhase], current: Optional[WorkPackagePhase]
) -> Optional[WorkPackagePhase]:
    """Return the phase following ``current`` in position order, if any."""
    if current is None:
        return None
    ordered = sort_phases(phases)
    for index, phase in enumerate(ordered):
        if phase is current:
            return ordered[index + 1] if index + 1 < len(ordered) else None
    return None


__all__ = ["determine_current_phase", "next_phase", "sort_phases"]
