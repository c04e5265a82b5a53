from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..domain.entities import DashboardViewModel, WorkPackageItem, WorkPackagePhase
from ..domain.phase_selection import next_phase
from ..domain.status import CanonicalStatus
from .status_format import dashboard_cta, status_label, status_tone

ItemRow = Dict[str, Any]
PhaseRow = Dict[str, Any]


@dataclass
class DashboardVM:
    """Holds the latest dashboard view model and fans DTOs out to the view."""

    on_update: Optional[Callable[[Dict[str, Any]], None]] = None

    last_view_model: Optional[DashboardViewModel] = None
    work_package_id: Optional[str] = None

    def apply_view_model(self, view_model: DashboardViewModel) -> Dict[str, Any]:
        """Consume an assembled ``DashboardViewModel`` and publish its DTO."""
        if not isinstance(view_model, DashboardViewModel):
            raise TypeError("DashboardVM.apply_view_model requires a DashboardViewModel.")

        self.last_view_model = view_model
        self.work_package_id = view_model.work_package.id

        current = view_model.current_phase
        upcoming = next_phase(view_model.phases, current)

        dto = {
            "title": view_model.work_package.title,
            "greeting": self.greeting(view_model),
            "cta": dashboard_cta(view_model.stats),
            "stats": view_model.stats.to_dict(),
            "phases": self.derive_phase_rows(view_model),
            "current_phase": self._phase_row(current, current) if current else None,
            "current_phase_items": [self._item_row(item) for item in current.items] if current else [],
            "next_phase": self._phase_row(upcoming, current) if upcoming else None,
            "needs_review": [self._item_row(item) for item in view_model.needs_review_items],
        }

        if self.on_update:
            self.on_update(dto)
        return dto

    # ------------------------------------------------------------------
    # Public DTO helpers
    # ------------------------------------------------------------------
    def derive_phase_rows(self, view_model: DashboardViewModel) -> List[PhaseRow]:
        """Phase rows in position order, flagging the current phase."""
        return [self._phase_row(phase, view_model.current_phase) for phase in view_model.phases]

    @staticmethod
    def greeting(view_model: DashboardViewModel) -> str:
        first_name = view_model.contact.first_name
        return f"Welcome back, {first_name}" if first_name else "Welcome back"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _phase_row(phase: WorkPackagePhase, current: Optional[WorkPackagePhase]) -> PhaseRow:
        done = sum(1 for item in phase.items if item.status is CanonicalStatus.APPROVED)
        return {
            "id": phase.id,
            "name": phase.name,
            "position": phase.position,
            "status": phase.status.value,
            "status_label": status_label(phase.status),
            "tone": status_tone(phase.status),
            "is_current": current is not None and phase is current,
            "progress": f"{done}/{len(phase.items)}",
        }

    @staticmethod
    def _item_row(item: WorkPackageItem) -> ItemRow:
        return {
            "id": item.id,
            "label": item.deliverable_label,
            "description": item.deliverable_description or "",
            "status": item.status.value,
            "status_label": status_label(item.status),
            "tone": status_tone(item.status),
            "artifact_count": len(item.artifacts),
        }
