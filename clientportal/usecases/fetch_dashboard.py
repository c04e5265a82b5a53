from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from clientportal.domain.dashboard_adapter import adapt_dashboard_payload
from clientportal.domain.entities import DashboardViewModel
from clientportal.domain.errors import DiagnosticSink
from clientportal.domain.payload_shapes import to_canonical_payload
from clientportal.domain.ports import DashboardApiPort, UseCaseError
from clientportal.domain.session import ClientSession
from clientportal.usecases.error_mapping import map_api_error


@dataclass
class FetchDashboard:
    """Fetch the dashboard for the session's work package and assemble it."""

    api_port: DashboardApiPort
    on_diagnostic: Optional[DiagnosticSink] = None

    def __call__(self, session: ClientSession) -> DashboardViewModel:
        work_package_id = session.work_package_id if session else None
        if not work_package_id:
            raise UseCaseError(
                "NO_WORK_PACKAGE",
                "No work package selected for this session.",
            )
        try:
            raw = self.api_port.get_dashboard(work_package_id)
        except Exception as exc:
            raise map_api_error(exc, default_code="DASHBOARD_FAILED") from exc

        payload = to_canonical_payload(raw)
        return adapt_dashboard_payload(payload, on_diagnostic=self.on_diagnostic)


@dataclass
class FetchEngagement:
    """Fetch the contact's engagement (work package with item artifacts)."""

    api_port: DashboardApiPort
    on_diagnostic: Optional[DiagnosticSink] = None

    def __call__(self) -> DashboardViewModel:
        try:
            raw = self.api_port.get_engagement()
        except Exception as exc:
            raise map_api_error(exc, default_code="ENGAGEMENT_FAILED") from exc

        payload = to_canonical_payload(raw)
        return adapt_dashboard_payload(payload, on_diagnostic=self.on_diagnostic)
