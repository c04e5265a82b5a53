from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from clientportal.domain.dashboard_adapter import adapt_dashboard_payload
from clientportal.domain.entities import DashboardViewModel
from clientportal.domain.errors import (
    AuthorizationError,
    DiagnosticSink,
    NotFoundError,
    StoreUnavailable,
)
from clientportal.domain.ports import (
    IdentityPort,
    PortalStorePort,
    RawRecord,
    UseCaseError,
    WorkPackageId,
)
from clientportal.domain.record_normalizer import normalize_identifier


@dataclass
class BuildDashboard:
    """Server-side dashboard hydration for a signed-in client.

    Resolves credential -> contact -> company -> work package, checks that the
    work package belongs to the contact's company, then assembles the view
    model from fresh phase and item reads.
    """

    identity_port: IdentityPort
    store_port: PortalStorePort
    on_diagnostic: Optional[DiagnosticSink] = None

    def __post_init__(self) -> None:
        self._log = logging.getLogger(__name__)

    def __call__(self, credential: str, work_package_id: WorkPackageId) -> DashboardViewModel:
        wp_id = normalize_identifier(work_package_id)
        if wp_id is None:
            raise UseCaseError("MISSING_WORK_PACKAGE", "workPackageId is required.")

        identity = self.identity_port.verify(credential)

        contact = self._read(lambda: self.store_port.find_contact_by_subject(identity.subject_id))
        if not contact:
            raise NotFoundError("Contact not found.", meta={"subject_id": identity.subject_id})

        company_id = normalize_identifier(contact.get("contactCompanyId"))
        if company_id is None:
            raise AuthorizationError("Contact has no company.", meta={"contact_id": contact.get("id")})

        work_package = self._read(lambda: self.store_port.get_work_package(wp_id))
        if not work_package:
            raise NotFoundError("Work package not found.", meta={"work_package_id": wp_id})

        # Company scope only; a matching contactId alone does not grant access.
        if normalize_identifier(work_package.get("companyId")) != company_id:
            raise AuthorizationError(
                "Work package does not belong to your company.",
                meta={"work_package_id": wp_id},
            )

        phases: List[RawRecord] = self._read(lambda: self.store_port.list_phases(wp_id)) or []
        items: List[RawRecord] = self._read(lambda: self.store_port.list_items(wp_id)) or []
        self._log.debug("Loaded %d phase(s) and %d item(s) for work package %s", len(phases), len(items), wp_id)

        payload: Dict[str, Any] = {
            "workPackage": {
                "id": work_package.get("id"),
                "title": work_package.get("title"),
                "description": work_package.get("description"),
                "prioritySummary": work_package.get("prioritySummary"),
            },
            "allItems": list(items),
            "phases": list(phases),
            "contact": {
                "id": contact.get("id"),
                "firstName": contact.get("firstName"),
                "lastName": contact.get("lastName"),
                "email": contact.get("email"),
            },
        }
        return adapt_dashboard_payload(payload, on_diagnostic=self.on_diagnostic)

    @staticmethod
    def _read(call):
        try:
            return call()
        except UseCaseError:
            raise
        except Exception as exc:
            raise StoreUnavailable(f"Store read failed: {exc}") from exc
