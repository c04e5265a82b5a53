from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from clientportal.domain.errors import AuthenticationError
from clientportal.domain.ports import (
    Identity,
    IdentityPort,
    PortalStorePort,
    RawRecord,
    SubjectId,
    WorkPackageId,
)


@dataclass
class InMemoryPortalStore(PortalStorePort):
    """Offline substitute for the portal database with deterministic reads.

    Records are stored as plain dictionaries shaped like the database rows
    and returned as deep copies, so callers can never mutate stored state.
    """

    contacts: Dict[SubjectId, Dict[str, Any]] = field(default_factory=dict)
    work_packages: Dict[WorkPackageId, Dict[str, Any]] = field(default_factory=dict)
    phases: Dict[WorkPackageId, List[Dict[str, Any]]] = field(default_factory=dict)
    items: Dict[WorkPackageId, List[Dict[str, Any]]] = field(default_factory=dict)

    # ---------- seeding ----------

    def add_contact(self, subject_id: SubjectId, record: Mapping[str, Any]) -> None:
        self.contacts[subject_id] = dict(record)

    def add_work_package(self, record: Mapping[str, Any]) -> WorkPackageId:
        wp_id = str(record.get("id") or "").strip()
        if not wp_id:
            raise ValueError("add_work_package: record requires 'id'")
        self.work_packages[wp_id] = dict(record)
        return wp_id

    def add_phase(self, work_package_id: WorkPackageId, record: Mapping[str, Any]) -> None:
        self.phases.setdefault(work_package_id, []).append(dict(record))

    def add_item(self, work_package_id: WorkPackageId, record: Mapping[str, Any]) -> None:
        self.items.setdefault(work_package_id, []).append(dict(record))

    # ---------- PortalStorePort ----------

    def find_contact_by_subject(self, subject_id: SubjectId) -> Optional[RawRecord]:
        record = self.contacts.get(subject_id)
        return copy.deepcopy(record) if record is not None else None

    def get_work_package(self, work_package_id: WorkPackageId) -> Optional[RawRecord]:
        record = self.work_packages.get(work_package_id)
        return copy.deepcopy(record) if record is not None else None

    def list_phases(self, work_package_id: WorkPackageId) -> List[RawRecord]:
        ordered = sorted(self.phases.get(work_package_id, []), key=lambda p: p.get("position") or 0)
        return copy.deepcopy(ordered)

    def list_items(self, work_package_id: WorkPackageId) -> List[RawRecord]:
        return copy.deepcopy(self.items.get(work_package_id, []))


@dataclass
class StaticIdentity(IdentityPort):
    """Identity provider stand-in that accepts a fixed set of credentials."""

    identities: Dict[str, Identity] = field(default_factory=dict)

    def verify(self, credential: str) -> Identity:
        token = (credential or "").strip()
        if token.lower().startswith("bearer "):
            token = token[7:].strip()
        if not token:
            raise AuthenticationError("Missing bearer credential.")
        identity = self.identities.get(token)
        if identity is None:
            raise AuthenticationError("Invalid or expired credential.")
        return identity


DEMO_TOKEN = "demo-token"
DEMO_WORK_PACKAGE_ID = "wp-demo"


def build_demo_portal() -> Tuple[InMemoryPortalStore, StaticIdentity]:
    """Seed a small three-phase engagement for offline runs of the CLI."""
    store = InMemoryPortalStore()
    store.add_contact(
        "uid-demo",
        {
            "id": "contact-demo",
            "firstName": "Jordan",
            "lastName": "Reyes",
            "email": "jordan@example.com",
            "contactCompanyId": "company-demo",
        },
    )
    store.add_work_package(
        {
            "id": DEMO_WORK_PACKAGE_ID,
            "title": "Brand Launch",
            "description": "Positioning, identity and launch content.",
            "companyId": "company-demo",
        }
    )
    store.add_phase(DEMO_WORK_PACKAGE_ID, {"id": "ph-1", "name": "Discovery", "position": 1, "status": "COMPLETED"})
    store.add_phase(DEMO_WORK_PACKAGE_ID, {"id": "ph-2", "name": "Identity", "position": 2, "status": "IN_PROGRESS"})
    store.add_phase(DEMO_WORK_PACKAGE_ID, {"id": "ph-3", "name": "Launch", "position": 3, "status": "NOT_STARTED"})

    for item in (
        {"id": "it-1", "deliverableLabel": "Positioning brief", "workPackagePhaseId": "ph-1",
         "workCollateral": [{"id": "col-1", "status": "APPROVED", "type": "DOC"}]},
        {"id": "it-2", "deliverableLabel": "Logo concepts", "workPackagePhaseId": "ph-2",
         "workCollateral": [{"id": "col-2", "status": "IN_REVIEW", "type": "DECK"}]},
        {"id": "it-3", "deliverableLabel": "Brand guidelines", "workPackagePhaseId": "ph-2", "status": "IN_PROGRESS"},
        {"id": "it-4", "deliverableLabel": "Launch blog post", "workPackagePhaseId": "ph-3", "status": "DRAFT"},
    ):
        store.add_item(DEMO_WORK_PACKAGE_ID, item)

    identity = StaticIdentity(
        identities={DEMO_TOKEN: Identity(subject_id="uid-demo", email="jordan@example.com", email_verified=True)}
    )
    return store, identity


__all__ = ["DEMO_TOKEN", "DEMO_WORK_PACKAGE_ID", "InMemoryPortalStore", "StaticIdentity", "build_demo_portal"]
