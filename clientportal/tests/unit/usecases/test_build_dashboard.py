from __future__ import annotations

import pytest

from clientportal.adapters.store_memory import InMemoryPortalStore, StaticIdentity
from clientportal.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StoreUnavailable,
)
from clientportal.domain.ports import Identity, UseCaseError
from clientportal.domain.status import CanonicalStatus
from clientportal.usecases.build_dashboard import BuildDashboard


def _seeded_store() -> InMemoryPortalStore:
    store = InMemoryPortalStore()
    store.add_contact(
        "uid-ada",
        {
            "id": "contact-1",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@acme.io",
            "contactCompanyId": "company-1",
        },
    )
    store.add_contact("uid-nobody", {"id": "contact-2", "firstName": "Nob"})
    store.add_work_package({"id": "wp-1", "title": "Brand refresh", "companyId": "company-1"})
    store.add_work_package({"id": "wp-other", "title": "Elsewhere", "companyId": "company-2", "contactId": "contact-1"})
    store.add_phase("wp-1", {"id": "p2", "name": "Build", "position": 2, "status": "NOT_STARTED"})
    store.add_phase("wp-1", {"id": "p1", "name": "Discovery", "position": 1, "status": "IN_PROGRESS"})
    store.add_item(
        "wp-1",
        {
            "id": "i1",
            "deliverableLabel": "Brand brief",
            "workPackagePhaseId": "p1",
            "status": "IN_PROGRESS",
            "workCollateral": [{"id": "c1", "status": "IN_REVIEW", "type": "DOC"}],
        },
    )
    store.add_item("wp-1", {"id": "i2", "deliverableLabel": "Logo", "workPackagePhaseId": "p2"})
    return store


def _identity() -> StaticIdentity:
    return StaticIdentity(
        identities={
            "token-ada": Identity(subject_id="uid-ada", email="ada@acme.io", email_verified=True),
            "token-nobody": Identity(subject_id="uid-nobody"),
            "token-ghost": Identity(subject_id="uid-ghost"),
        }
    )


def test_build_dashboard_happy_path() -> None:
    seen = []
    uc = BuildDashboard(_identity(), _seeded_store(), on_diagnostic=seen.append)

    view_model = uc("Bearer token-ada", "wp-1")

    assert view_model.work_package.id == "wp-1"
    assert view_model.work_package.title == "Brand refresh"
    assert view_model.contact.first_name == "Ada"
    assert [phase.id for phase in view_model.phases] == ["p1", "p2"]
    assert view_model.current_phase.id == "p1"
    assert [item.id for item in view_model.needs_review_items] == ["i1"]
    assert view_model.items[0].status is CanonicalStatus.NEEDS_REVIEW
    assert view_model.stats.total == 2
    assert view_model.stats.needs_review == 1
    assert view_model.stats.not_started == 1
    assert seen == []


def test_missing_work_package_id_is_rejected_before_auth() -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(UseCaseError) as excinfo:
        uc("garbage", "  ")

    assert excinfo.value.code == "MISSING_WORK_PACKAGE"


@pytest.mark.parametrize("credential", ["", "Bearer ", "token-unknown"])
def test_invalid_credential_raises_authentication_error(credential) -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(AuthenticationError) as excinfo:
        uc(credential, "wp-1")

    assert excinfo.value.code == "AUTH_FAILED"


def test_unknown_contact_is_not_found() -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(NotFoundError):
        uc("token-ghost", "wp-1")


def test_contact_without_company_is_forbidden() -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(AuthorizationError) as excinfo:
        uc("token-nobody", "wp-1")

    assert excinfo.value.code == "FORBIDDEN"


def test_unknown_work_package_is_not_found() -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(NotFoundError) as excinfo:
        uc("token-ada", "wp-missing")

    assert excinfo.value.meta == {"work_package_id": "wp-missing"}


def test_matching_contact_id_does_not_bypass_company_scope() -> None:
    uc = BuildDashboard(_identity(), _seeded_store())

    with pytest.raises(AuthorizationError):
        uc("token-ada", "wp-other")


class _BrokenStore(InMemoryPortalStore):
    def list_items(self, work_package_id):
        raise ConnectionError("database offline")


def test_store_failure_maps_to_store_unavailable() -> None:
    store = _BrokenStore()
    seeded = _seeded_store()
    store.contacts = seeded.contacts
    store.work_packages = seeded.work_packages
    uc = BuildDashboard(_identity(), store)

    with pytest.raises(StoreUnavailable) as excinfo:
        uc("token-ada", "wp-1")

    assert excinfo.value.code == "STORE_UNAVAILABLE"
    assert "database offline" in excinfo.value.message


def test_store_reads_do_not_leak_mutations() -> None:
    store = _seeded_store()
    uc = BuildDashboard(_identity(), store)

    first = uc("token-ada", "wp-1")
    store.list_items("wp-1")[0]["status"] = "APPROVED"
    second = uc("token-ada", "wp-1")

    assert first == second
