from datetime import datetime, timezone

from clientportal.domain.session import ClientSession


def test_empty_session_is_not_valid():
    session = ClientSession()

    assert session.is_valid is False
    assert set(session.to_dict()) >= {"contact_id", "work_package_id", "last_active"}


def test_with_contact_keeps_existing_fields_and_touches():
    session = ClientSession(company_name="Acme", work_package_id="wp-1")

    updated = session.with_contact(contact_id=" c-1 ", contact_email="a@acme.io")

    assert updated.is_valid
    assert updated.contact_id == "c-1"
    assert updated.company_name == "Acme"
    assert updated.work_package_id == "wp-1"
    assert updated.last_active is not None
    assert session.contact_id is None


def test_touch_uses_given_clock():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    assert ClientSession().touch(now).last_active == "2024-05-01T12:00:00+00:00"


def test_with_work_package_and_proposal_reset():
    session = ClientSession(contact_id="c", proposal_id="p", invoice_id="inv").with_work_package(17)

    assert session.work_package_id == "17"
    cleared = session.without_proposal_data()
    assert cleared.proposal_id is None
    assert cleared.invoice_id is None
    assert cleared.contact_id == "c"


def test_from_dict_ignores_unknown_keys_and_bad_input():
    session = ClientSession.from_dict({"contact_id": "c", "work_package_id": "", "legacy": "x"})

    assert session.contact_id == "c"
    assert session.work_package_id is None
    assert ClientSession.from_dict(["x"]) == ClientSession()
    assert ClientSession.from_dict(session.to_dict()) == session
