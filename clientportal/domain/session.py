from __future__ import annotations

"""Explicit client session passed from the boundary into use cases."""

from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ClientSession:
    """Identifiers a signed-in client carries between portal screens.

    Instances are immutable; ``with_contact``/``with_work_package`` return an
    updated copy stamped with a fresh ``last_active`` timestamp.
    """

    contact_id: Optional[str] = None
    contact_email: Optional[str] = None
    contact_company_id: Optional[str] = None
    company_name: Optional[str] = None
    company_hq_id: Optional[str] = None
    firebase_id: Optional[str] = None
    work_package_id: Optional[str] = None
    proposal_id: Optional[str] = None
    invoice_id: Optional[str] = None
    last_active: Optional[str] = None
    """ISO-8601 UTC timestamp of the last session update."""

    @property
    def is_valid(self) -> bool:
        """A session is usable once the contact has been resolved."""
        return self.contact_id is not None

    def touch(self, now: Optional[datetime] = None) -> "ClientSession":
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        return replace(self, last_active=stamp)

    def with_contact(
        self,
        *,
        contact_id: Any,
        contact_email: Any = None,
        contact_company_id: Any = None,
        company_name: Any = None,
        firebase_id: Any = None,
    ) -> "ClientSession":
        updated = replace(
            self,
            contact_id=_clean(contact_id),
            contact_email=_clean(contact_email) or self.contact_email,
            contact_company_id=_clean(contact_company_id) or self.contact_company_id,
            company_name=_clean(company_name) or self.company_name,
            firebase_id=_clean(firebase_id) or self.firebase_id,
        )
        return updated.touch()

    def with_work_package(self, work_package_id: Any) -> "ClientSession":
        return replace(self, work_package_id=_clean(work_package_id)).touch()

    def without_proposal_data(self) -> "ClientSession":
        return replace(self, proposal_id=None, invoice_id=None)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "ClientSession":
        """Build a session from persisted data, ignoring unknown keys."""
        if not isinstance(payload, Mapping):
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{key: _clean(value) for key, value in payload.items() if key in known})


__all__ = ["ClientSession"]
