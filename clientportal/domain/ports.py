from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .session import ClientSession

WorkPackageId = str
SubjectId = str
RawRecord = Mapping[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})


@dataclass(frozen=True)
class Identity:
    """Verified caller identity returned by the identity provider."""

    subject_id: SubjectId
    email: Optional[str] = None
    name: Optional[str] = None
    email_verified: bool = False


# ---- Ports (Hexagonal boundaries) ----
class IdentityPort(Protocol):
    """Bearer credential verification (Firebase ID tokens in production)."""

    def verify(self, credential: str) -> Identity: ...  # raises AuthenticationError


class PortalStorePort(Protocol):
    """Keyed reads against the portal database.

    All methods return raw records shaped like the store rows (camelCase
    keys); items carry their artifacts under ``workCollateral``.
    """

    def find_contact_by_subject(self, subject_id: SubjectId) -> Optional[RawRecord]: ...
    def get_work_package(self, work_package_id: WorkPackageId) -> Optional[RawRecord]: ...
    def list_phases(self, work_package_id: WorkPackageId) -> List[RawRecord]: ...
    def list_items(self, work_package_id: WorkPackageId) -> List[RawRecord]: ...


class DashboardApiPort(Protocol):
    """Client-side view of the portal HTTP API."""

    def get_dashboard(self, work_package_id: WorkPackageId) -> Dict[str, Any]: ...  # allitems response
    def get_engagement(self) -> Dict[str, Any]: ...  # engagement response


class SessionPort(Protocol):
    """Persistence for the explicit client session."""

    def load_session(self) -> ClientSession: ...
    def save_session(self, session: ClientSession) -> None: ...
    def clear_session(self) -> None: ...
