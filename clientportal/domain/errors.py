"""Domain-level error types for use-case and adapter mapping.

Boundary failures (authentication, lookup, scope checks, store outages) are
``UseCaseError`` subclasses with stable codes so callers can branch on the
code without importing transport details. Normalization never raises; it
reports missing substructures as ``ShapeMismatchWarning`` diagnostics.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .ports import UseCaseError


class AuthenticationError(UseCaseError):
    """Credential missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required.", *, meta: Optional[Dict[str, Any]] = None):
        super().__init__("AUTH_FAILED", message, meta=meta)


class NotFoundError(UseCaseError):
    """Referenced contact, work package or artifact is absent in the store."""

    def __init__(self, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, meta=meta)


class AuthorizationError(UseCaseError):
    """Entity exists but lies outside the requesting identity's company scope."""

    def __init__(self, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__("FORBIDDEN", message, meta=meta)


class StoreUnavailable(UseCaseError):
    """The persistent store (or the portal API in front of it) failed."""

    def __init__(self, message: str = "Data store unavailable.", *, meta: Optional[Dict[str, Any]] = None):
        super().__init__("STORE_UNAVAILABLE", message, meta=meta)


@dataclass(frozen=True)
class ShapeMismatchWarning:
    """Non-fatal diagnostic: a payload lacked an expected substructure."""

    substructure: str
    """Dotted path of the missing or malformed part, e.g. ``currentPhase.items``."""
    message: str
    level: int = logging.WARNING

    def __str__(self) -> str:
        return f"{self.substructure}: {self.message}"


DiagnosticSink = Callable[[ShapeMismatchWarning], None]


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DiagnosticSink",
    "NotFoundError",
    "ShapeMismatchWarning",
    "StoreUnavailable",
]
