"""Translate adapter errors into the portal's UseCaseError taxonomy."""

from __future__ import annotations


from typing import Optional

from clientportal.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
    first_string,
)
from clientportal.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StoreUnavailable,
)
from clientportal.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    401 -> ``AuthenticationError``, 403 -> ``AuthorizationError``,
    404 -> ``NotFoundError``, 5xx and transport timeouts -> ``StoreUnavailable``.
    Other 4xx responses keep ``REQUEST_FAILED`` with the server's hint.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return StoreUnavailable("Portal did not respond. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        detail = first_string(getattr(exc, "payload", None))
        if status == 401:
            return AuthenticationError(_compose_error_message("Sign-in required", detail))
        if status == 403:
            return AuthorizationError(_compose_error_message("Access denied", detail))
        if status == 404:
            return NotFoundError(_compose_error_message("Not found", detail))
        hint = exc.hint or extract_error_hint(getattr(exc, "payload", None))
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, detail or hint))
    if isinstance(exc, ApiServerError):
        return StoreUnavailable("Portal error, try again.", meta={"status": exc.status})
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
