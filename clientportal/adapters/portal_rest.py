from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from clientportal.domain.ports import DashboardApiPort, WorkPackageId

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_hint,
    parse_error_payload,
)
from .http_client import HttpConfig, RetryingSession, TokenSource


class PortalRestAdapter(DashboardApiPort):
    """REST adapter for the client portal's dashboard endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        token: TokenSource = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        base = (base_url or "").strip()
        if not base:
            raise ValueError("PortalRestAdapter requires a base URL")
        if retries < 0:
            raise ValueError("retries must be >= 0")
        if request_timeout_s < 1:
            raise ValueError("request_timeout_s must be >= 1")
        self.base_url = base.rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(token, self.cfg)
        self._log = logging.getLogger(__name__)

    def get_dashboard(self, work_package_id: WorkPackageId) -> Dict[str, Any]:
        wp_id = str(work_package_id or "").strip()
        if not wp_id:
            raise ValueError("work_package_id must be a non-empty string.")
        url = self._make_url("/api/client/allitems")
        resp = self.session.get(url, params={"workPackageId": wp_id})
        self._ensure_ok(resp, f"dashboard[{wp_id}]")
        data = self._json(resp, ctx=f"dashboard[{wp_id}]")
        self._log.debug("Fetched dashboard payload for work package %s", wp_id)
        return data

    def get_engagement(self) -> Dict[str, Any]:
        url = self._make_url("/api/client/engagement")
        resp = self.session.get(url)
        self._ensure_ok(resp, "engagement")
        return self._json(resp, ctx="engagement")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                hint=extract_error_hint(payload),
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def _json(resp: requests.Response, *, ctx: str) -> Dict[str, Any]:
        try:
            data: Optional[Any] = resp.json()
        except ValueError as exc:
            snippet = getattr(resp, "text", "")[:400]
            raise ApiError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", context=ctx)
        return data


__all__ = ["PortalRestAdapter"]
