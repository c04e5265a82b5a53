"""Shared HTTP transport for the portal API adapter.

This module provides a thin wrapper around ``requests.Session`` so the
adapter shares timeout policy, retry behavior, and bearer-token header
construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``clientportal.adapters.api_errors.ApiTimeoutError`` for typed transport failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import requests
from requests import exceptions as req_exc

from clientportal.adapters.api_errors import ApiTimeoutError

TokenSource = Union[str, Callable[[], Optional[str]], None]


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Requests wrapper with bearer-token headers and a retry loop.

    Only transport failures (timeouts, refused connections) are retried;
    HTTP error statuses are returned to the caller for mapping.
    """

    def __init__(self, token: TokenSource, cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            token: Bearer token, or a callable returning a fresh one per request
                (ID tokens expire, so long-lived callers pass a callable).
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.token = token
        self.cfg = cfg

    def _bearer(self) -> Optional[str]:
        token = self.token() if callable(self.token) else self.token
        if token is None:
            return None
        token = str(token).strip()
        return token or None

    def _headers(self, accept: str = "application/json") -> Dict[str, str]:
        headers = {"Accept": accept}
        token = self._bearer()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        context = f"GET {url}"
        last_err: ApiTimeoutError | None = None
        attempts = max(self.cfg.retries, 0) + 1
        for _ in range(attempts):
            try:
                return self.session.get(
                    url,
                    params=params,
                    headers=self._headers(accept=accept),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession", "TokenSource"]
