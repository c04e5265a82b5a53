from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest
from requests import exceptions as req_exc

from clientportal.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from clientportal.adapters.http_client import HttpConfig, RetryingSession
from clientportal.adapters.portal_rest import PortalRestAdapter


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200, text: Optional[str] = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else str(payload)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _SessionStub:
    def __init__(self, responses: Sequence[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> _ResponseStub:
        self.calls.append({"url": url, "params": params, "headers": dict(headers or {}), "timeout": timeout})
        if not self._responses:
            raise RuntimeError("No stub response configured")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def _adapter(responses: Sequence[Any], **kwargs: Any) -> tuple[PortalRestAdapter, _SessionStub]:
    adapter = PortalRestAdapter("https://portal.example.com/", **kwargs)
    stub = _SessionStub(responses)
    adapter.session.session = stub  # type: ignore[assignment]
    return adapter, stub


def test_get_dashboard_calls_allitems_with_bearer_token() -> None:
    adapter, stub = _adapter([_ResponseStub({"success": True, "allItems": []})], token="abc", request_timeout_s=7)

    data = adapter.get_dashboard(" wp-1 ")

    assert data == {"success": True, "allItems": []}
    call = stub.calls[0]
    assert call["url"] == "https://portal.example.com/api/client/allitems"
    assert call["params"] == {"workPackageId": "wp-1"}
    assert call["headers"]["Authorization"] == "Bearer abc"
    assert call["headers"]["Accept"] == "application/json"
    assert call["timeout"] == 7


def test_token_callable_is_resolved_per_request() -> None:
    tokens = iter(["first", "second"])
    adapter, stub = _adapter(
        [_ResponseStub({"workPackage": None}), _ResponseStub({"workPackage": None})],
        token=lambda: next(tokens),
    )

    adapter.get_engagement()
    adapter.get_engagement()

    assert stub.calls[0]["url"] == "https://portal.example.com/api/client/engagement"
    assert [c["headers"]["Authorization"] for c in stub.calls] == ["Bearer first", "Bearer second"]


def test_missing_token_sends_no_authorization_header() -> None:
    adapter, stub = _adapter([_ResponseStub({})])

    adapter.get_engagement()

    assert "Authorization" not in stub.calls[0]["headers"]


def test_blank_work_package_id_is_rejected_without_request() -> None:
    adapter, stub = _adapter([])

    with pytest.raises(ValueError):
        adapter.get_dashboard("  ")

    assert stub.calls == []


def test_client_error_carries_status_and_hint() -> None:
    body = {"success": False, "error": "Forbidden", "details": "Work package belongs to another company"}
    adapter, _ = _adapter([_ResponseStub(body, status_code=403)])

    with pytest.raises(ApiClientError) as excinfo:
        adapter.get_dashboard("wp-1")

    err = excinfo.value
    assert err.status == 403
    assert err.hint == "Work package belongs to another company"
    assert "Forbidden" in str(err)
    assert err.context == "dashboard[wp-1]"


def test_server_error_is_typed() -> None:
    adapter, _ = _adapter([_ResponseStub(ValueError("no json"), status_code=502, text="Bad gateway")])

    with pytest.raises(ApiServerError) as excinfo:
        adapter.get_dashboard("wp-1")

    assert excinfo.value.status == 502
    assert excinfo.value.payload == "Bad gateway"


def test_invalid_json_and_non_object_bodies_raise_api_error() -> None:
    adapter, _ = _adapter([_ResponseStub(ValueError("bad"), text="<html>"), _ResponseStub([1, 2])])

    with pytest.raises(ApiError, match="invalid JSON"):
        adapter.get_dashboard("wp-1")
    with pytest.raises(ApiError, match="expected object"):
        adapter.get_dashboard("wp-1")


def test_transport_failures_are_retried_then_raised() -> None:
    adapter, stub = _adapter([req_exc.Timeout(), req_exc.ConnectionError()], retries=1)

    with pytest.raises(ApiTimeoutError):
        adapter.get_engagement()

    assert len(stub.calls) == 2


def test_retry_recovers_after_transient_timeout() -> None:
    adapter, stub = _adapter([req_exc.Timeout(), _ResponseStub({"workPackage": None})], retries=2)

    assert adapter.get_engagement() == {"workPackage": None}
    assert len(stub.calls) == 2


def test_base_url_is_required() -> None:
    with pytest.raises(ValueError):
        PortalRestAdapter("   ")


@pytest.mark.parametrize("kwargs", [{"retries": -1}, {"request_timeout_s": 0}])
def test_adapter_rejects_invalid_transport_config(kwargs) -> None:
    with pytest.raises(ValueError):
        PortalRestAdapter("https://portal.example.com", **kwargs)


def test_negative_retries_still_make_one_attempt() -> None:
    session = RetryingSession(None, HttpConfig(retries=-3))
    stub = _SessionStub([req_exc.Timeout()])
    session.session = stub  # type: ignore[assignment]

    with pytest.raises(ApiTimeoutError):
        session.get("https://portal.example.com/api/client/engagement")

    assert len(stub.calls) == 1
