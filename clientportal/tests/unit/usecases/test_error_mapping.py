from __future__ import annotations

import pytest

from clientportal.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from clientportal.domain.errors import AuthorizationError, NotFoundError, StoreUnavailable
from clientportal.domain.ports import UseCaseError
from clientportal.usecases.error_mapping import map_api_error


def test_usecase_errors_pass_through() -> None:
    err = UseCaseError("X", "already mapped")

    assert map_api_error(err, default_code="IGNORED") is err


@pytest.mark.parametrize(
    "status, expected_type, code",
    [
        (403, AuthorizationError, "FORBIDDEN"),
        (404, NotFoundError, "NOT_FOUND"),
    ],
)
def test_client_errors_map_to_domain_errors(status, expected_type, code) -> None:
    mapped = map_api_error(ApiClientError("ctx", status=status), default_code="D")

    assert isinstance(mapped, expected_type)
    assert mapped.code == code


def test_other_client_errors_keep_server_hint() -> None:
    err = ApiClientError("ctx", status=400, payload={"success": False, "details": "workPackageId missing"})

    mapped = map_api_error(err, default_code="D")

    assert mapped.code == "REQUEST_FAILED"
    assert mapped.message == "Request failed (HTTP 400): workPackageId missing"


def test_server_errors_and_timeouts_mean_store_unavailable() -> None:
    server = map_api_error(ApiServerError("ctx", status=503), default_code="D")
    timeout = map_api_error(ApiTimeoutError("ctx"), default_code="D")

    assert isinstance(server, StoreUnavailable)
    assert server.meta == {"status": 503}
    assert isinstance(timeout, StoreUnavailable)


def test_generic_api_error_and_unknown_exceptions() -> None:
    assert map_api_error(ApiError("bad json"), default_code="D").code == "API_ERROR"

    mapped = map_api_error(RuntimeError(""), default_code="D", default_message="Something broke.")
    assert mapped.code == "D"
    assert mapped.message == "Something broke."
