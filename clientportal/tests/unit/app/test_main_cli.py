from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from clientportal.adapters.api_errors import ApiClientError
from clientportal.adapters.session_local import SessionStorageLocal
from clientportal.app import main as main_module


class _FakeAdapter:
    dashboard: Any = None
    error: Exception | None = None
    created: List[Dict[str, Any]] = []

    def __init__(self, base_url: str, **kwargs: Any) -> None:
        type(self).created.append({"base_url": base_url, **kwargs})

    def get_dashboard(self, work_package_id: str) -> Any:
        if self.error:
            raise self.error
        return self.dashboard

    def get_engagement(self) -> Any:
        return {"workPackage": {"id": "wp-e", "title": "Engagement", "items": []}}


@pytest.fixture
def fake_adapter(monkeypatch, tmp_path):
    monkeypatch.setenv("PORTAL_SESSION_DIR", str(tmp_path))
    monkeypatch.setenv("PORTAL_API_BASE_URL", "http://portal.test")
    monkeypatch.delenv("PORTAL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PORTAL_DEBUG", raising=False)
    _FakeAdapter.dashboard = {"workPackageId": "wp-1", "allItems": [{"id": "i1", "status": "IN_PROGRESS"}]}
    _FakeAdapter.error = None
    _FakeAdapter.created = []
    monkeypatch.setattr(main_module, "PortalRestAdapter", _FakeAdapter)
    return _FakeAdapter


def test_main_prints_view_model_and_stores_work_package(fake_adapter, tmp_path, capsys) -> None:
    code = main_module.main(["--work-package", "wp-1", "--token", "tok"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["workPackage"]["id"] == "wp-1"
    assert out["stats"]["inProgress"] == 1
    assert fake_adapter.created[0]["base_url"] == "http://portal.test"
    assert fake_adapter.created[0]["token"] == "tok"
    assert SessionStorageLocal(str(tmp_path)).load_session().work_package_id == "wp-1"


def test_main_summary_prints_dashboard_dto(fake_adapter, capsys) -> None:
    code = main_module.main(["--work-package", "wp-1", "--summary"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["cta"] == "Continue Your Work"
    assert out["greeting"] == "Welcome back"


def test_main_engagement_mode(fake_adapter, capsys) -> None:
    assert main_module.main(["--engagement"]) == 0
    assert json.loads(capsys.readouterr().out)["workPackage"]["title"] == "Engagement"


def test_main_reports_use_case_errors(fake_adapter, capsys) -> None:
    fake_adapter.error = ApiClientError("dashboard", status=401, payload={"error": "Unauthorized"})

    code = main_module.main(["--work-package", "wp-1"])

    assert code == 1
    assert capsys.readouterr().err.strip() == "AUTH_FAILED: Sign-in required: Unauthorized"


def test_main_without_work_package_fails(fake_adapter, capsys) -> None:
    assert main_module.main([]) == 1
    assert capsys.readouterr().err.startswith("NO_WORK_PACKAGE")


def test_main_demo_builds_dashboard_offline(fake_adapter, tmp_path, capsys) -> None:
    code = main_module.main(["--demo", "--summary"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["title"] == "Brand Launch"
    assert out["greeting"] == "Welcome back, Jordan"
    assert out["cta"] == "You Have Work to Review"
    assert out["stats"] == {"total": 4, "completed": 1, "inProgress": 1, "needsReview": 1, "notStarted": 1}
    assert out["current_phase"]["id"] == "ph-2"
    assert out["next_phase"]["id"] == "ph-3"
    assert [row["id"] for row in out["needs_review"]] == ["it-2"]
    assert fake_adapter.created == []
    assert not (tmp_path / SessionStorageLocal.FILENAME).exists()


def test_main_demo_unknown_work_package(fake_adapter, capsys) -> None:
    assert main_module.main(["--demo", "--work-package", "wp-missing"]) == 1
    assert capsys.readouterr().err.startswith("NOT_FOUND: Work package not found.")


@pytest.mark.parametrize("var, value", [("PORTAL_RETRIES", "-1"), ("PORTAL_REQUEST_TIMEOUT_S", "soon")])
def test_main_reports_invalid_settings(fake_adapter, monkeypatch, capsys, var, value) -> None:
    monkeypatch.setenv(var, value)

    assert main_module.main(["--work-package", "wp-1"]) == 1
    assert capsys.readouterr().err.startswith("CONFIG_INVALID: ")
    assert fake_adapter.created == []
