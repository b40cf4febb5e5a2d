"""Tests for the health and info routes."""

from http import HTTPStatus

from fastapi.testclient import TestClient

from sticky_notes_engine.apps.api.app import create_app
from sticky_notes_engine.core.config import config as app_config
from sticky_notes_engine.services import build_default_services


def _client() -> TestClient:
    return TestClient(create_app(build_default_services()))


def test_root_describes_endpoint() -> None:
    resp = _client().get("/")

    assert resp.status_code == HTTPStatus.OK
    assert "/skill" in resp.json()["message"]


def test_alive_requires_token(monkeypatch) -> None:
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", True)
    monkeypatch.setattr(app_config, "HEALTHCHECK_API_TOKEN", "health-token")
    client = _client()

    assert client.get("/alive").status_code == HTTPStatus.UNAUTHORIZED
    wrong = client.get("/alive", headers={"Authorization": "Bearer nope"})
    assert wrong.status_code == HTTPStatus.UNAUTHORIZED
    ok = client.get("/alive", headers={"Authorization": "Bearer health-token"})
    assert ok.status_code == HTTPStatus.OK
    assert ok.json()["status"] == "ok"
    via_header = client.get("/alive", headers={"X-Admin-Token": "health-token"})
    assert via_header.status_code == HTTPStatus.OK


def test_alive_open_when_auth_disabled(monkeypatch) -> None:
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", False)

    assert _client().get("/alive").status_code == HTTPStatus.OK


def test_alive_rejects_when_token_unset(monkeypatch) -> None:
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", True)
    monkeypatch.setattr(app_config, "HEALTHCHECK_API_TOKEN", None)

    resp = _client().get("/alive", headers={"Authorization": "Bearer anything"})

    assert resp.status_code == HTTPStatus.UNAUTHORIZED
    assert resp.json()["detail"] == "Token not configured"
