"""Tests for the onboarding HTTP endpoints (service layer mocked)."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from api.db.database import get_db
from api.main import app

URL = "/api/brand/onboarding"


async def _fake_db():
    yield AsyncMock()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = _fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_missing_identity_header_is_401(client, complete_form):
    resp = client.post(URL, json=complete_form)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


def test_invalid_submission_is_400(client, complete_form):
    complete_form["company_name"] = ""
    with patch("api.routers.brand_onboarding.complete_onboarding", new=AsyncMock()) as complete:
        resp = client.post(URL, json=complete_form, headers={"X-Telegram-Id": "42"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required field: company_name"}
    complete.assert_not_awaited()


def test_successful_submission_is_201(client, complete_form):
    brand_id = uuid.uuid4()
    with patch(
        "api.routers.brand_onboarding.complete_onboarding",
        new=AsyncMock(return_value=SimpleNamespace(id=brand_id)),
    ) as complete:
        resp = client.post(URL, json=complete_form, headers={"X-Telegram-Id": "42"})

    assert resp.status_code == 201
    assert resp.json() == {
        "success": True,
        "message": "Brand onboarding completed successfully",
        "brand_id": str(brand_id),
    }
    assert complete.await_args.args[1] == 42


def test_service_errors_use_error_body(client, complete_form):
    with patch(
        "api.routers.brand_onboarding.complete_onboarding",
        new=AsyncMock(side_effect=HTTPException(status_code=404, detail="User not found")),
    ):
        resp = client.post(URL, json=complete_form, headers={"X-Telegram-Id": "42"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_unexpected_failure_is_json_500(complete_form):
    app.dependency_overrides[get_db] = _fake_db
    client = TestClient(app, raise_server_exceptions=False)
    try:
        with patch(
            "api.routers.brand_onboarding.complete_onboarding",
            new=AsyncMock(side_effect=RuntimeError("connection reset")),
        ):
            resp = client.post(URL, json=complete_form, headers={"X-Telegram-Id": "42"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "Internal server error"}


def test_wrong_field_type_is_422(client, complete_form):
    complete_form["preferred_niches"] = "Beauty"
    resp = client.post(URL, json=complete_form, headers={"X-Telegram-Id": "42"})
    assert resp.status_code == 422
    assert resp.json()["error"].startswith("Invalid field preferred_niches")


def test_onboarding_status(client):
    brand_id = uuid.uuid4()
    user = SimpleNamespace(id=uuid.uuid4(), is_onboarded=True)
    with patch("api.routers.brand_onboarding.get_user", new=AsyncMock(return_value=user)), \
         patch(
             "api.routers.brand_onboarding.get_brand_for_user",
             new=AsyncMock(return_value=SimpleNamespace(id=brand_id)),
         ):
        resp = client.get(f"{URL}/42")

    assert resp.status_code == 200
    assert resp.json() == {"is_onboarded": True, "brand_id": str(brand_id)}


def test_onboarding_status_without_brand(client):
    user = SimpleNamespace(id=uuid.uuid4(), is_onboarded=False)
    with patch("api.routers.brand_onboarding.get_user", new=AsyncMock(return_value=user)), \
         patch("api.routers.brand_onboarding.get_brand_for_user", new=AsyncMock(return_value=None)):
        resp = client.get(f"{URL}/42")

    assert resp.json() == {"is_onboarded": False, "brand_id": None}


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
