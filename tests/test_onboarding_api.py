"""Tests for the bot's onboarding API client (mocked HTTP transport)."""

from unittest.mock import patch

import httpx
import pytest

from bot.services.onboarding_api import (
    SubmissionError,
    fetch_onboarding_status,
    submit_onboarding,
)


def _mock_client(handler):
    def factory(timeout: float = 10.0):
        return httpx.AsyncClient(
            base_url="http://api.test", transport=httpx.MockTransport(handler),
        )
    return factory


@pytest.mark.asyncio
async def test_submit_posts_form_with_identity_header():
    seen = {}

    def handler(request: httpx.Request):
        seen["path"] = request.url.path
        seen["header"] = request.headers.get("X-Telegram-Id")
        seen["body"] = request.read()
        return httpx.Response(201, json={"success": True, "brand_id": "b-1"})

    with patch("bot.services.onboarding_api._client", _mock_client(handler)):
        result = await submit_onboarding(42, {"company_name": "Acme"})

    assert result["brand_id"] == "b-1"
    assert seen["path"] == "/api/brand/onboarding"
    assert seen["header"] == "42"
    assert b"Acme" in seen["body"]


@pytest.mark.asyncio
@pytest.mark.parametrize("response, message", [
    (httpx.Response(400, json={"error": "Missing required field: website"}),
     "Missing required field: website"),
    (httpx.Response(409, json={"detail": "conflict"}), "Onboarding failed"),
    (httpx.Response(502, text="<html>Bad gateway</html>"), "Server error (502): Bad Gateway"),
])
async def test_submit_error_messages(response, message):
    with patch("bot.services.onboarding_api._client", _mock_client(lambda r: response)):
        with pytest.raises(SubmissionError) as exc:
            await submit_onboarding(42, {})
    assert str(exc.value) == message


@pytest.mark.asyncio
async def test_submit_unreachable_server():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with patch("bot.services.onboarding_api._client", _mock_client(handler)):
        with pytest.raises(SubmissionError) as exc:
            await submit_onboarding(42, {})
    assert "Could not reach the onboarding server" in str(exc.value)


@pytest.mark.asyncio
async def test_fetch_status_returns_none_on_error():
    with patch(
        "bot.services.onboarding_api._client",
        _mock_client(lambda r: httpx.Response(404, json={"error": "User not found"})),
    ):
        assert await fetch_onboarding_status(42) is None

    with patch(
        "bot.services.onboarding_api._client",
        _mock_client(lambda r: httpx.Response(200, json={"is_onboarded": True, "brand_id": "b-1"})),
    ):
        assert (await fetch_onboarding_status(42))["is_onboarded"] is True
