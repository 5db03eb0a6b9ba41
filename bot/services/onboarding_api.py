"""
Onboarding API client — bot → FastAPI backend calls.

The final submission raises SubmissionError with a user-facing message;
lookup helpers return None on any failure.
"""

import logging
from typing import Any

import httpx

from bot.config import settings

logger = logging.getLogger(__name__)
API = settings.API_BASE_URL

ONBOARDING_ENDPOINT = "/api/brand/onboarding"


class SubmissionError(Exception):
    """The onboarding submission was rejected or could not be delivered."""


def _client(timeout: float = 10.0) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=API, timeout=timeout)


async def _api_call(method: str, endpoint: str, **kwargs) -> dict | list | None:
    """Helper to call FastAPI backend."""
    try:
        async with _client() as client:
            if method == "GET":
                resp = await client.get(endpoint, params=kwargs.get("params"))
            elif method == "POST":
                resp = await client.post(endpoint, json=kwargs.get("json"))
            else:
                return None
            if resp.status_code in (200, 201):
                return resp.json()
            logger.warning("API error: %s %s → %s", method, endpoint, resp.status_code)
            return None
    except Exception as e:
        logger.error("API call error: %s", e)
        return None


async def register_user(telegram_id: int, full_name: str, username: str | None = None) -> dict | None:
    """Create the user record (or fetch the existing one)."""
    return await _api_call("POST", "/api/users/", json={
        "telegram_id": telegram_id,
        "full_name": full_name,
        "telegram_username": username,
    })


async def fetch_onboarding_status(telegram_id: int) -> dict | None:
    """{"is_onboarded": bool, "brand_id": str | None}, or None when unreachable."""
    return await _api_call("GET", f"{ONBOARDING_ENDPOINT}/{telegram_id}")


def _error_message(resp: httpx.Response) -> str:
    """Message from the body's `error` field, else a generic status line."""
    try:
        body = resp.json()
    except ValueError:
        logger.error("Server error response: %s", resp.text[:200])
        return f"Server error ({resp.status_code}): {resp.reason_phrase}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return "Onboarding failed"


async def submit_onboarding(telegram_id: int, form_data: dict[str, Any]) -> dict:
    """POST the complete FormState snapshot. Raises SubmissionError on failure."""
    try:
        async with _client(timeout=settings.SUBMISSION_TIMEOUT_SEC) as client:
            resp = await client.post(
                ONBOARDING_ENDPOINT,
                json=form_data,
                headers={"X-Telegram-Id": str(telegram_id)},
            )
    except httpx.HTTPError as e:
        logger.error("Onboarding submission error: telegram_id=%s, error=%s", telegram_id, e)
        raise SubmissionError("Could not reach the onboarding server. Please try again.") from e

    if resp.is_success:
        try:
            return resp.json()
        except ValueError:
            return {}

    message = _error_message(resp)
    logger.warning(
        "Onboarding submission rejected: telegram_id=%s, status=%s, error=%s",
        telegram_id, resp.status_code, message,
    )
    raise SubmissionError(message)
