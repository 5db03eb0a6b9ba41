"""
Bot Notification Service — Sends Telegram messages from the FastAPI backend.

Failures are logged but never raised: a brand that finished onboarding
stays onboarded even when Telegram is unreachable.
"""

import logging
from html import escape
from typing import Any

import httpx

from api.config import settings

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org"


async def send_message(
    telegram_id: int,
    text: str,
    reply_markup: dict | None = None,
    parse_mode: str = "HTML",
) -> bool:
    """
    Send a Telegram message to a specific user via Bot API.

    Returns:
        True if message was sent successfully, False otherwise.
    """
    token = settings.TELEGRAM_BOT_TOKEN
    if not token:
        logger.error("TELEGRAM_BOT_TOKEN not configured, cannot send notification")
        return False

    payload: dict[str, Any] = {
        "chat_id": telegram_id,
        "text": text,
        "parse_mode": parse_mode,
    }
    if reply_markup:
        payload["reply_markup"] = reply_markup

    try:
        async with httpx.AsyncClient(base_url=TELEGRAM_API, timeout=10.0) as client:
            resp = await client.post(f"/bot{token}/sendMessage", json=payload)
    except httpx.HTTPError as e:
        logger.error("Notification error: telegram_id=%s, error=%s", telegram_id, e)
        return False

    if resp.status_code != 200:
        logger.warning(
            "Notification failed: telegram_id=%s, status=%s, body=%s",
            telegram_id, resp.status_code, resp.text[:200],
        )
        return False

    logger.info("Notification sent: telegram_id=%s, text_preview='%s'", telegram_id, text[:80])
    return True


# ── Notification Templates ─────────────────────────────────

async def notify_onboarding_completed(telegram_id: int, company_name: str) -> bool:
    return await send_message(
        telegram_id,
        f"🎉 <b>{escape(company_name)}</b> is all set up!\n\n"
        "Your brand profile has been created. Our team will reach out "
        "with creator matches for your first campaign.",
    )


async def notify_admin_new_brand(company_name: str, contact_name: str) -> bool:
    if not settings.ADMIN_TELEGRAM_ID:
        return False
    return await send_message(
        settings.ADMIN_TELEGRAM_ID,
        f"🆕 New brand onboarded: <b>{escape(company_name)}</b>\n"
        f"Contact: {escape(contact_name)}",
    )
