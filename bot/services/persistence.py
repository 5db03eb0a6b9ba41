"""
Form Persistence Guard — best-effort Redis mirror of an onboarding session.

Guarantees:
  - One snapshot per Telegram user, overwritten on every save
  - Writes are ignored until the guard has loaded (initialized) and
    after the session is marked complete
  - Snapshots expire after ONBOARDING_BACKUP_TTL_SEC (7 days)
  - Storage failures are logged and reported via return values, never raised
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

import redis.asyncio as aioredis

from bot.config import settings

logger = logging.getLogger(__name__)

ONBOARDING_BACKUP_KEY = "stride_onboarding_backup"

_redis: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Singleton Redis connection."""
    global _redis
    if _redis is None:
        _redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis


@dataclass
class PersistedProgress:
    form_data: dict[str, Any]
    current_step: int
    timestamp: float


class FormPersistenceGuard:
    """Mirrors one user's FormState to Redis for reload recovery."""

    def __init__(self, telegram_id: int, initialized: bool = False, completed: bool = False):
        self.telegram_id = telegram_id
        self.initialized = initialized
        self.completed = completed

    @property
    def key(self) -> str:
        return f"{ONBOARDING_BACKUP_KEY}:{self.telegram_id}"

    async def load(self) -> PersistedProgress | None:
        """Return the stored snapshot unless the session is already complete."""
        try:
            if self.completed:
                return None
            r = await get_redis()
            raw = await r.get(self.key)
            if not raw:
                return None
            parsed = json.loads(raw)
            return PersistedProgress(
                form_data=dict(parsed["form_data"]),
                current_step=int(parsed.get("current_step", 0)),
                timestamp=float(parsed.get("timestamp", 0)),
            )
        except Exception as e:
            logger.warning(
                "Failed to load onboarding backup: telegram_id=%s, error=%s",
                self.telegram_id, e,
            )
            return None
        finally:
            self.initialized = True

    async def save(self, form_data: dict[str, Any], current_step: int) -> bool:
        """Overwrite the snapshot. False when skipped or on storage failure."""
        if not self.initialized or self.completed:
            return False
        payload = json.dumps({
            "form_data": form_data,
            "current_step": current_step,
            "timestamp": time.time(),
        })
        try:
            r = await get_redis()
            await r.set(self.key, payload, ex=settings.ONBOARDING_BACKUP_TTL_SEC)
            return True
        except Exception as e:
            logger.warning(
                "Failed to save onboarding backup: telegram_id=%s, error=%s",
                self.telegram_id, e,
            )
            return False

    async def clear(self) -> bool:
        try:
            r = await get_redis()
            await r.delete(self.key)
            return True
        except Exception as e:
            logger.warning(
                "Failed to clear onboarding backup: telegram_id=%s, error=%s",
                self.telegram_id, e,
            )
            return False

    async def mark_completed(self) -> bool:
        """Stop mirroring and erase the snapshot."""
        self.completed = True
        return await self.clear()
