"""Tests for the Redis-backed form persistence guard (mocked Redis)."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from bot.services.persistence import FormPersistenceGuard, ONBOARDING_BACKUP_KEY


@pytest.mark.asyncio
async def test_save_then_load_round_trip(fake_redis):
    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = fake_redis

        guard = FormPersistenceGuard(42)
        assert await guard.load() is None
        assert guard.initialized

        assert await guard.save({"company_name": "Acme"}, 3)
        snapshot = await FormPersistenceGuard(42).load()

    assert snapshot.form_data == {"company_name": "Acme"}
    assert snapshot.current_step == 3
    assert snapshot.timestamp > 0


@pytest.mark.asyncio
async def test_snapshot_key_and_ttl(fake_redis):
    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = fake_redis
        guard = FormPersistenceGuard(42, initialized=True)
        await guard.save({}, 0)

    key = f"{ONBOARDING_BACKUP_KEY}:42"
    assert set(json.loads(fake_redis.store[key])) == {"form_data", "current_step", "timestamp"}
    assert fake_redis.ttl[key] == 7 * 24 * 60 * 60


@pytest.mark.asyncio
async def test_no_write_before_initialized(fake_redis):
    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = fake_redis
        guard = FormPersistenceGuard(42)
        assert await guard.save({"company_name": "Acme"}, 1) is False

    assert fake_redis.store == {}


@pytest.mark.asyncio
async def test_completed_session_removes_and_ignores_backup(fake_redis):
    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = fake_redis
        guard = FormPersistenceGuard(42, initialized=True)
        await guard.save({"company_name": "Acme"}, 5)

        assert await guard.mark_completed()
        assert fake_redis.store == {}

        assert await guard.save({"company_name": "Acme"}, 6) is False
        assert await guard.load() is None

    assert fake_redis.store == {}


@pytest.mark.asyncio
async def test_corrupt_snapshot_loads_as_nothing(fake_redis):
    fake_redis.store[f"{ONBOARDING_BACKUP_KEY}:42"] = "{not json"
    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = fake_redis
        guard = FormPersistenceGuard(42)
        assert await guard.load() is None
        assert guard.initialized


@pytest.mark.asyncio
async def test_storage_failures_are_reported_not_raised():
    conn = AsyncMock()
    conn.get.side_effect = ConnectionError("redis down")
    conn.set.side_effect = ConnectionError("redis down")
    conn.delete.side_effect = ConnectionError("redis down")

    with patch("bot.services.persistence.get_redis") as mock_get_redis:
        mock_get_redis.return_value = conn
        guard = FormPersistenceGuard(42)
        assert await guard.load() is None
        assert await guard.save({}, 0) is False
        assert await guard.clear() is False
