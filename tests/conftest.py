"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Environment must be configured before any app import reads settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.app.core import redis as redis_core
from src.app.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """In-memory Redis that behaves like a real server."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis) -> AsyncGenerator[Redis]:
    """Install fakeredis as the shared client returned by get_redis()."""
    redis_core.set_redis(fake_redis)
    yield fake_redis
    redis_core.set_redis(None)


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Make get_redis() return None everywhere (Redis down or not configured)."""

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.app.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.app.core.cache.get_redis", _get_none)
    monkeypatch.setattr("src.app.core.health.get_redis", _get_none)
    yield
