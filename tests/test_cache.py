"""Tests for the access token blacklist."""

import pytest
from redis.asyncio import Redis

from src.app.core.cache import PREFIX_TOKEN_BLACKLIST, blacklist_token, is_token_blacklisted

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class TestBlacklistWithRedis:
    async def test_blacklisted_token_is_reported(self, mock_redis: Redis) -> None:
        assert await blacklist_token("abc123", ttl=60) is True
        assert await is_token_blacklisted("abc123") is True

    async def test_unknown_token_is_not_blacklisted(self, mock_redis: Redis) -> None:
        assert await is_token_blacklisted("never-seen") is False

    async def test_entry_expires_with_token(self, mock_redis: Redis) -> None:
        await blacklist_token("abc123", ttl=60)
        ttl = await mock_redis.ttl(f"{PREFIX_TOKEN_BLACKLIST}:abc123")
        assert 0 < ttl <= 60

    async def test_expired_token_is_not_stored(self, mock_redis: Redis) -> None:
        assert await blacklist_token("abc123", ttl=0) is False
        assert await mock_redis.keys("*") == []


class TestBlacklistWithoutRedis:
    async def test_blacklist_reports_failure(self, mock_redis_unavailable: None) -> None:
        assert await blacklist_token("abc123", ttl=60) is False

    async def test_lookup_is_unknown(self, mock_redis_unavailable: None) -> None:
        assert await is_token_blacklisted("abc123") is None
