"""Tests for rate limiter configuration (src/app/core/rate_limit.py)."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from src.app.core.rate_limit import create_limiter, get_rate_limit_key

pytestmark = pytest.mark.unit


def _request(host: str | None, headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/auth/login",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": (host, 1234) if host else None,
    }
    return Request(scope)


class TestRateLimitKey:
    def test_uses_client_ip(self):
        assert get_rate_limit_key(_request("10.0.0.7")) == "10.0.0.7"

    def test_ignores_forwarded_header(self):
        request = _request("10.0.0.7", {"X-Forwarded-For": "1.2.3.4"})
        assert get_rate_limit_key(request) == "10.0.0.7"


class TestCreateLimiter:
    def test_disabled_when_testing(self):
        assert create_limiter().enabled is False

    def test_enabled_outside_testing(self):
        settings = MagicMock(app_env="development", redis_url=None)
        with patch("src.app.core.rate_limit.get_settings", return_value=settings):
            assert create_limiter().enabled is True
