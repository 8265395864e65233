"""Rate limiting configuration with optional Redis backend.

Uses Redis for distributed rate limiting when REDIS_URL is configured.
Falls back to in-memory storage (per-process) when Redis is unavailable.
Applied as endpoint decorators on the unauthenticated auth routes.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include user-controlled headers in the key: rotating them would
    create unlimited new buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create rate limiter with appropriate storage backend.

    Uses Redis if configured, otherwise falls back to in-memory storage.
    Disabled in testing environment.
    """
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    # slowapi uses sync Redis internally, so the plain redis:// URL is passed through
    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)
    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; reconfiguration requires a restart.
limiter = create_limiter()
