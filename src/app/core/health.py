"""Health and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.app.core.config import get_settings
from src.app.core.db import get_session
from src.app.core.redis import get_redis
from src.app.core.shutdown import request_tracker
from src.app.temporal.client import get_temporal_client

HEALTH_CACHE_TTL = 10  # seconds

_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0


def reset_health_cache() -> None:
    global _health_cache, _health_cache_time
    _health_cache = None
    _health_cache_time = 0


async def _check_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return f"unhealthy: {e!s}"
    return "healthy"


async def _check_temporal() -> str:
    try:
        await get_temporal_client()
    except Exception as e:
        return f"unhealthy: {e!s}"
    return "healthy"


async def _check_redis() -> str:
    redis = await get_redis()
    if redis is None:
        return "not_configured"
    try:
        await redis.ping()  # type: ignore[misc]
    except Exception as e:
        return f"unhealthy: {e!s}"
    return "healthy"


async def collect_health() -> dict[str, Any]:
    """Probe every dependency.

    The database is required. Temporal and Redis only degrade the status,
    since the API serves requests without them.
    """
    result: dict[str, Any] = {
        "status": "healthy",
        "database": await _check_database(),
        "temporal": await _check_temporal(),
        "redis": await _check_redis(),
        "cached": False,
        "timestamp": time.time(),
    }
    if result["database"] != "healthy":
        result["status"] = "unhealthy"
    elif result["temporal"] != "healthy" or result["redis"].startswith("unhealthy"):
        result["status"] = "degraded"
    return result


def setup_health_endpoint(app: FastAPI) -> None:
    """Register /health (dependency check) and /health/live (process liveness)."""

    @app.get("/health/live", include_in_schema=False)
    async def live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health")
    async def health() -> JSONResponse:
        global _health_cache, _health_cache_time

        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                    "message": "Server is shutting down",
                },
                status_code=503,
            )

        now = time.time()
        if _health_cache and (now - _health_cache_time) < HEALTH_CACHE_TTL:
            body = {
                **_health_cache,
                "cached": True,
                "cache_age_seconds": round(now - _health_cache_time, 1),
            }
        else:
            body = await collect_health()
            _health_cache = body
            _health_cache_time = now

        status_code = 200 if body["status"] == "healthy" else 503
        return JSONResponse(content=body, status_code=status_code)


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics, behind X-Metrics-Key when one is configured."""
    settings = get_settings()
    instrumentator = Instrumentator(
        excluded_handlers=["/health", "/health/live", "/metrics"]
    ).instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics")
        return

    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        expected = settings.metrics_api_key
        if api_key is None or expected is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
