"""Process-wide async engine for the EasyPM database."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.app.core.config import get_settings

_engine: AsyncEngine | None = None


def _ssl_context(mode: str) -> ssl.SSLContext | None:
    """Build the asyncpg SSL context for a libpq-style ``sslmode``."""
    if mode == "disable":
        return None
    context = ssl.create_default_context()
    if mode.startswith("verify"):
        context.check_hostname = mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        # prefer / require: encrypt, but accept any server certificate
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _connect_args(url: str, ssl_mode: str) -> dict[str, Any]:
    if not url.startswith("postgresql"):
        return {}
    context = _ssl_context(ssl_mode)
    return {"ssl": context} if context is not None else {}


def get_engine() -> AsyncEngine:
    """Return the shared engine, creating it on first use."""
    global _engine
    if _engine is not None:
        return _engine

    settings = get_settings()
    _engine = create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        connect_args=_connect_args(settings.database_url, settings.database_ssl_mode),
    )
    return _engine


async def dispose_engine() -> None:
    global _engine
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None


def sync_database_url() -> str:
    """Database URL with the async driver swapped for psycopg2, for Alembic."""
    return get_settings().database_url.replace("+asyncpg", "")
