"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh SQLite database file with the full schema. The app's
engine singleton is pointed at it, so request sessions and the isolated
activity log session both use the same database.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.app.models  # noqa: F401
from src.app.core.config import get_settings
from src.app.core.db import engine as engine_module
from src.app.core.health import reset_health_cache
from src.app.main import create_app
from src.app.models import User
from tests.helpers import create_user


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database and install it as the app engine."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'easypm.db'}",
        poolclass=NullPool,
    )
    event.listen(test_engine.sync_engine, "connect", _set_sqlite_pragmas)

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    engine_module._engine = test_engine
    yield test_engine
    engine_module._engine = None
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting data directly.

    Changes must be committed to be visible to the app.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Store attachments under the test's temporary directory."""
    target = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "upload_dir", str(target))
    return target


@pytest.fixture
def email_mocks() -> Generator[dict[str, MagicMock]]:
    """Capture outgoing e-mails instead of sending them."""
    with (
        patch("src.app.services.user_service.send_invite_email") as invite,
        patch("src.app.services.auth_service.send_password_reset_email") as reset,
    ):
        yield {"invite": invite, "password_reset": reset}


@pytest.fixture
async def client(
    engine: AsyncEngine, email_mocks: dict[str, MagicMock]
) -> AsyncGenerator[AsyncClient]:
    """HTTP client against a freshly created app."""
    reset_health_cache()
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="Administrator", name="Alice Admin")


@pytest.fixture
async def manager(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="Project Manager", name="Paul Manager")


@pytest.fixture
async def collaborator(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="Collaborator", name="Carla Collaborator")


@pytest.fixture
async def outsider(db_session: AsyncSession) -> User:
    """A Collaborator who is on no team."""
    return await create_user(db_session, role="Collaborator", name="Oscar Outsider")
