"""Database utilities - engine and session."""

from src.app.core.db.engine import dispose_engine, get_engine, sync_database_url
from src.app.core.db.session import get_session

__all__ = [
    "dispose_engine",
    "get_engine",
    "get_session",
    "sync_database_url",
]
