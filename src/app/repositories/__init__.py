"""Repository layer - data access abstraction."""

from src.app.repositories.activity_log import ActivityLogRepository
from src.app.repositories.auth_event import AuthEventRepository
from src.app.repositories.base import BaseRepository
from src.app.repositories.project import ProjectRepository
from src.app.repositories.reset_token import ResetTokenRepository
from src.app.repositories.task import TaskRepository
from src.app.repositories.user import UserRepository

__all__ = [
    "ActivityLogRepository",
    "AuthEventRepository",
    "BaseRepository",
    "ProjectRepository",
    "ResetTokenRepository",
    "TaskRepository",
    "UserRepository",
]
