"""Model exports.

Import from here: `from src.app.models import User, Project`
"""

from src.app.models.activity_log import ActivityLog
from src.app.models.auth import AuthEvent, ResetToken
from src.app.models.enums import (
    ActivityAction,
    AuthEventType,
    Methodology,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    TokenPurpose,
    UserRole,
)
from src.app.models.project import Project, ProjectMember
from src.app.models.task import Task, TaskAttachment, TaskComment
from src.app.models.user import User

__all__ = [
    # Enums
    "ActivityAction",
    "AuthEventType",
    "Methodology",
    "ProjectStatus",
    "TaskPriority",
    "TaskStatus",
    "TokenPurpose",
    "UserRole",
    # Tables
    "ActivityLog",
    "AuthEvent",
    "Project",
    "ProjectMember",
    "ResetToken",
    "Task",
    "TaskAttachment",
    "TaskComment",
    "User",
]
