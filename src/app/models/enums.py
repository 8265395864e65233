"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Global user role, highest privilege first."""

    ADMINISTRATOR = "Administrator"
    PROJECT_MANAGER = "Project Manager"
    COLLABORATOR = "Collaborator"


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


class Methodology(str, Enum):
    NONE = "None"
    AGILE = "Agile"
    KANBAN = "Kanban"
    WATERFALL = "Waterfall"
    LEAN = "Lean"


class TaskStatus(str, Enum):
    """Task status vocabulary spanning board columns and Waterfall phases."""

    BACKLOG = "Backlog"
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"
    REQUIREMENTS = "Requirements"
    DESIGN = "Design"
    IMPLEMENTATION = "Implementation"
    DEPLOYMENT = "Deployment"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ActivityAction(str, Enum):
    """Closed set of actions an activity log entry can record."""

    CREATED = "Created"
    UPDATED = "Updated"
    DELETED = "Deleted"
    STATUS_CHANGED = "Status Changed"
    TEAM_CHANGED = "Team Changed"
    PROGRESS_UPDATED = "Progress Updated"
    TASK_CREATED = "Task Created"
    TASK_UPDATED = "Task Updated"
    TASK_STATUS_CHANGED = "Task Status Changed"
    TASK_REASSIGNED = "Task Reassigned"
    TASK_DELETED = "Task Deleted"
    COMMENT_ADDED = "Comment Added"


class AuthEventType(str, Enum):
    LOGIN_SUCCESS = "Login Success"
    LOGIN_FAILURE = "Login Failure"
    LOGOUT = "Logout"
    PASSWORD_RESET = "Password Reset"


class TokenPurpose(str, Enum):
    """What a one-time token in reset_tokens may be used for."""

    PASSWORD_RESET = "password_reset"
    INVITE = "invite"
