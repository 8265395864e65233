from src.app.schemas.activity_log import ActivityDetails, ActivityLogRead
from src.app.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ResetPasswordRequest,
)
from src.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.app.schemas.report import ProjectReport
from src.app.schemas.task import TaskCreate, TaskRead, TaskSummary, TaskUpdate
from src.app.schemas.user import UserBrief, UserInvite, UserRead, UserUpdate

__all__ = [
    # Activity log
    "ActivityDetails",
    "ActivityLogRead",
    # Auth
    "ChangePasswordRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ResetPasswordRequest",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # Report
    "ProjectReport",
    # Task
    "TaskCreate",
    "TaskRead",
    "TaskSummary",
    "TaskUpdate",
    # User
    "UserBrief",
    "UserInvite",
    "UserRead",
    "UserUpdate",
]
