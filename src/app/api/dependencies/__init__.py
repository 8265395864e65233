"""FastAPI dependency injection definitions.

Re-exports all dependencies so routes can import from one place.
"""

# Auth
from src.app.api.dependencies.auth import (
    Auth,
    ClientIP,
    CurrentUser,
    TokenClaims,
    get_auth_context,
    get_client_ip,
    get_current_user,
    get_token_claims,
)

# Database
from src.app.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.app.api.dependencies.repositories import (
    AuthEventRepo,
    ProjectRepo,
    ResetTokenRepo,
    TaskRepo,
    UserRepo,
)

# Services
from src.app.api.dependencies.services import (
    ActivityLogServiceDep,
    AuthServiceDep,
    DashboardServiceDep,
    ProjectServiceDep,
    ReportServiceDep,
    TaskServiceDep,
    UserServiceDep,
    get_activity_log_service,
    get_auth_service,
    get_dashboard_service,
    get_project_service,
    get_report_service,
    get_task_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "Auth",
    "ClientIP",
    "CurrentUser",
    "TokenClaims",
    "get_auth_context",
    "get_client_ip",
    "get_current_user",
    "get_token_claims",
    # Repositories
    "AuthEventRepo",
    "ProjectRepo",
    "ResetTokenRepo",
    "TaskRepo",
    "UserRepo",
    # Services
    "ActivityLogServiceDep",
    "AuthServiceDep",
    "DashboardServiceDep",
    "ProjectServiceDep",
    "ReportServiceDep",
    "TaskServiceDep",
    "UserServiceDep",
    "get_activity_log_service",
    "get_auth_service",
    "get_dashboard_service",
    "get_project_service",
    "get_report_service",
    "get_task_service",
    "get_user_service",
]
