"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.api.dependencies.db import DBSession
from src.app.api.dependencies.repositories import (
    AuthEventRepo,
    ProjectRepo,
    ResetTokenRepo,
    TaskRepo,
    UserRepo,
)
from src.app.core.db.engine import get_engine
from src.app.repositories import ActivityLogRepository, ProjectRepository
from src.app.services import (
    ActivityLogService,
    AuthService,
    DashboardService,
    ProjectService,
    ReportService,
    TaskService,
    UserService,
)


async def get_activity_log_service() -> AsyncGenerator[ActivityLogService]:
    """Get activity log service with its own isolated session.

    Appends commit independently of the mutation that triggered them, so a
    failed append can be rolled back without touching the caller's transaction.
    """
    engine = get_engine()
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield ActivityLogService(
            ActivityLogRepository(session), ProjectRepository(session), session
        )


ActivityLogServiceDep = Annotated[ActivityLogService, Depends(get_activity_log_service)]


def get_project_service(
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    user_repo: UserRepo,
    session: DBSession,
    activity_log: ActivityLogServiceDep,
) -> ProjectService:
    return ProjectService(project_repo, task_repo, user_repo, session, activity_log)


def get_task_service(
    task_repo: TaskRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    session: DBSession,
    activity_log: ActivityLogServiceDep,
) -> TaskService:
    return TaskService(task_repo, project_repo, user_repo, session, activity_log)


def get_user_service(
    user_repo: UserRepo,
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    token_repo: ResetTokenRepo,
    session: DBSession,
) -> UserService:
    return UserService(user_repo, project_repo, task_repo, token_repo, session)


def get_auth_service(
    user_repo: UserRepo,
    token_repo: ResetTokenRepo,
    event_repo: AuthEventRepo,
    session: DBSession,
) -> AuthService:
    return AuthService(user_repo, token_repo, event_repo, session)


def get_report_service(
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    user_repo: UserRepo,
) -> ReportService:
    return ReportService(project_repo, task_repo, user_repo)


def get_dashboard_service(
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    user_repo: UserRepo,
) -> DashboardService:
    return DashboardService(project_repo, task_repo, user_repo)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
