"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.repositories import (
    AuthEventRepository,
    ProjectRepository,
    ResetTokenRepository,
    TaskRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_reset_token_repository(session: DBSession) -> ResetTokenRepository:
    return ResetTokenRepository(session)


def get_auth_event_repository(session: DBSession) -> AuthEventRepository:
    return AuthEventRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
ResetTokenRepo = Annotated[ResetTokenRepository, Depends(get_reset_token_repository)]
AuthEventRepo = Annotated[AuthEventRepository, Depends(get_auth_event_repository)]
