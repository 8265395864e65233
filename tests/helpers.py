"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.security import create_access_token
from src.app.models import Project, Task, User
from tests.factories import ProjectFactory, ProjectMemberFactory, TaskFactory, UserFactory


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for ``user`` without going through /auth/login."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


async def create_user(session: AsyncSession, **user_kwargs) -> User:
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_project(
    session: AsyncSession,
    team: list[User] | None = None,
    **project_kwargs,
) -> Project:
    """Create a project and put ``team`` on it."""
    project = ProjectFactory.build(**project_kwargs)
    session.add(project)
    await session.flush()

    for member in team or []:
        session.add(ProjectMemberFactory.build(project_id=project.id, user_id=member.id))
    await session.commit()
    return project


async def create_task(session: AsyncSession, project: Project, **task_kwargs) -> Task:
    task = TaskFactory.build(project_id=project.id, **task_kwargs)
    session.add(task)
    await session.commit()
    return task
