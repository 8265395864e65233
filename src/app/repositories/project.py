"""Repository for Project and ProjectMember entities."""

from uuid import UUID

from sqlalchemy import delete, func, update
from sqlmodel import select

from src.app.models import Project, ProjectMember
from src.app.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Projects plus their team membership rows."""

    model = Project

    async def list_all(self) -> list[Project]:
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_member(self, user_id: UUID) -> list[Project]:
        """Projects whose team includes ``user_id``."""
        result = await self.session.execute(
            select(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)  # type: ignore[arg-type]
            .where(ProjectMember.user_id == user_id)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Project))
        return int(result.scalar_one())

    async def get_team_ids(self, project_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def get_team_map(self, project_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Map each project id to its team, for list views."""
        teams: dict[UUID, list[UUID]] = {pid: [] for pid in project_ids}
        if not project_ids:
            return teams
        result = await self.session.execute(
            select(ProjectMember.project_id, ProjectMember.user_id)
            .where(ProjectMember.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .order_by(ProjectMember.created_at)  # type: ignore[arg-type]
        )
        for project_id, user_id in result.all():
            teams[project_id].append(user_id)
        return teams

    async def get_project_ids_for_user(self, user_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        )
        return list(result.scalars().all())

    def add_members(self, project_id: UUID, user_ids: list[UUID]) -> None:
        for user_id in user_ids:
            self.session.add(ProjectMember(project_id=project_id, user_id=user_id))

    async def remove_members(self, project_id: UUID, user_ids: list[UUID]) -> None:
        if not user_ids:
            return
        await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,  # type: ignore[arg-type]
                ProjectMember.user_id.in_(user_ids),  # type: ignore[attr-defined]
            )
        )

    async def delete_members_for_project(self, project_id: UUID) -> None:
        await self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project_id)  # type: ignore[arg-type]
        )

    async def delete_memberships_for_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(ProjectMember).where(ProjectMember.user_id == user_id)  # type: ignore[arg-type]
        )

    async def clear_creator(self, user_id: UUID) -> None:
        """Forget ``user_id`` as the creator of any project."""
        await self.session.execute(
            update(Project)
            .where(Project.created_by_id == user_id)  # type: ignore[arg-type]
            .values(created_by_id=None)
        )
