"""Project management service."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.auth_context import AuthContext
from src.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from src.app.core.logging import get_logger
from src.app.models import Project
from src.app.models.base import utc_now
from src.app.repositories import ProjectRepository, TaskRepository, UserRepository
from src.app.schemas.activity_log import (
    ActivityDetails,
    CreatedDetails,
    DeletedDetails,
    ProgressUpdatedDetails,
    StatusChangedDetails,
    TeamChangedDetails,
    UpdatedDetails,
)
from src.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.app.services.activity_log_service import ActivityLogService, diff_fields

logger = get_logger(__name__)


class ProjectService:
    """Project CRUD with team membership and activity logging."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        activity_log: ActivityLogService,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.session = session
        self.activity_log = activity_log

    async def get_visible_project(self, ctx: AuthContext, project_id: UUID) -> Project:
        """Load a project the caller may read, or raise NotFound / Forbidden."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if not ctx.is_manager and not ctx.is_member(project_id):
            raise ForbiddenError("You are not a member of this project")
        return project

    async def list_projects(self, ctx: AuthContext) -> list[ProjectRead]:
        if ctx.is_manager:
            projects = await self.project_repo.list_all()
        else:
            projects = await self.project_repo.list_for_member(ctx.user_id)
        teams = await self.project_repo.get_team_map([p.id for p in projects])
        return [ProjectRead.from_project(p, teams[p.id]) for p in projects]

    async def get_project(self, ctx: AuthContext, project_id: UUID) -> ProjectRead:
        project = await self.get_visible_project(ctx, project_id)
        team = await self.project_repo.get_team_ids(project.id)
        return ProjectRead.from_project(project, team)

    async def create_project(self, ctx: AuthContext, data: ProjectCreate) -> ProjectRead:
        ctx.require_manager()
        team = await self._validate_team(data.team)

        values = data.model_dump(exclude={"team", "phases"})
        try:
            project = Project(**values, phases=_phases_json(data), created_by_id=ctx.user_id)
            self.project_repo.add(project)
            await self.session.flush()
            self.project_repo.add_members(project.id, team)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id))
        await self.activity_log.append(
            project.id,
            ctx.user_id,
            CreatedDetails(name=project.name, description=project.description),
        )
        return ProjectRead.from_project(project, team)

    async def update_project(
        self, ctx: AuthContext, project_id: UUID, data: ProjectUpdate
    ) -> ProjectRead:
        """Apply a partial update and log one entry per changed category.

        Status, progress and team each get their own entry; every other field
        that actually changed is summarized in a single "Updated" entry.
        """
        ctx.require_manager()
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        updates: dict[str, Any] = data.model_dump(exclude_unset=True, exclude={"team"})
        if "phases" in updates:
            updates["phases"] = _phases_json(data)

        start_date = updates.get("start_date", project.start_date)
        deadline = updates.get("deadline", project.deadline)
        if deadline is not None and deadline < start_date:
            raise InputValidationError("Deadline cannot be before the start date")

        old_team = await self.project_repo.get_team_ids(project.id)
        added: list[UUID] = []
        removed: list[UUID] = []
        if "team" in data.model_fields_set and data.team is not None:
            new_team = await self._validate_team(data.team)
            added = [uid for uid in new_team if uid not in old_team]
            removed = [uid for uid in old_team if uid not in new_team]

        changes = diff_fields(project, updates)
        entries: list[ActivityDetails] = []
        status_change = changes.pop("status", None)
        if status_change is not None:
            entries.append(StatusChangedDetails(from_=status_change.from_, to=status_change.to))
        progress_change = changes.pop("progress", None)
        if progress_change is not None:
            entries.append(
                ProgressUpdatedDetails(from_=progress_change.from_, to=progress_change.to)
            )
        if added or removed:
            entries.append(TeamChangedDetails(added=added, removed=removed))
        if changes:
            entries.append(UpdatedDetails(changes=changes))

        if not entries:
            return ProjectRead.from_project(project, old_team)

        try:
            for field, value in updates.items():
                setattr(project, field, value)
            project.updated_at = utc_now()
            await self.project_repo.remove_members(project.id, removed)
            self.project_repo.add_members(project.id, added)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Project updated",
            project_id=str(project.id),
            actions=[e.action.value for e in entries],
        )
        await self.activity_log.append_all(project.id, ctx.user_id, entries)
        team = [uid for uid in old_team if uid not in removed] + added
        return ProjectRead.from_project(project, team)

    async def delete_project(self, ctx: AuthContext, project_id: UUID) -> None:
        """Delete a project with its tasks and memberships in one transaction."""
        ctx.require_admin()
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        name = project.name
        try:
            task_count = await self.task_repo.delete_for_project(project.id)
            await self.project_repo.delete_members_for_project(project.id)
            await self.project_repo.delete(project)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project deleted", project_id=str(project_id), task_count=task_count)
        await self.activity_log.append(
            project_id, ctx.user_id, DeletedDetails(name=name, id=project_id)
        )

    async def _validate_team(self, user_ids: list[UUID]) -> list[UUID]:
        """De-duplicate team ids (keeping order) and check every user exists."""
        team = list(dict.fromkeys(user_ids))
        found = {user.id for user in await self.user_repo.get_many(team)}
        missing = [str(uid) for uid in team if uid not in found]
        if missing:
            raise InputValidationError(f"Unknown team member id(s): {', '.join(missing)}")
        return team


def _phases_json(data: ProjectCreate | ProjectUpdate) -> list[dict[str, Any]] | None:
    if data.phases is None:
        return None
    return [phase.model_dump(mode="json") for phase in data.phases]
