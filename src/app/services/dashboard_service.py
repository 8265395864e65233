"""Dashboard service - headline counts and per-user views."""

from datetime import date
from uuid import UUID

from src.app.core.auth_context import AuthContext
from src.app.core.exceptions import ForbiddenError
from src.app.models.enums import TaskStatus, UserRole
from src.app.repositories import ProjectRepository, TaskRepository, UserRepository
from src.app.schemas.dashboard import DashboardStats, TaskNotification
from src.app.schemas.project import ProjectRead
from src.app.schemas.task import TaskSummary

NOTIFICATION_LIMIT = 5


class DashboardService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        user_repo: UserRepository,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.user_repo = user_repo

    async def stats(self, ctx: AuthContext) -> DashboardStats:
        ctx.require_manager()
        return DashboardStats(
            total_projects=await self.project_repo.count_all(),
            tasks_completed=await self.task_repo.count_by_status(TaskStatus.COMPLETED),
            overdue_tasks=await self.task_repo.count_overdue(date.today()),
            active_team_members=await self.user_repo.count_by_roles(
                [UserRole.COLLABORATOR, UserRole.PROJECT_MANAGER]
            ),
        )

    async def user_tasks(self, ctx: AuthContext, user_id: UUID) -> list[TaskSummary]:
        _require_self_or_manager(ctx, user_id)
        tasks = await self.task_repo.list_by_assignee(user_id)
        return [TaskSummary.model_validate(t) for t in tasks]

    async def user_projects(self, ctx: AuthContext, user_id: UUID) -> list[ProjectRead]:
        _require_self_or_manager(ctx, user_id)
        projects = await self.project_repo.list_for_member(user_id)
        teams = await self.project_repo.get_team_map([p.id for p in projects])
        return [ProjectRead.from_project(p, teams[p.id]) for p in projects]

    async def notifications(self, ctx: AuthContext, user_id: UUID) -> list[TaskNotification]:
        """The user's most recently updated assigned tasks."""
        _require_self_or_manager(ctx, user_id)
        tasks = await self.task_repo.list_by_assignee(user_id, limit=NOTIFICATION_LIMIT)
        projects = {
            p.id: p.name
            for p in await self.project_repo.get_many(list({t.project_id for t in tasks}))
        }
        return [
            TaskNotification(
                task_id=task.id,
                project_id=task.project_id,
                text=f'Task "{task.title}" in project "{projects.get(task.project_id, "")}" '
                "was updated",
                updated_at=task.updated_at,
            )
            for task in tasks
        ]


def _require_self_or_manager(ctx: AuthContext, user_id: UUID) -> None:
    if user_id != ctx.user_id and not ctx.is_manager:
        raise ForbiddenError("Access denied")
