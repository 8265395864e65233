"""Reporting service - per-project summaries recomputed on every call."""

from collections import Counter
from uuid import UUID

from src.app.core.auth_context import AuthContext
from src.app.core.exceptions import NotFoundError
from src.app.core.logging import get_logger
from src.app.models.enums import TaskStatus
from src.app.repositories import ProjectRepository, TaskRepository, UserRepository
from src.app.schemas.report import BudgetUsage, ProjectReport, TaskBuckets, TeamMemberStats

logger = get_logger(__name__)

# Share of the stated budget reported as used; there is no spending ledger
BUDGET_USED_RATIO = 0.5


class ReportService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        user_repo: UserRepository,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.user_repo = user_repo

    async def project_report(self, ctx: AuthContext, project_id: UUID) -> ProjectReport:
        """Build the report for one project from its current tasks and team.

        Only "To Do", "In Progress" and "Completed" are bucketed; tasks in any
        other status are counted in ``total`` alone.
        """
        ctx.require_manager()
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        tasks = await self.task_repo.list_by_project(project.id)
        by_status = Counter(task.status for task in tasks)
        completed_by_user = Counter(
            task.assignee_id
            for task in tasks
            if task.status == TaskStatus.COMPLETED.value and task.assignee_id is not None
        )

        team_ids = await self.project_repo.get_team_ids(project.id)
        members = {user.id: user for user in await self.user_repo.get_many(team_ids)}
        team = [
            TeamMemberStats(
                user_id=user_id,
                name=members[user_id].name,
                email=members[user_id].email,
                tasks_completed=completed_by_user[user_id],
            )
            for user_id in team_ids
            if user_id in members
        ]

        budget = project.budget or 0.0
        logger.debug("Project report computed", project_id=str(project.id), tasks=len(tasks))
        return ProjectReport(
            project_id=project.id,
            name=project.name,
            status=project.status,
            deadline=project.deadline,
            progress=project.progress,
            budget=BudgetUsage(used=budget * BUDGET_USED_RATIO, total=budget),
            tasks=TaskBuckets(
                to_do=by_status[TaskStatus.TO_DO.value],
                in_progress=by_status[TaskStatus.IN_PROGRESS.value],
                completed=by_status[TaskStatus.COMPLETED.value],
                total=len(tasks),
            ),
            team=team,
        )
