"""Project report returned by the reporting endpoint."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from src.app.models.enums import ProjectStatus


class BudgetUsage(BaseModel):
    used: float
    total: float


class TaskBuckets(BaseModel):
    """Counts for the three board columns.

    Tasks in any other status count only towards ``total``.
    """

    to_do: int
    in_progress: int
    completed: int
    total: int


class TeamMemberStats(BaseModel):
    user_id: UUID
    name: str
    email: str
    tasks_completed: int


class ProjectReport(BaseModel):
    project_id: UUID
    name: str
    status: ProjectStatus
    deadline: date | None
    progress: int
    budget: BudgetUsage
    tasks: TaskBuckets
    team: list[TeamMemberStats]
