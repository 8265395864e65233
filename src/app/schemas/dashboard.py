from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_projects: int
    tasks_completed: int
    overdue_tasks: int
    active_team_members: int


class TaskNotification(BaseModel):
    """Recently updated task assigned to the user."""

    task_id: UUID
    project_id: UUID
    text: str
    updated_at: datetime
