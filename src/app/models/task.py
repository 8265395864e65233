"""Task model with its comments and attachments."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_status", "project_id", "status"),
        Index("ix_tasks_assignee_due", "assignee_id", "due_date"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=100)
    description: str = Field(default="", max_length=1000)
    project_id: UUID = Field(foreign_key="projects.id")
    status: str = Field(default=TaskStatus.BACKLOG.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=10)
    assignee_id: UUID | None = Field(default=None, foreign_key="users.id")
    due_date: date | None = Field(default=None)
    story_points: int | None = Field(default=None)
    phase: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TaskComment(SQLModel, table=True):
    """Comment on a task. ``author_id`` is kept when the author is deleted."""

    __tablename__ = "task_comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    author_id: UUID | None = Field(default=None)
    text: str = Field(max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)


class TaskAttachment(SQLModel, table=True):
    """Metadata for a file stored under the upload directory."""

    __tablename__ = "task_attachments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    name: str = Field(max_length=255)
    url: str = Field(max_length=500)
    mime_type: str = Field(max_length=100)
    uploaded_by_id: UUID | None = Field(default=None)
    uploaded_at: datetime = Field(default_factory=utc_now)
