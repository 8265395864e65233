"""Task schemas for API request/response."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.app.models.enums import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: UUID | None = None
    due_date: date | None = None
    story_points: int | None = Field(default=None, ge=0)
    phase: str | None = Field(default=None, max_length=100)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty or whitespace only")
        return v


class TaskUpdate(BaseModel):
    """Partial task update. ``assignee_id: null`` unassigns the task."""

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: UUID | None = None
    due_date: date | None = None
    story_points: int | None = Field(default=None, ge=0)
    phase: str | None = Field(default=None, max_length=100)

    @field_validator("title", "description", "status", "priority")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty or whitespace only")
        return v


class CommentCreate(BaseModel):
    text: str = Field(min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class CommentRead(BaseModel):
    id: UUID
    author_id: UUID | None
    text: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AttachmentRead(BaseModel):
    id: UUID
    name: str
    url: str
    mime_type: str
    uploaded_by_id: UUID | None
    uploaded_at: datetime

    model_config = {"from_attributes": True}


class TaskSummary(BaseModel):
    """Task without its comments and attachments, used in list views."""

    id: UUID
    title: str
    description: str
    project_id: UUID
    status: TaskStatus
    priority: TaskPriority
    assignee_id: UUID | None
    due_date: date | None
    story_points: int | None
    phase: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskRead(TaskSummary):
    comments: list[CommentRead] = Field(default_factory=list)
    attachments: list[AttachmentRead] = Field(default_factory=list)
