"""Project and team membership models."""

from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONType, utc_now
from src.app.models.enums import Methodology, ProjectStatus


class Project(SQLModel, table=True):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_projects_progress_range"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    description: str = Field(default="", max_length=500)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    progress: int = Field(default=0)
    start_date: date
    deadline: date | None = Field(default=None)

    # Methodology-specific settings; only the ones matching `methodology` are meaningful
    methodology: str = Field(default=Methodology.NONE.value, max_length=20)
    sprint_duration: int | None = Field(default=None)
    wip_limit: int | None = Field(default=None)
    phases: list[dict[str, Any]] | None = Field(
        default=None,
        sa_column=Column(JSONType, nullable=True),
    )
    value_goals: str | None = Field(default=None, max_length=1000)

    budget: float | None = Field(default=None)
    created_by_id: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Junction table for project team membership."""

    __tablename__ = "project_members"

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
