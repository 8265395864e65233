"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.app.models import Project
from src.app.models.enums import Methodology, ProjectStatus

# Fields that may not be explicitly set to null on update
_REQUIRED_ON_UPDATE = ("name", "description", "status", "progress", "start_date", "methodology")


class Phase(BaseModel):
    """Waterfall phase with an optional milestone."""

    name: str = Field(min_length=1, max_length=100)
    milestone_date: date | None = None


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    status: ProjectStatus = ProjectStatus.ACTIVE
    progress: int = Field(default=0, ge=0, le=100)
    team: list[UUID] = Field(default_factory=list)
    start_date: date
    deadline: date | None = None
    methodology: Methodology = Methodology.NONE
    sprint_duration: int | None = Field(default=None, ge=1)
    wip_limit: int | None = Field(default=None, ge=1)
    phases: list[Phase] | None = None
    value_goals: str | None = Field(default=None, max_length=1000)
    budget: float | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def validate_dates(self) -> "ProjectCreate":
        if self.deadline is not None and self.deadline < self.start_date:
            raise ValueError("Deadline cannot be before the start date")
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only fields present in the body are applied."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: ProjectStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    team: list[UUID] | None = None
    start_date: date | None = None
    deadline: date | None = None
    methodology: Methodology | None = None
    sprint_duration: int | None = Field(default=None, ge=1)
    wip_limit: int | None = Field(default=None, ge=1)
    phases: list[Phase] | None = None
    value_goals: str | None = Field(default=None, max_length=1000)
    budget: float | None = Field(default=None, ge=0)

    @field_validator(*_REQUIRED_ON_UPDATE)
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return v.strip()

    @field_validator("team")
    @classmethod
    def reject_null_team(cls, v: list[UUID] | None) -> list[UUID]:
        if v is None:
            raise ValueError("Team cannot be null; send an empty list to clear it")
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str
    status: ProjectStatus
    progress: int
    team: list[UUID]
    start_date: date
    deadline: date | None
    methodology: Methodology
    sprint_duration: int | None
    wip_limit: int | None
    phases: list[Phase] | None
    value_goals: str | None
    budget: float | None
    created_by_id: UUID | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_project(cls, project: Project, team: list[UUID]) -> "ProjectRead":
        return cls.model_validate({**project.model_dump(), "team": team})
