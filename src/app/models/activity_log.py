"""Append-only activity log of project and task mutations."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index
from sqlmodel import Field, SQLModel

from src.app.models.base import JSONType, utc_now


class ActivityLog(SQLModel, table=True):
    """One immutable entry in a project's activity trail.

    ``project_id`` and ``user_id`` carry no foreign keys: entries outlive the
    project and the acting user.
    """

    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_project_created", "project_id", "created_at"),
        Index("ix_activity_logs_created", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID
    user_id: UUID | None = Field(default=None)
    action: str = Field(max_length=50)  # ActivityAction value
    details: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONType, nullable=False),
    )
    created_at: datetime = Field(default_factory=utc_now)
