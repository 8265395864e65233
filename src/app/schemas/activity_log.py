"""Activity log detail payloads and API responses.

Each action has exactly one details model; ``ActivityDetails`` is the tagged
union over all of them, discriminated by ``action``. Stored JSON uses the
field aliases (``from``, ``taskId``) and never includes the tag itself.
"""

from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.app.models.enums import ActivityAction


class _Details(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON payload persisted in ``activity_logs.details``."""
        return self.model_dump(mode="json", by_alias=True, exclude={"action"})


class FieldChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: Any = Field(alias="from")
    to: Any


class CreatedDetails(_Details):
    action: Literal[ActivityAction.CREATED] = ActivityAction.CREATED
    name: str
    description: str


class UpdatedDetails(_Details):
    action: Literal[ActivityAction.UPDATED] = ActivityAction.UPDATED
    changes: dict[str, FieldChange]


class DeletedDetails(_Details):
    action: Literal[ActivityAction.DELETED] = ActivityAction.DELETED
    name: str
    id: UUID


class StatusChangedDetails(_Details):
    action: Literal[ActivityAction.STATUS_CHANGED] = ActivityAction.STATUS_CHANGED
    from_: str = Field(alias="from")
    to: str


class TeamChangedDetails(_Details):
    action: Literal[ActivityAction.TEAM_CHANGED] = ActivityAction.TEAM_CHANGED
    added: list[UUID]
    removed: list[UUID]


class ProgressUpdatedDetails(_Details):
    action: Literal[ActivityAction.PROGRESS_UPDATED] = ActivityAction.PROGRESS_UPDATED
    from_: int = Field(alias="from")
    to: int


class _TaskDetails(_Details):
    task_id: UUID = Field(alias="taskId")
    title: str


class TaskCreatedDetails(_TaskDetails):
    action: Literal[ActivityAction.TASK_CREATED] = ActivityAction.TASK_CREATED
    assignee: UUID | None


class TaskUpdatedDetails(_TaskDetails):
    action: Literal[ActivityAction.TASK_UPDATED] = ActivityAction.TASK_UPDATED
    changes: dict[str, FieldChange]


class TaskStatusChangedDetails(_TaskDetails):
    action: Literal[ActivityAction.TASK_STATUS_CHANGED] = ActivityAction.TASK_STATUS_CHANGED
    from_: str = Field(alias="from")
    to: str


class TaskReassignedDetails(_TaskDetails):
    action: Literal[ActivityAction.TASK_REASSIGNED] = ActivityAction.TASK_REASSIGNED
    to: UUID | None


class TaskDeletedDetails(_TaskDetails):
    action: Literal[ActivityAction.TASK_DELETED] = ActivityAction.TASK_DELETED


class CommentAddedDetails(_TaskDetails):
    action: Literal[ActivityAction.COMMENT_ADDED] = ActivityAction.COMMENT_ADDED


ActivityDetails = Annotated[
    CreatedDetails
    | UpdatedDetails
    | DeletedDetails
    | StatusChangedDetails
    | TeamChangedDetails
    | ProgressUpdatedDetails
    | TaskCreatedDetails
    | TaskUpdatedDetails
    | TaskStatusChangedDetails
    | TaskReassignedDetails
    | TaskDeletedDetails
    | CommentAddedDetails,
    Field(discriminator="action"),
]


class ActivityUser(BaseModel):
    """Acting user, resolved at read time."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class ActivityLogRead(BaseModel):
    """Activity log entry for API responses."""

    id: UUID
    project_id: UUID
    project_name: str | None = Field(
        default=None,
        description="Current project name; null once the project has been deleted.",
    )
    user_id: UUID | None
    user: ActivityUser | None = Field(
        default=None,
        description="Acting user; null for system entries or deleted users.",
    )
    action: ActivityAction
    details: dict[str, Any]
    created_at: datetime
