"""Activity log service - the append-only trail of project and task mutations."""

import contextlib
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.auth_context import AuthContext
from src.app.core.exceptions import ForbiddenError, NotFoundError
from src.app.core.logging import get_logger
from src.app.models import ActivityLog
from src.app.models.base import utc_now
from src.app.repositories import ActivityLogRepository, ProjectRepository
from src.app.repositories.activity_log import ResolvedEntry
from src.app.schemas.activity_log import (
    ActivityDetails,
    ActivityLogRead,
    ActivityUser,
    FieldChange,
)

logger = get_logger(__name__)

_last_timestamp: datetime | None = None


def next_log_timestamp() -> datetime:
    """UTC now, nudged so entries written by this process never share a timestamp."""
    global _last_timestamp
    now = utc_now()
    if _last_timestamp is not None and now <= _last_timestamp:
        now = _last_timestamp + timedelta(microseconds=1)
    _last_timestamp = now
    return now


def diff_fields(entity: Any, updates: dict[str, Any]) -> dict[str, FieldChange]:
    """Return ``{field: {from, to}}`` for every update whose value differs from the entity."""
    changes: dict[str, FieldChange] = {}
    for field, new_value in updates.items():
        old_value = getattr(entity, field)
        if old_value != new_value:
            changes[field] = FieldChange(from_=old_value, to=new_value)
    return changes


class ActivityLogService:
    """Service for recording and reading activity log entries.

    Writes go through an isolated session after the caller's mutation has
    committed. A failed append is logged and swallowed so it can never turn a
    successful mutation into an error.
    """

    def __init__(
        self,
        log_repo: ActivityLogRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.log_repo = log_repo
        self.project_repo = project_repo
        self.session = session

    async def append(
        self,
        project_id: UUID,
        user_id: UUID | None,
        details: ActivityDetails,
    ) -> ActivityLog | None:
        """Record one activity log entry.

        Args:
            project_id: Project the entry belongs to
            user_id: Acting user, or None for system-generated entries
            details: Action-specific payload; its ``action`` tag is the entry's action

        Returns:
            The created ActivityLog, or None if recording failed
        """
        action = details.action.value
        try:
            entry = ActivityLog(
                project_id=project_id,
                user_id=user_id,
                action=action,
                details=details.to_payload(),
                created_at=next_log_timestamp(),
            )
            self.log_repo.add(entry)
            await self.session.commit()

            logger.debug(
                "Activity log recorded",
                action=action,
                project_id=str(project_id),
            )
            return entry

        except Exception as e:
            logger.warning(
                "Failed to record activity log",
                action=action,
                project_id=str(project_id),
                error=str(e),
            )
            # Isolated session: the caller's transaction is already committed
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

    async def append_all(
        self,
        project_id: UUID,
        user_id: UUID | None,
        entries: Iterable[ActivityDetails],
    ) -> int:
        """Append several entries for one mutation. Returns how many were recorded."""
        recorded = 0
        for details in entries:
            if await self.append(project_id, user_id, details) is not None:
                recorded += 1
        return recorded

    async def list_for_project(self, ctx: AuthContext, project_id: UUID) -> list[ActivityLogRead]:
        """Entries for one project, newest first.

        Administrators and Project Managers may read any project's trail, including
        one whose project has since been deleted. Everyone else must be on the team.
        """
        if not ctx.is_manager:
            if await self.project_repo.get_by_id(project_id) is None:
                raise NotFoundError("Project not found")
            if not ctx.is_member(project_id):
                raise ForbiddenError("You are not a member of this project")

        rows = await self.log_repo.list_for_project(project_id)
        return [_to_read(row) for row in rows]

    async def list_all(self, ctx: AuthContext) -> list[ActivityLogRead]:
        """Entries across all projects, newest first. Administrator only."""
        ctx.require_admin()
        rows = await self.log_repo.list_all()
        return [_to_read(row) for row in rows]


def _to_read(row: ResolvedEntry) -> ActivityLogRead:
    entry, user, project = row
    return ActivityLogRead(
        id=entry.id,
        project_id=entry.project_id,
        project_name=project.name if project else None,
        user_id=entry.user_id,
        user=ActivityUser.model_validate(user) if user else None,
        action=entry.action,
        details=entry.details,
        created_at=entry.created_at,
    )
