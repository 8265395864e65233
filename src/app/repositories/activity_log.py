"""Repository for ActivityLog entity."""

from uuid import UUID

from sqlmodel import select

from src.app.models import ActivityLog, Project, User
from src.app.repositories.base import BaseRepository

# (entry, acting user or None, project or None)
ResolvedEntry = tuple[ActivityLog, User | None, Project | None]


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Read side of the activity log. Entries are only ever added, never changed."""

    model = ActivityLog

    def _resolved_query(self):  # type: ignore[no-untyped-def]
        return (
            select(ActivityLog, User, Project)
            .outerjoin(User, User.id == ActivityLog.user_id)  # type: ignore[arg-type]
            .outerjoin(Project, Project.id == ActivityLog.project_id)  # type: ignore[arg-type]
            .order_by(
                ActivityLog.created_at.desc(),  # type: ignore[attr-defined]
                ActivityLog.id.desc(),  # type: ignore[attr-defined]
            )
        )

    async def list_for_project(self, project_id: UUID) -> list[ResolvedEntry]:
        """Entries for one project, newest first, with user and project joined."""
        result = await self.session.execute(
            self._resolved_query().where(ActivityLog.project_id == project_id)
        )
        return [(log, user, project) for log, user, project in result.all()]

    async def list_all(self) -> list[ResolvedEntry]:
        result = await self.session.execute(self._resolved_query())
        return [(log, user, project) for log, user, project in result.all()]
