"""Repository for Task entity and its comments and attachments."""

from datetime import date
from uuid import UUID

from sqlalchemy import delete, func, or_, update
from sqlmodel import select

from src.app.models import Task, TaskAttachment, TaskComment
from src.app.models.base import utc_now
from src.app.models.enums import TaskStatus
from src.app.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_by_project(self, project_id: UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_by_assignee(self, user_id: UUID, limit: int | None = None) -> list[Task]:
        """Tasks assigned to ``user_id``, most recently updated first."""
        query = (
            select(Task)
            .where(Task.assignee_id == user_id)
            .order_by(Task.updated_at.desc())  # type: ignore[attr-defined]
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_due_between(self, start: date, end: date) -> list[Task]:
        """Tasks with a due date in the inclusive range [start, end]."""
        result = await self.session.execute(
            select(Task)
            .where(Task.due_date >= start, Task.due_date <= end)  # type: ignore[operator]
            .order_by(Task.due_date)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_recent_for_user(
        self, user_id: UUID, project_ids: list[UUID], limit: int
    ) -> list[Task]:
        """Tasks assigned to the user or belonging to one of their projects."""
        condition = Task.assignee_id == user_id
        if project_ids:
            condition = or_(condition, Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
        result = await self.session.execute(
            select(Task)
            .where(condition)
            .order_by(Task.updated_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_status(self, status: TaskStatus) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Task).where(Task.status == status.value)
        )
        return int(result.scalar_one())

    async def count_overdue(self, today: date) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Task)
            .where(
                Task.due_date < today,  # type: ignore[operator]
                Task.status != TaskStatus.COMPLETED.value,
            )
        )
        return int(result.scalar_one())

    async def unassign_user(self, user_id: UUID) -> None:
        await self.session.execute(
            update(Task)
            .where(Task.assignee_id == user_id)  # type: ignore[arg-type]
            .values(assignee_id=None, updated_at=utc_now())
        )

    # Comments and attachments

    async def list_comments(self, task_id: UUID) -> list[TaskComment]:
        result = await self.session.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_attachments(self, task_id: UUID) -> list[TaskAttachment]:
        result = await self.session.execute(
            select(TaskAttachment)
            .where(TaskAttachment.task_id == task_id)
            .order_by(TaskAttachment.uploaded_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def get_attachment_by_url(self, url: str) -> TaskAttachment | None:
        result = await self.session.execute(
            select(TaskAttachment).where(TaskAttachment.url == url)
        )
        return result.scalars().first()

    async def delete_task(self, task: Task) -> None:
        """Delete a task together with its comments and attachments (no commit)."""
        await self.session.execute(
            delete(TaskComment).where(TaskComment.task_id == task.id)  # type: ignore[arg-type]
        )
        await self.session.execute(
            delete(TaskAttachment).where(TaskAttachment.task_id == task.id)  # type: ignore[arg-type]
        )
        await self.session.delete(task)

    async def delete_for_project(self, project_id: UUID) -> int:
        """Delete every task of a project with comments and attachments (no commit)."""
        task_ids = select(Task.id).where(Task.project_id == project_id)
        await self.session.execute(
            delete(TaskComment)
            .where(TaskComment.task_id.in_(task_ids))  # type: ignore[attr-defined]
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(TaskAttachment)
            .where(TaskAttachment.task_id.in_(task_ids))  # type: ignore[attr-defined]
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Task)
            .where(Task.project_id == project_id)  # type: ignore[arg-type]
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
