"""Task management service - tasks, comments and attachments."""

import asyncio
import re
from datetime import date
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.auth_context import AuthContext
from src.app.core.config import get_settings
from src.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from src.app.core.logging import get_logger
from src.app.models import Task, TaskAttachment, TaskComment
from src.app.models.base import utc_now
from src.app.repositories import ProjectRepository, TaskRepository, UserRepository
from src.app.schemas.activity_log import (
    ActivityDetails,
    CommentAddedDetails,
    TaskCreatedDetails,
    TaskDeletedDetails,
    TaskReassignedDetails,
    TaskStatusChangedDetails,
    TaskUpdatedDetails,
)
from src.app.schemas.task import (
    AttachmentRead,
    CommentCreate,
    CommentRead,
    TaskCreate,
    TaskRead,
    TaskSummary,
    TaskUpdate,
)
from src.app.services.activity_log_service import ActivityLogService, diff_fields

logger = get_logger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class TaskService:
    def __init__(
        self,
        task_repo: TaskRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        activity_log: ActivityLogService,
    ):
        self.task_repo = task_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session
        self.activity_log = activity_log

    async def list_tasks(self, ctx: AuthContext, project_id: UUID) -> list[TaskSummary]:
        await self._check_project_access(ctx, project_id)
        tasks = await self.task_repo.list_by_project(project_id)
        return [TaskSummary.model_validate(t) for t in tasks]

    async def recent_tasks(self, ctx: AuthContext, limit: int = 10) -> list[TaskSummary]:
        """Tasks assigned to the caller or in the caller's projects, newest update first."""
        tasks = await self.task_repo.list_recent_for_user(
            ctx.user_id, sorted(ctx.project_ids), limit
        )
        return [TaskSummary.model_validate(t) for t in tasks]

    async def due_tasks(self, ctx: AuthContext, start: date, end: date) -> list[TaskSummary]:
        """Tasks due in [start, end]. Collaborators only see their projects and assignments."""
        if end < start:
            raise InputValidationError("End date cannot be before the start date")
        tasks = await self.task_repo.list_due_between(start, end)
        if not ctx.is_manager:
            tasks = [
                t for t in tasks if ctx.is_member(t.project_id) or t.assignee_id == ctx.user_id
            ]
        return [TaskSummary.model_validate(t) for t in tasks]

    async def create_task(self, ctx: AuthContext, project_id: UUID, data: TaskCreate) -> TaskRead:
        await self._check_project_access(ctx, project_id)
        if data.assignee_id is not None:
            await self._require_user(data.assignee_id)

        try:
            task = Task(**data.model_dump(), project_id=project_id)
            self.task_repo.add(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task created", task_id=str(task.id), project_id=str(project_id))
        await self.activity_log.append(
            project_id,
            ctx.user_id,
            TaskCreatedDetails(task_id=task.id, title=task.title, assignee=task.assignee_id),
        )
        return TaskRead.model_validate(task)

    async def update_task(self, ctx: AuthContext, task_id: UUID, data: TaskUpdate) -> TaskRead:
        """Apply a partial update.

        Status and assignee changes get their own entries; any other changed
        field goes into a single "Task Updated" entry.
        """
        task = await self._get_task(task_id)
        if not ctx.is_manager and task.assignee_id != ctx.user_id:
            raise ForbiddenError("Only the assignee or a manager can update this task")

        updates: dict[str, Any] = data.model_dump(exclude_unset=True)
        new_assignee = updates.get("assignee_id")
        if new_assignee is not None and new_assignee != task.assignee_id:
            await self._require_user(new_assignee)

        changes = diff_fields(task, updates)
        if not changes:
            return await self._to_read(task)

        status_change = changes.pop("status", None)
        assignee_change = changes.pop("assignee_id", None)
        try:
            for field, value in updates.items():
                setattr(task, field, value)
            task.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        entries: list[ActivityDetails] = []
        if status_change is not None:
            entries.append(
                TaskStatusChangedDetails(
                    task_id=task.id,
                    title=task.title,
                    from_=status_change.from_,
                    to=status_change.to,
                )
            )
        if assignee_change is not None:
            entries.append(
                TaskReassignedDetails(task_id=task.id, title=task.title, to=assignee_change.to)
            )
        if changes:
            entries.append(TaskUpdatedDetails(task_id=task.id, title=task.title, changes=changes))

        logger.info(
            "Task updated",
            task_id=str(task.id),
            actions=[e.action.value for e in entries],
        )
        await self.activity_log.append_all(task.project_id, ctx.user_id, entries)
        return await self._to_read(task)

    async def delete_task(self, ctx: AuthContext, task_id: UUID) -> None:
        ctx.require_manager()
        task = await self._get_task(task_id)
        project_id, title = task.project_id, task.title

        try:
            await self.task_repo.delete_task(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task deleted", task_id=str(task_id), project_id=str(project_id))
        await self.activity_log.append(
            project_id, ctx.user_id, TaskDeletedDetails(task_id=task_id, title=title)
        )

    async def add_comment(self, ctx: AuthContext, task_id: UUID, data: CommentCreate) -> TaskRead:
        task = await self._get_task(task_id)
        self._check_task_collaborator(ctx, task)

        try:
            self.session.add(TaskComment(task_id=task.id, author_id=ctx.user_id, text=data.text))
            task.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.activity_log.append(
            task.project_id,
            ctx.user_id,
            CommentAddedDetails(task_id=task.id, title=task.title),
        )
        return await self._to_read(task)

    async def add_attachment(
        self,
        ctx: AuthContext,
        task_id: UUID,
        filename: str,
        mime_type: str,
        content: bytes,
    ) -> TaskRead:
        """Store an uploaded file under the upload directory and record its metadata."""
        task = await self._get_task(task_id)
        self._check_task_collaborator(ctx, task)

        settings = get_settings()
        if not content:
            raise InputValidationError("No file uploaded")
        if len(content) > settings.max_upload_bytes:
            raise InputValidationError(
                f"File exceeds the {settings.max_upload_bytes} byte upload limit"
            )

        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", Path(filename).name) or "upload"
        stored_name = f"{uuid4().hex}_{safe_name}"
        target = Path(settings.upload_dir) / str(task.id) / stored_name
        await asyncio.to_thread(_write_file, target, content)

        try:
            self.session.add(
                TaskAttachment(
                    task_id=task.id,
                    name=filename[:255],
                    url=f"/uploads/{task.id}/{stored_name}",
                    mime_type=mime_type[:100],
                    uploaded_by_id=ctx.user_id,
                )
            )
            task.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            await asyncio.to_thread(target.unlink, missing_ok=True)
            raise

        logger.info("Attachment stored", task_id=str(task.id), size=len(content))
        return await self._to_read(task)

    async def attachment_file(self, task_id: UUID, stored_name: str) -> tuple[Path, str]:
        """Resolve a stored upload to its path on disk and its MIME type.

        Only files recorded as an attachment of ``task_id`` are served.
        """
        if stored_name in ("", ".", "..") or Path(stored_name).name != stored_name:
            raise NotFoundError("Attachment not found")
        attachment = await self.task_repo.get_attachment_by_url(
            f"/uploads/{task_id}/{stored_name}"
        )
        path = Path(get_settings().upload_dir) / str(task_id) / stored_name
        if attachment is None or not path.is_file():
            raise NotFoundError("Attachment not found")
        return path, attachment.mime_type

    async def _get_task(self, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def _require_user(self, user_id: UUID) -> None:
        if await self.user_repo.get_by_id(user_id) is None:
            raise InputValidationError("Assignee does not exist")

    async def _check_project_access(self, ctx: AuthContext, project_id: UUID) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError("Project not found")
        if not ctx.is_manager and not ctx.is_member(project_id):
            raise ForbiddenError("You are not a member of this project")

    @staticmethod
    def _check_task_collaborator(ctx: AuthContext, task: Task) -> None:
        if ctx.is_manager or ctx.is_member(task.project_id) or task.assignee_id == ctx.user_id:
            return
        raise ForbiddenError("You are not a member of this task's project")

    async def _to_read(self, task: Task) -> TaskRead:
        comments = await self.task_repo.list_comments(task.id)
        attachments = await self.task_repo.list_attachments(task.id)
        return TaskRead.model_validate(
            {
                **TaskSummary.model_validate(task).model_dump(),
                "comments": [CommentRead.model_validate(c) for c in comments],
                "attachments": [AttachmentRead.model_validate(a) for a in attachments],
            }
        )


def _write_file(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
