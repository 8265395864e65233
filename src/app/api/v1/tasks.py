"""Task endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Query, UploadFile, status

from src.app.api.dependencies import Auth, TaskServiceDep
from src.app.core.config import get_settings
from src.app.schemas.task import CommentCreate, TaskRead, TaskSummary, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "/recent",
    response_model=list[TaskSummary],
    summary="Recently updated tasks visible to the caller",
)
async def recent_tasks(
    ctx: Auth,
    service: TaskServiceDep,
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
) -> list[TaskSummary]:
    return await service.recent_tasks(ctx, limit)


@router.get(
    "/due",
    response_model=list[TaskSummary],
    summary="Tasks due in a date range",
    responses={400: {"description": "End date before start date"}},
)
async def due_tasks(
    ctx: Auth,
    service: TaskServiceDep,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> list[TaskSummary]:
    """Tasks due between ``start`` and ``end`` inclusive, soonest first."""
    return await service.due_tasks(ctx, start, end)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    responses={
        403: {"description": "Only managers and the assignee can edit a task"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: UUID, data: TaskUpdate, ctx: Auth, service: TaskServiceDep
) -> TaskRead:
    return await service.update_task(ctx, task_id, data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: UUID, ctx: Auth, service: TaskServiceDep) -> None:
    await service.delete_task(ctx, task_id)


@router.post(
    "/{task_id}/comments",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    task_id: UUID, data: CommentCreate, ctx: Auth, service: TaskServiceDep
) -> TaskRead:
    return await service.add_comment(ctx, task_id, data)


@router.post(
    "/{task_id}/attachments",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Empty or oversized file"}},
)
async def add_attachment(
    task_id: UUID,
    file: Annotated[UploadFile, File()],
    ctx: Auth,
    service: TaskServiceDep,
) -> TaskRead:
    """Upload a file and attach it to the task."""
    content = await file.read(get_settings().max_upload_bytes + 1)
    return await service.add_attachment(
        ctx,
        task_id,
        filename=file.filename or "upload",
        mime_type=file.content_type or "application/octet-stream",
        content=content,
    )
