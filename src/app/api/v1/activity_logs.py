"""Activity log endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.app.api.dependencies import ActivityLogServiceDep, Auth
from src.app.schemas.activity_log import ActivityLogRead

router = APIRouter(tags=["activity-logs"])


@router.get(
    "/projects/{project_id}/logs",
    response_model=list[ActivityLogRead],
    summary="Project activity log",
    description="Newest first. Entries keep referencing a project or user after deletion.",
    responses={
        403: {"description": "Not a member of this project"},
        404: {"description": "Project not found"},
    },
)
async def list_project_logs(
    project_id: UUID, ctx: Auth, service: ActivityLogServiceDep
) -> list[ActivityLogRead]:
    return await service.list_for_project(ctx, project_id)


@router.get(
    "/logs",
    response_model=list[ActivityLogRead],
    summary="System-wide activity log",
    responses={403: {"description": "Administrator role required"}},
)
async def list_all_logs(ctx: Auth, service: ActivityLogServiceDep) -> list[ActivityLogRead]:
    return await service.list_all(ctx)
