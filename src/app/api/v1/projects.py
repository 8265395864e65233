"""Project endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import Auth, ProjectServiceDep, TaskServiceDep
from src.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.app.schemas.task import TaskCreate, TaskRead, TaskSummary

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="Administrators and Project Managers see every project, others see their teams.",
)
async def list_projects(ctx: Auth, service: ProjectServiceDep) -> list[ProjectRead]:
    return await service.list_projects(ctx)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Unknown team member"},
        403: {"description": "Administrator or Project Manager role required"},
        422: {"description": "Validation error"},
    },
)
async def create_project(
    data: ProjectCreate, ctx: Auth, service: ProjectServiceDep
) -> ProjectRead:
    return await service.create_project(ctx, data)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        403: {"description": "Not a member of this project"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, ctx: Auth, service: ProjectServiceDep) -> ProjectRead:
    return await service.get_project(ctx, project_id)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description=(
        "Partial update. Each effective change is recorded in the project's activity log."
    ),
    responses={
        403: {"description": "Administrator or Project Manager role required"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID, data: ProjectUpdate, ctx: Auth, service: ProjectServiceDep
) -> ProjectRead:
    return await service.update_project(ctx, project_id, data)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={
        403: {"description": "Administrator role required"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: UUID, ctx: Auth, service: ProjectServiceDep) -> None:
    """Delete a project together with its tasks and team memberships."""
    await service.delete_project(ctx, project_id)


@router.get(
    "/{project_id}/tasks",
    response_model=list[TaskSummary],
    summary="List project tasks",
)
async def list_project_tasks(
    project_id: UUID, ctx: Auth, service: TaskServiceDep
) -> list[TaskSummary]:
    return await service.list_tasks(ctx, project_id)


@router.post(
    "/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
async def create_task(
    project_id: UUID, data: TaskCreate, ctx: Auth, service: TaskServiceDep
) -> TaskRead:
    return await service.create_task(ctx, project_id, data)
