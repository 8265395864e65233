"""Dashboard endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.app.api.dependencies import Auth, DashboardServiceDep
from src.app.schemas.dashboard import DashboardStats, TaskNotification
from src.app.schemas.project import ProjectRead
from src.app.schemas.task import TaskSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def stats(ctx: Auth, service: DashboardServiceDep) -> DashboardStats:
    return await service.stats(ctx)


@router.get("/users/{user_id}/tasks", response_model=list[TaskSummary])
async def user_tasks(
    user_id: UUID, ctx: Auth, service: DashboardServiceDep
) -> list[TaskSummary]:
    return await service.user_tasks(ctx, user_id)


@router.get("/users/{user_id}/projects", response_model=list[ProjectRead])
async def user_projects(
    user_id: UUID, ctx: Auth, service: DashboardServiceDep
) -> list[ProjectRead]:
    return await service.user_projects(ctx, user_id)


@router.get("/users/{user_id}/notifications", response_model=list[TaskNotification])
async def user_notifications(
    user_id: UUID, ctx: Auth, service: DashboardServiceDep
) -> list[TaskNotification]:
    """The five most recently updated tasks assigned to the user."""
    return await service.notifications(ctx, user_id)
