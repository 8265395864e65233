from fastapi import APIRouter

from src.app.api.v1 import (
    activity_logs,
    auth,
    dashboard,
    projects,
    reports,
    security,
    tasks,
    users,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(activity_logs.router)
api_router.include_router(reports.router)
api_router.include_router(dashboard.router)
api_router.include_router(security.router)
