"""Project report endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.app.api.dependencies import Auth, ReportServiceDep
from src.app.schemas.report import ProjectReport

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "/{project_id}",
    response_model=ProjectReport,
    responses={
        200: {
            "description": "Aggregated project report",
            "content": {
                "application/json": {
                    "example": {
                        "project_id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Website relaunch",
                        "status": "Active",
                        "deadline": "2025-06-30",
                        "progress": 40,
                        "budget": {"total": 1000.0, "used": 500.0},
                        "tasks": {"to_do": 2, "in_progress": 1, "completed": 3, "total": 6},
                        "team": [
                            {
                                "user_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                                "name": "Ada Lovelace",
                                "email": "ada@example.com",
                                "tasks_completed": 2,
                            }
                        ],
                    }
                }
            },
        },
        403: {"description": "Administrator or Project Manager role required"},
        404: {"description": "Project not found"},
    },
)
async def project_report(
    project_id: UUID, ctx: Auth, service: ReportServiceDep
) -> ProjectReport:
    return await service.project_report(ctx, project_id)
