"""Security log endpoints."""

from fastapi import APIRouter

from src.app.api.dependencies import Auth, AuthServiceDep
from src.app.schemas.security import AuthEventRead

router = APIRouter(prefix="/security", tags=["security"])


@router.get(
    "/logs",
    response_model=list[AuthEventRead],
    summary="Recent authentication events",
    responses={403: {"description": "Administrator role required"}},
)
async def list_security_logs(ctx: Auth, service: AuthServiceDep) -> list[AuthEventRead]:
    events = await service.list_auth_events(ctx)
    return [AuthEventRead.model_validate(e) for e in events]
