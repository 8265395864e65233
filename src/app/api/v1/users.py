"""User management endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import Auth, UserServiceDep
from src.app.schemas.user import UserBrief, UserInvite, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead], summary="List users")
async def list_users(ctx: Auth, service: UserServiceDep) -> list[UserRead]:
    users = await service.list_users(ctx)
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/assignable",
    response_model=list[UserBrief],
    summary="List users that can be assigned to projects and tasks",
)
async def list_assignable_users(ctx: Auth, service: UserServiceDep) -> list[UserBrief]:
    users = await service.list_assignable(ctx)
    return [UserBrief.model_validate(u) for u in users]


@router.get(
    "/me",
    response_model=UserRead,
    responses={
        200: {
            "description": "Current user profile",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "role": "Collaborator",
                        "created_at": "2024-01-15T10:30:00Z",
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_me(ctx: Auth, service: UserServiceDep) -> UserRead:
    """Get current authenticated user."""
    return UserRead.model_validate(await service.get_me(ctx))


@router.post(
    "/invite",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created and invite email sent"},
        403: {"description": "Administrator role required"},
        409: {"description": "User already exists"},
    },
)
async def invite_user(data: UserInvite, ctx: Auth, service: UserServiceDep) -> UserRead:
    """Create a user with a temporary password and email them an invite link."""
    return UserRead.model_validate(await service.invite_user(ctx, data))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    responses={404: {"description": "User not found"}},
)
async def update_user(
    user_id: UUID, data: UserUpdate, ctx: Auth, service: UserServiceDep
) -> UserRead:
    return UserRead.model_validate(await service.update_user(ctx, user_id, data))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Administrators cannot delete themselves"},
        404: {"description": "User not found"},
    },
)
async def delete_user(user_id: UUID, ctx: Auth, service: UserServiceDep) -> None:
    """Delete a user, removing team memberships and unassigning their tasks."""
    await service.delete_user(ctx, user_id)
