"""Authentication endpoints."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.app.api.dependencies import Auth, AuthServiceDep, ClientIP, TokenClaims
from src.app.core.rate_limit import limiter
from src.app.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ResetPasswordRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "user": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "name": "Ada Lovelace",
                            "email": "ada@example.com",
                            "role": "Project Manager",
                            "created_at": "2024-01-15T10:30:00Z",
                        },
                    }
                }
            },
        },
        401: {"description": "Invalid email or password"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep, client_ip: ClientIP
) -> LoginResponse:
    """Authenticate with email and password and receive a bearer token."""
    return await service.login(login_data.email, login_data.password, client_ip)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    ctx: Auth, claims: TokenClaims, service: AuthServiceDep, client_ip: ClientIP
) -> None:
    """Revoke the current access token."""
    await service.logout(ctx, claims, client_ip)


@router.post(
    "/change-password",
    response_model=MessageResponse,
    responses={400: {"description": "Current password is incorrect"}},
)
async def change_password(
    data: ChangePasswordRequest, ctx: Auth, service: AuthServiceDep, client_ip: ClientIP
) -> MessageResponse:
    await service.change_password(ctx, data, client_ip)
    return MessageResponse(message="Password updated")


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={404: {"description": "No user with this email"}},
)
@limiter.limit("3/hour")
async def forgot_password(
    request: Request, data: ForgotPasswordRequest, service: AuthServiceDep
) -> MessageResponse:
    """Email a one-time password reset token."""
    await service.forgot_password(data.email)
    return MessageResponse(message="Password reset email sent")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"description": "Invalid or expired token"}},
)
@limiter.limit("10/hour")
async def reset_password(
    request: Request, data: ResetPasswordRequest, service: AuthServiceDep, client_ip: ClientIP
) -> MessageResponse:
    """Set a new password with a reset or invite token."""
    await service.reset_password(data, client_ip)
    return MessageResponse(message="Password has been reset")
