"""Authentication dependencies - bearer token to AuthContext."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

from src.app.api.dependencies.repositories import ProjectRepo, UserRepo
from src.app.core.auth_context import AuthContext
from src.app.core.cache import is_token_blacklisted
from src.app.core.logging import bind_user_context
from src.app.core.security import decode_token, hash_token
from src.app.models import User
from src.app.models.enums import UserRole

ACCESS_TOKEN_TYPE = "access"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_claims(
    authorization: Annotated[str | None, Header()] = None,
) -> dict[str, Any]:
    """Validate the bearer token and return its claims.

    Rejects missing headers, bad signatures, expired or non-access tokens and
    tokens revoked by logout.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    jti = payload.get("jti")
    if jti and await is_token_blacklisted(hash_token(jti)) is True:
        raise _unauthorized("Token has been revoked")

    return payload


TokenClaims = Annotated[dict[str, Any], Depends(get_token_claims)]


async def get_current_user(claims: TokenClaims, user_repo: UserRepo) -> User:
    """Load the user named by the token's subject."""
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as e:
        raise _unauthorized("Invalid token payload") from e

    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")

    bind_user_context(user.id, user.role, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_auth_context(user: CurrentUser, project_repo: ProjectRepo) -> AuthContext:
    """Resolve the caller's role and team membership from the database.

    The role comes from the stored user, not the token, so role changes apply
    immediately.
    """
    project_ids = await project_repo.get_project_ids_for_user(user.id)
    return AuthContext(
        user_id=user.id,
        role=UserRole(user.role),
        project_ids=frozenset(project_ids),
    )


Auth = Annotated[AuthContext, Depends(get_auth_context)]


def get_client_ip(request: Request) -> str | None:
    """Client IP from X-Forwarded-For (first hop) or the direct connection."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()[:45]
    return request.client.host if request.client else None


ClientIP = Annotated[str | None, Depends(get_client_ip)]
