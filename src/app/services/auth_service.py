"""Authentication service - login, logout and password management."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.auth_context import AuthContext
from src.app.core.cache import blacklist_token
from src.app.core.config import get_settings
from src.app.core.exceptions import InputValidationError, NotFoundError, UnauthenticatedError
from src.app.core.logging import get_logger
from src.app.core.notifications import send_password_reset_email
from src.app.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    generate_one_time_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.app.models import AuthEvent, ResetToken, User
from src.app.models.base import utc_now
from src.app.models.enums import AuthEventType, TokenPurpose
from src.app.repositories import AuthEventRepository, ResetTokenRepository, UserRepository
from src.app.schemas.auth import (
    ChangePasswordRequest,
    LoginResponse,
    ResetPasswordRequest,
)
from src.app.schemas.user import UserRead

logger = get_logger(__name__)

_INVALID_RESET = "Invalid or expired token"


class AuthService:
    """Authentication service.

    Every login attempt, logout and password change is written to the auth
    event trail in the same transaction as the change itself.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: ResetTokenRepository,
        event_repo: AuthEventRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.event_repo = event_repo
        self.session = session

    async def login(self, email: str, password: str, ip_address: str | None) -> LoginResponse:
        """Verify credentials and issue an access token.

        Raises:
            UnauthenticatedError: Unknown e-mail or wrong password (same message for both).
        """
        user = await self.user_repo.get_by_email(email)

        # Always verify a hash so response time does not reveal whether the e-mail exists
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            await self._commit_event(
                AuthEventType.LOGIN_FAILURE,
                email.lower(),
                user.id if user else None,
                ip_address,
            )
            logger.info("Login failed", ip_address=ip_address)
            raise UnauthenticatedError("Invalid email or password")

        await self._commit_event(AuthEventType.LOGIN_SUCCESS, user.email, user.id, ip_address)
        logger.info("Login succeeded", user_id=str(user.id))
        return LoginResponse(
            access_token=create_access_token(user.id, user.role),
            user=UserRead.model_validate(user),
        )

    async def logout(
        self, ctx: AuthContext, claims: dict[str, Any], ip_address: str | None
    ) -> None:
        """Revoke the presented access token until it would have expired anyway."""
        user = await self.user_repo.get_by_id(ctx.user_id)
        await self._commit_event(
            AuthEventType.LOGOUT, user.email if user else "", ctx.user_id, ip_address
        )

        jti = claims.get("jti")
        exp = claims.get("exp")
        if jti and exp:
            ttl = int(exp - datetime.now(UTC).timestamp())
            try:
                await blacklist_token(hash_token(jti), ttl)
            except Exception as e:
                # Token simply stays valid until expiry
                logger.warning("Failed to blacklist token in Redis", error=str(e))

    async def change_password(
        self, ctx: AuthContext, data: ChangePasswordRequest, ip_address: str | None
    ) -> None:
        user = await self.user_repo.get_by_id(ctx.user_id)
        if user is None:
            raise UnauthenticatedError()
        if not verify_password(data.current_password, user.hashed_password):
            raise InputValidationError("Current password is incorrect")

        await self._set_password(user, data.new_password, ip_address)
        logger.info("Password changed", user_id=str(user.id))

    async def forgot_password(self, email: str) -> None:
        """Create a password reset token and e-mail it.

        Raises:
            NotFoundError: No account uses this e-mail.
        """
        settings = get_settings()
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        token = generate_one_time_token()
        try:
            self.token_repo.add(
                ResetToken(
                    user_id=user.id,
                    token_hash=hash_token(token),
                    purpose=TokenPurpose.PASSWORD_RESET.value,
                    expires_at=utc_now()
                    + timedelta(minutes=settings.password_reset_expire_minutes),
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        send_password_reset_email(to=user.email, token=token, user_name=user.name)
        logger.info("Password reset requested", user_id=str(user.id))

    async def reset_password(self, data: ResetPasswordRequest, ip_address: str | None) -> None:
        """Set a new password from a reset or invite token. The token is consumed."""
        user = await self.user_repo.get_by_email(data.email)
        if user is None:
            raise InputValidationError(_INVALID_RESET)

        token = await self.token_repo.get_valid(
            user.id,
            hash_token(data.token),
            [TokenPurpose.PASSWORD_RESET, TokenPurpose.INVITE],
            utc_now(),
        )
        if token is None:
            raise InputValidationError(_INVALID_RESET)

        purpose = token.purpose
        await self.token_repo.delete(token)
        await self._set_password(user, data.new_password, ip_address)
        logger.info("Password reset", user_id=str(user.id), purpose=purpose)

    async def list_auth_events(self, ctx: AuthContext) -> list[AuthEvent]:
        ctx.require_admin()
        return await self.event_repo.list_recent()

    async def _set_password(self, user: User, password: str, ip_address: str | None) -> None:
        try:
            user.hashed_password = hash_password(password)
            user.updated_at = utc_now()
            self.event_repo.add(
                AuthEvent(
                    event=AuthEventType.PASSWORD_RESET.value,
                    user_id=user.id,
                    email=user.email,
                    ip_address=ip_address,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _commit_event(
        self,
        event: AuthEventType,
        email: str,
        user_id: UUID | None,
        ip_address: str | None,
    ) -> None:
        try:
            self.event_repo.add(
                AuthEvent(event=event.value, user_id=user_id, email=email, ip_address=ip_address)
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
