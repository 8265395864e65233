"""User management service."""

from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.auth_context import AuthContext
from src.app.core.config import get_settings
from src.app.core.exceptions import ConflictError, InputValidationError, NotFoundError
from src.app.core.logging import get_logger
from src.app.core.notifications import send_invite_email
from src.app.core.security import (
    generate_one_time_token,
    generate_temporary_password,
    hash_password,
    hash_token,
)
from src.app.models import ResetToken, User
from src.app.models.base import utc_now
from src.app.models.enums import TokenPurpose, UserRole
from src.app.repositories import (
    ProjectRepository,
    ResetTokenRepository,
    TaskRepository,
    UserRepository,
)
from src.app.schemas.user import UserInvite, UserUpdate

logger = get_logger(__name__)

ASSIGNABLE_ROLES = [UserRole.COLLABORATOR, UserRole.PROJECT_MANAGER]


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        token_repo: ResetTokenRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.token_repo = token_repo
        self.session = session

    async def list_users(self, ctx: AuthContext) -> list[User]:
        ctx.require_admin()
        return await self.user_repo.list_all()

    async def list_assignable(self, ctx: AuthContext) -> list[User]:
        """Users that can be put on a team or assigned a task."""
        ctx.require_manager()
        return await self.user_repo.list_by_roles(ASSIGNABLE_ROLES)

    async def get_me(self, ctx: AuthContext) -> User:
        user = await self.user_repo.get_by_id(ctx.user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def invite_user(self, ctx: AuthContext, data: UserInvite) -> User:
        """Create an account with an unusable password and e-mail a set-password link."""
        ctx.require_admin()
        settings = get_settings()
        email = data.email.lower()

        if await self.user_repo.exists_by_email(email):
            raise ConflictError("User already exists")

        token = generate_one_time_token()
        try:
            user = User(
                name=data.name,
                email=email,
                hashed_password=hash_password(generate_temporary_password()),
                role=data.role,
            )
            self.user_repo.add(user)
            await self.session.flush()
            self.token_repo.add(
                ResetToken(
                    user_id=user.id,
                    token_hash=hash_token(token),
                    purpose=TokenPurpose.INVITE.value,
                    expires_at=utc_now() + timedelta(hours=settings.invite_expire_hours),
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        inviter = await self.user_repo.get_by_id(ctx.user_id)
        send_invite_email(
            to=user.email,
            token=token,
            user_name=user.name,
            inviter_name=inviter.name if inviter else "An administrator",
        )
        logger.info("User invited", user_id=str(user.id), role=user.role)
        return user

    async def update_user(self, ctx: AuthContext, user_id: UUID, data: UserUpdate) -> User:
        ctx.require_admin()
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        try:
            for field, value in update_data.items():
                setattr(user, field, value)
            user.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User updated", user_id=str(user.id), fields=sorted(update_data))
        return user

    async def delete_user(self, ctx: AuthContext, user_id: UUID) -> None:
        """Delete a user, their memberships, task assignments and pending tokens.

        Activity log and auth event rows keep the dangling user id.
        """
        ctx.require_admin()
        if user_id == ctx.user_id:
            raise InputValidationError("You cannot delete your own account")

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        try:
            await self.project_repo.delete_memberships_for_user(user.id)
            await self.project_repo.clear_creator(user.id)
            await self.task_repo.unassign_user(user.id)
            await self.token_repo.delete_for_user(user.id)
            await self.user_repo.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User deleted", user_id=str(user_id))
