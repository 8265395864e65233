"""Repository for User entity."""

from sqlalchemy import func
from sqlmodel import select

from src.app.models import User
from src.app.models.enums import UserRole
from src.app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address, ignoring case."""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    async def list_by_roles(self, roles: list[UserRole]) -> list[User]:
        result = await self.session.execute(
            select(User)
            .where(User.role.in_([r.value for r in roles]))  # type: ignore[attr-defined]
            .order_by(User.name)
        )
        return list(result.scalars().all())

    async def count_by_roles(self, roles: list[UserRole]) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(User.role.in_([r.value for r in roles]))  # type: ignore[attr-defined]
        )
        return int(result.scalar_one())
