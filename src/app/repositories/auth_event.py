"""Repository for AuthEvent entity."""

from sqlmodel import select

from src.app.models import AuthEvent
from src.app.repositories.base import BaseRepository


class AuthEventRepository(BaseRepository[AuthEvent]):
    model = AuthEvent

    async def list_recent(self, limit: int = 200) -> list[AuthEvent]:
        result = await self.session.execute(
            select(AuthEvent)
            .order_by(AuthEvent.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
