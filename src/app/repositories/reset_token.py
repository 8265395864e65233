"""Repository for ResetToken entity."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.engine import CursorResult
from sqlmodel import select

from src.app.models import ResetToken
from src.app.models.enums import TokenPurpose
from src.app.repositories.base import BaseRepository


class ResetTokenRepository(BaseRepository[ResetToken]):
    model = ResetToken

    async def get_valid(
        self,
        user_id: UUID,
        token_hash: str,
        purposes: list[TokenPurpose],
        now: datetime,
    ) -> ResetToken | None:
        """Get an unexpired token of one of ``purposes`` belonging to ``user_id``."""
        result = await self.session.execute(
            select(ResetToken).where(
                ResetToken.user_id == user_id,
                ResetToken.token_hash == token_hash,
                ResetToken.purpose.in_([p.value for p in purposes]),  # type: ignore[attr-defined]
                ResetToken.expires_at > now,
            )
        )
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(ResetToken).where(ResetToken.user_id == user_id)  # type: ignore[arg-type]
        )

    async def delete_expired_before(self, cutoff: datetime) -> int:
        """Delete tokens that expired before ``cutoff``. Commits.

        Returns:
            Number of tokens deleted
        """
        stmt = delete(ResetToken).where(ResetToken.expires_at < cutoff)  # type: ignore[arg-type]
        result = await self.session.execute(stmt)
        await self.session.commit()
        return cast(CursorResult[Any], result).rowcount or 0
