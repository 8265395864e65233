"""Reset token cleanup activity against a real database."""

from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from temporalio.testing import ActivityEnvironment

from src.app.models import ResetToken, User
from src.app.models.base import utc_now
from src.app.temporal.activities import cleanup_reset_tokens

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _add_token(session: AsyncSession, user: User, expired_days_ago: int) -> ResetToken:
    token = ResetToken(
        user_id=user.id,
        token_hash=f"hash-{expired_days_ago}-{user.id.hex}",
        expires_at=utc_now() - timedelta(days=expired_days_ago),
    )
    session.add(token)
    await session.commit()
    return token


async def test_deletes_only_tokens_past_retention(
    db_session: AsyncSession, collaborator: User
) -> None:
    old = await _add_token(db_session, collaborator, expired_days_ago=10)
    recent = await _add_token(db_session, collaborator, expired_days_ago=2)
    live = await _add_token(db_session, collaborator, expired_days_ago=-1)
    kept = {recent.id, live.id}
    old_id = old.id

    deleted = await ActivityEnvironment().run(cleanup_reset_tokens, 7)

    assert deleted == 1
    db_session.expire_all()
    remaining = {t.id for t in (await db_session.execute(select(ResetToken))).scalars()}
    assert remaining == kept
    assert old_id not in remaining


async def test_second_run_is_a_no_op(db_session: AsyncSession, collaborator: User) -> None:
    await _add_token(db_session, collaborator, expired_days_ago=30)

    assert await ActivityEnvironment().run(cleanup_reset_tokens, 7) == 1
    assert await ActivityEnvironment().run(cleanup_reset_tokens, 7) == 0
