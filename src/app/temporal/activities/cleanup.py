"""Reset token cleanup activity."""

from datetime import timedelta

from temporalio import activity

from src.app.core.db import get_session
from src.app.models.base import utc_now
from src.app.repositories import ResetTokenRepository


@activity.defn
async def cleanup_reset_tokens(retention_days: int) -> int:
    """Delete password reset and invite tokens that expired more than ``retention_days`` ago.

    Idempotent: a second run finds nothing left to delete.

    Returns:
        Number of tokens deleted
    """
    cutoff = utc_now() - timedelta(days=retention_days)
    activity.logger.info(f"Cleaning up reset tokens expired before {cutoff.isoformat()}")

    async with get_session() as session:
        count = await ResetTokenRepository(session).delete_expired_before(cutoff)

    activity.logger.info(f"Deleted {count} expired reset tokens")
    return count
