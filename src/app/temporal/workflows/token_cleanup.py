"""Token cleanup workflow.

Removes expired password reset and invite tokens. Meant to run on a cron
schedule (CLEANUP_SCHEDULE), e.g. daily at 3am UTC.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.app.temporal.activities import cleanup_reset_tokens


@workflow.defn
class TokenCleanupWorkflow:
    @workflow.run
    async def run(self, retention_days: int = 7) -> dict[str, int]:
        """Run the cleanup activity.

        Args:
            retention_days: Keep tokens for this many days after they expire

        Returns:
            {"reset_tokens": int}
        """
        workflow.logger.info(f"Starting token cleanup (retention: {retention_days} days)")

        deleted = await workflow.execute_activity(
            cleanup_reset_tokens,
            retention_days,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=RetryPolicy(
                maximum_attempts=3,
                initial_interval=timedelta(seconds=2),
            ),
        )

        workflow.logger.info(f"Token cleanup complete: {deleted} reset tokens deleted")
        return {"reset_tokens": deleted}
