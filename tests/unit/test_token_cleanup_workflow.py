"""Tests for the token cleanup workflow."""

import pytest
from temporalio import activity
from temporalio.testing import WorkflowEnvironment
from temporalio.worker import Worker

from src.app.temporal.workflows import TokenCleanupWorkflow

pytestmark = pytest.mark.unit

received: list[int] = []


@activity.defn(name="cleanup_reset_tokens")
async def fake_cleanup_reset_tokens(retention_days: int) -> int:
    received.append(retention_days)
    return 3


class TestTokenCleanupWorkflow:
    @pytest.mark.asyncio
    async def test_returns_deleted_count(self) -> None:
        received.clear()
        async with await WorkflowEnvironment.start_time_skipping() as env:  # noqa: SIM117
            async with Worker(
                env.client,
                task_queue="test-queue",
                workflows=[TokenCleanupWorkflow],
                activities=[fake_cleanup_reset_tokens],
            ):
                result = await env.client.execute_workflow(
                    TokenCleanupWorkflow.run,
                    14,
                    id="test-token-cleanup",
                    task_queue="test-queue",
                )

        assert result == {"reset_tokens": 3}
        assert received == [14]
