"""
Temporal worker - separate process from the API.

Run with:
    python -m src.app.temporal.worker
"""

import asyncio

import uvicorn
from fastapi import FastAPI
from temporalio.client import Client
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.worker import Worker

from src.app.core.config import get_settings
from src.app.core.db import dispose_engine
from src.app.core.logging import get_logger, setup_logging
from src.app.temporal.activities import cleanup_reset_tokens
from src.app.temporal.workflows import TokenCleanupWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001
CLEANUP_WORKFLOW_ID = "token-cleanup"


async def schedule_token_cleanup(client: Client) -> None:
    """Start the cron cleanup workflow if CLEANUP_SCHEDULE is set.

    Temporal keeps a single execution per workflow id, so restarting the
    worker leaves the existing schedule in place.
    """
    settings = get_settings()
    if not settings.cleanup_schedule:
        logger.info("Token cleanup schedule not configured")
        return

    try:
        await client.start_workflow(
            TokenCleanupWorkflow.run,
            settings.cleanup_retention_days,
            id=CLEANUP_WORKFLOW_ID,
            task_queue=settings.temporal_task_queue,
            cron_schedule=settings.cleanup_schedule,
        )
    except WorkflowAlreadyStartedError:
        logger.info("Token cleanup already scheduled", workflow_id=CLEANUP_WORKFLOW_ID)
        return
    logger.info("Token cleanup scheduled", cron=settings.cleanup_schedule)


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Serve liveness and readiness probes for the worker process."""
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    server = uvicorn.Server(
        uvicorn.Config(health_app, host="0.0.0.0", port=port, log_level="warning")
    )
    logger.info("Starting worker health server", port=port)
    await server.serve()


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.debug)

    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace,
    )
    worker = Worker(
        client,
        task_queue=settings.temporal_task_queue,
        workflows=[TokenCleanupWorkflow],
        activities=[cleanup_reset_tokens],
        max_concurrent_activities=10,
    )

    logger.info("Starting worker", task_queue=settings.temporal_task_queue)
    try:
        await schedule_token_cleanup(client)
        await asyncio.gather(worker.run(), run_health_server(settings.temporal_task_queue))
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
