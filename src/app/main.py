from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.app.api import uploads
from src.app.api.middlewares import setup_middlewares
from src.app.api.v1.router import api_router
from src.app.core.config import get_settings
from src.app.core.db import dispose_engine
from src.app.core.exceptions import setup_exception_handlers
from src.app.core.health import setup_health_endpoint, setup_metrics
from src.app.core.logging import get_logger, setup_logging
from src.app.core.rate_limit import limiter
from src.app.core.redis import close_redis
from src.app.core.shutdown import request_tracker
from src.app.temporal.client import close_temporal_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Shutdown initiated", in_flight=request_tracker.in_flight_count)
    await request_tracker.start_shutdown()
    await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period)

    await close_redis()
    await close_temporal_client()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login, logout and password management"},
    {"name": "users", "description": "User administration and profile"},
    {"name": "projects", "description": "Projects, their teams and tasks"},
    {"name": "tasks", "description": "Task updates, comments and attachments"},
    {"name": "activity-logs", "description": "Append-only project history"},
    {"name": "reports", "description": "Per-project aggregates"},
    {"name": "dashboard", "description": "Overview statistics and per-user views"},
    {"name": "security", "description": "Authentication event log"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project management API with per-project activity history",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(uploads.router)
    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
