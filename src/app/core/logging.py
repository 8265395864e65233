"""structlog setup and request/user context binding for EasyPM."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are too chatty at INFO
_LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "temporalio": logging.INFO,
}


def _processor_chain(debug: bool) -> list[structlog.typing.Processor]:
    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_logging(debug: bool = False) -> None:
    """Route stdlib logging to stdout and configure structlog on top of it.

    Debug mode renders colored key/value lines; otherwise every event is a
    single JSON object, which is what the log shipper expects in production.
    """
    logging.basicConfig(
        stream=sys.stdout,
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=_processor_chain(debug),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation ID to every log line for the rest of the request."""
    if not request_id:
        return
    bind_contextvars(request_id=request_id)


def bind_user_context(user_id: UUID, role: str, email: str | None = None) -> None:
    """Attach the authenticated user to the request's log context.

    The e-mail address is personal data and is only bound when
    ``log_user_emails`` is switched on.
    """
    from src.app.core.config import get_settings

    context = {"user_id": str(user_id), "user_role": role}
    if email and get_settings().log_user_emails:
        context["user_email"] = email
    bind_contextvars(**context)


def clear_request_context() -> None:
    clear_contextvars()
