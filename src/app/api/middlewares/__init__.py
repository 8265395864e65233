"""HTTP middleware stack for the EasyPM API."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.app.core.config import Settings

from .logging_context import logging_context_middleware
from .request_tracking import request_tracking_middleware
from .security_headers import SecurityHeadersMiddleware

__all__ = ["setup_middlewares"]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Register middlewares innermost first.

    Starlette runs the last registered middleware outermost, so the resulting
    order for a request is: correlation id, CORS, security headers, logging
    context, request tracking, then the route.
    """
    app.middleware("http")(request_tracking_middleware)
    app.middleware("http")(logging_context_middleware)

    # Strict CSP only when the docs UI is disabled
    strict_csp = settings.csp_production if not settings.enable_openapi else None
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=strict_csp or None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)
