"""Temporal activities - idempotent units of work executed by the worker."""

from src.app.temporal.activities.cleanup import cleanup_reset_tokens

__all__ = ["cleanup_reset_tokens"]
