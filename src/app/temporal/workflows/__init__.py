"""Temporal workflows - re-exports for worker registration."""

from src.app.temporal.workflows.token_cleanup import TokenCleanupWorkflow

__all__ = ["TokenCleanupWorkflow"]
