"""Notification utilities - email."""

from src.app.core.notifications.email import (
    send_invite_email,
    send_password_reset_email,
)

__all__ = [
    "send_invite_email",
    "send_password_reset_email",
]
