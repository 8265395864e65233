"""Authentication-related models - auth event trail and one-time tokens."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import TokenPurpose


class AuthEvent(SQLModel, table=True):
    """Append-only record of logins, logouts and password resets."""

    __tablename__ = "auth_events"
    __table_args__ = (Index("ix_auth_events_created", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event: str = Field(max_length=30)  # AuthEventType value
    user_id: UUID | None = Field(default=None, index=True)
    email: str = Field(max_length=255)
    ip_address: str | None = Field(max_length=45, default=None)  # IPv4/IPv6
    created_at: datetime = Field(default_factory=utc_now)


class ResetToken(SQLModel, table=True):
    """Password reset / invite token. Only the SHA-256 hash is stored."""

    __tablename__ = "reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    purpose: str = Field(default=TokenPurpose.PASSWORD_RESET.value, max_length=20)
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
