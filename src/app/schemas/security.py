"""Authentication event schemas for API responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.app.models.enums import AuthEventType


class AuthEventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event: AuthEventType
    user_id: UUID | None
    email: str
    ip_address: str | None
    created_at: datetime
