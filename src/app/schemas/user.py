from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.app.models.enums import UserRole


def _strip_name(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty or whitespace only")
    return v


class UserRead(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    role: UserRole
    created_at: datetime

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    """Minimal user representation for pickers and team lists."""

    id: UUID
    name: str
    email: EmailStr

    model_config = {"from_attributes": True}


class UserInvite(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.COLLABORATOR

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_name(v)  # type: ignore[return-value]


class UserUpdate(BaseModel):
    """Administrator edit of another user's name or role."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _strip_name(v)
