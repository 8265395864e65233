"""Resolved caller identity passed explicitly into every service call."""

from dataclasses import dataclass, field
from uuid import UUID

from src.app.core.exceptions import ForbiddenError
from src.app.models.enums import UserRole


@dataclass(frozen=True)
class AuthContext:
    """Immutable identity of the current caller.

    ``project_ids`` is the caller's team membership at the time the request
    was authenticated.
    """

    user_id: UUID
    role: UserRole
    project_ids: frozenset[UUID] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR

    @property
    def is_manager(self) -> bool:
        """Administrator or Project Manager."""
        return self.role in (UserRole.ADMINISTRATOR, UserRole.PROJECT_MANAGER)

    def is_member(self, project_id: UUID) -> bool:
        return project_id in self.project_ids

    def require_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError("Administrator role required")

    def require_manager(self) -> None:
        if not self.is_manager:
            raise ForbiddenError("Administrator or Project Manager role required")
