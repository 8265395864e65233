"""Unit tests for ActivityLogService."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from src.app.core.auth_context import AuthContext
from src.app.core.exceptions import ForbiddenError, NotFoundError
from src.app.models import ActivityLog
from src.app.models.enums import UserRole
from src.app.schemas.activity_log import (
    CommentAddedDetails,
    CreatedDetails,
    ProgressUpdatedDetails,
    StatusChangedDetails,
)
from src.app.services.activity_log_service import ActivityLogService, next_log_timestamp

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def mock_log_repo() -> MagicMock:
    repo = MagicMock()
    repo.add = MagicMock()
    repo.list_for_project = AsyncMock(return_value=[])
    repo.list_all = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_project_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=MagicMock())
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def service(mock_log_repo, mock_project_repo, mock_session) -> ActivityLogService:
    return ActivityLogService(mock_log_repo, mock_project_repo, mock_session)


def _ctx(role: UserRole, *project_ids) -> AuthContext:
    return AuthContext(user_id=uuid4(), role=role, project_ids=frozenset(project_ids))


class TestAppend:
    async def test_append_records_entry(self, service, mock_log_repo, mock_session):
        project_id, user_id = uuid4(), uuid4()

        entry = await service.append(
            project_id, user_id, StatusChangedDetails(from_="Active", to="Completed")
        )

        assert isinstance(entry, ActivityLog)
        assert entry.project_id == project_id
        assert entry.user_id == user_id
        assert entry.action == "Status Changed"
        assert entry.details == {"from": "Active", "to": "Completed"}
        mock_log_repo.add.assert_called_once_with(entry)
        mock_session.commit.assert_awaited_once()

    async def test_system_entry_has_no_user(self, service):
        entry = await service.append(uuid4(), None, CreatedDetails(name="Seed", description=""))
        assert entry is not None
        assert entry.user_id is None

    async def test_commit_failure_returns_none(self, service, mock_session):
        mock_session.commit.side_effect = Exception("database is locked")

        result = await service.append(uuid4(), uuid4(), CreatedDetails(name="x", description=""))

        assert result is None
        mock_session.rollback.assert_awaited_once()

    async def test_rollback_failure_is_suppressed(self, service, mock_session):
        mock_session.commit.side_effect = Exception("connection lost")
        mock_session.rollback.side_effect = Exception("still lost")

        result = await service.append(uuid4(), uuid4(), CreatedDetails(name="x", description=""))
        assert result is None

    async def test_failure_is_logged(self, service, mock_session):
        mock_session.commit.side_effect = Exception("boom")

        with patch("src.app.services.activity_log_service.logger") as mock_logger:
            await service.append(uuid4(), uuid4(), CommentAddedDetails(task_id=uuid4(), title="t"))

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["action"] == "Comment Added"
        assert mock_logger.warning.call_args.kwargs["error"] == "boom"

    async def test_append_all_counts_successes(self, service, mock_session):
        mock_session.commit.side_effect = [None, Exception("fail"), None]
        entries = [
            StatusChangedDetails(from_="Active", to="On Hold"),
            ProgressUpdatedDetails(from_=0, to=10),
            CreatedDetails(name="x", description=""),
        ]

        recorded = await service.append_all(uuid4(), uuid4(), entries)
        assert recorded == 2

    async def test_append_all_with_nothing(self, service, mock_session):
        assert await service.append_all(uuid4(), uuid4(), []) == 0
        mock_session.commit.assert_not_awaited()


class TestQueries:
    async def test_manager_skips_membership_check(self, service, mock_project_repo):
        await service.list_for_project(_ctx(UserRole.PROJECT_MANAGER), uuid4())
        mock_project_repo.get_by_id.assert_not_awaited()

    async def test_member_can_read(self, service, mock_log_repo):
        project_id = uuid4()
        result = await service.list_for_project(_ctx(UserRole.COLLABORATOR, project_id), project_id)
        assert result == []
        mock_log_repo.list_for_project.assert_awaited_once_with(project_id)

    async def test_non_member_is_forbidden(self, service):
        with pytest.raises(ForbiddenError):
            await service.list_for_project(_ctx(UserRole.COLLABORATOR, uuid4()), uuid4())

    async def test_missing_project_for_collaborator(self, service, mock_project_repo):
        mock_project_repo.get_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.list_for_project(_ctx(UserRole.COLLABORATOR), uuid4())

    async def test_list_all_requires_admin(self, service):
        with pytest.raises(ForbiddenError):
            await service.list_all(_ctx(UserRole.PROJECT_MANAGER))
        assert await service.list_all(_ctx(UserRole.ADMINISTRATOR)) == []


class TestTimestamps:
    def test_same_clock_reading_still_increases(self):
        frozen = datetime(2030, 1, 1, 12, 0, 0)
        with patch("src.app.services.activity_log_service.utc_now", return_value=frozen):
            stamps = [next_log_timestamp() for _ in range(3)]
        assert stamps == sorted(set(stamps))
        assert stamps[0] >= frozen
