"""Task endpoints - creation, updates, attachments and recent list."""

from datetime import date
from pathlib import Path

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.config import get_settings
from src.app.models import Task, TaskAttachment, TaskComment, User
from tests.helpers import auth_headers, create_project, create_task

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestCreateTask:
    async def test_create_defaults(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        response = await client.post(
            f"/api/v1/projects/{project.id}/tasks",
            json={"title": "  Plan sprint  "},
            headers=auth_headers(manager),
        )
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["title"] == "Plan sprint"
        assert data["status"] == "Backlog"
        assert data["priority"] == "Medium"
        assert data["comments"] == []

    async def test_unknown_assignee_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        response = await client.post(
            f"/api/v1/projects/{project.id}/tasks",
            json={"title": "Orphan", "assignee_id": "00000000-0000-0000-0000-000000000001"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 400

    async def test_invalid_status_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        response = await client.post(
            f"/api/v1/projects/{project.id}/tasks",
            json={"title": "Bad", "status": "Someday"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 422

    async def test_missing_project_is_not_found(
        self, client: AsyncClient, manager: User
    ) -> None:
        response = await client.post(
            "/api/v1/projects/00000000-0000-0000-0000-000000000000/tasks",
            json={"title": "Lost"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 404


class TestUpdateTask:
    async def test_null_title_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        task = await create_task(db_session, project)
        response = await client.patch(
            f"/api/v1/tasks/{task.id}", json={"title": None}, headers=auth_headers(manager)
        )
        assert response.status_code == 422

    async def test_null_assignee_unassigns(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        manager: User,
        collaborator: User,
    ) -> None:
        project = await create_project(db_session)
        task = await create_task(db_session, project, assignee_id=collaborator.id)
        response = await client.patch(
            f"/api/v1/tasks/{task.id}", json={"assignee_id": None}, headers=auth_headers(manager)
        )
        assert response.status_code == 200
        assert response.json()["assignee_id"] is None

    async def test_missing_task_is_not_found(self, client: AsyncClient, manager: User) -> None:
        response = await client.patch(
            "/api/v1/tasks/00000000-0000-0000-0000-000000000000",
            json={"title": "x"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 404


class TestDeleteTask:
    async def test_delete_removes_comments(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        task = await create_task(db_session, project)
        headers = auth_headers(manager)
        task_id = task.id
        await client.post(f"/api/v1/tasks/{task.id}/comments", json={"text": "a"}, headers=headers)

        response = await client.delete(f"/api/v1/tasks/{task.id}", headers=headers)
        assert response.status_code == 204

        db_session.expire_all()
        assert await db_session.get(Task, task_id) is None
        comments = (await db_session.execute(select(TaskComment))).scalars().all()
        assert comments == []


class TestAttachments:
    async def test_upload_stores_file_and_metadata(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        collaborator: User,
        upload_dir: Path,
    ) -> None:
        project = await create_project(db_session, team=[collaborator])
        task = await create_task(db_session, project)

        response = await client.post(
            f"/api/v1/tasks/{task.id}/attachments",
            files={"file": ("notes.txt", b"hello world", "text/plain")},
            headers=auth_headers(collaborator),
        )
        assert response.status_code == 201, response.text
        attachment = response.json()["attachments"][0]
        assert attachment["name"] == "notes.txt"
        assert attachment["mime_type"] == "text/plain"
        assert attachment["url"].startswith(f"/uploads/{task.id}/")

        stored = list((upload_dir / str(task.id)).iterdir())
        assert len(stored) == 1
        assert stored[0].read_bytes() == b"hello world"

    async def test_path_components_are_stripped(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        manager: User,
        upload_dir: Path,
    ) -> None:
        project = await create_project(db_session)
        task = await create_task(db_session, project)

        response = await client.post(
            f"/api/v1/tasks/{task.id}/attachments",
            files={"file": ("../../etc/passwd", b"x", "text/plain")},
            headers=auth_headers(manager),
        )
        assert response.status_code == 201
        stored = list((upload_dir / str(task.id)).iterdir())
        assert stored[0].name.endswith("_passwd")

    async def test_oversized_upload_is_rejected(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        manager: User,
        upload_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(get_settings(), "max_upload_bytes", 4)
        project = await create_project(db_session)
        task = await create_task(db_session, project)

        response = await client.post(
            f"/api/v1/tasks/{task.id}/attachments",
            files={"file": ("big.bin", b"12345", "application/octet-stream")},
            headers=auth_headers(manager),
        )
        assert response.status_code == 400
        attachments = (await db_session.execute(select(TaskAttachment))).scalars().all()
        assert attachments == []

    async def test_attachment_url_serves_the_file(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        collaborator: User,
        upload_dir: Path,
    ) -> None:
        project = await create_project(db_session, team=[collaborator])
        task = await create_task(db_session, project)
        response = await client.post(
            f"/api/v1/tasks/{task.id}/attachments",
            files={"file": ("notes.txt", b"hello world", "text/plain")},
            headers=auth_headers(collaborator),
        )
        url = response.json()["attachments"][0]["url"]

        download = await client.get(url)

        assert download.status_code == 200
        assert download.content == b"hello world"
        assert download.headers["content-type"].startswith("text/plain")

    async def test_unrecorded_file_is_not_served(
        self, client: AsyncClient, db_session: AsyncSession, upload_dir: Path
    ) -> None:
        project = await create_project(db_session)
        task = await create_task(db_session, project)
        stray = upload_dir / str(task.id) / "deadbeef_stray.txt"
        stray.parent.mkdir(parents=True)
        stray.write_bytes(b"not an attachment")

        response = await client.get(f"/uploads/{task.id}/deadbeef_stray.txt")

        assert response.status_code == 404


class TestRecentTasks:
    async def test_recent_includes_assigned_and_team_tasks(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        collaborator: User,
    ) -> None:
        team_project = await create_project(db_session, team=[collaborator])
        other_project = await create_project(db_session)
        team_task = await create_task(db_session, team_project)
        assigned = await create_task(db_session, other_project, assignee_id=collaborator.id)
        await create_task(db_session, other_project)

        response = await client.get("/api/v1/tasks/recent", headers=auth_headers(collaborator))
        assert response.status_code == 200
        assert {t["id"] for t in response.json()} == {str(team_task.id), str(assigned.id)}


class TestDueTasks:
    async def test_range_is_inclusive_and_scoped(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        collaborator: User,
    ) -> None:
        team_project = await create_project(db_session, team=[collaborator])
        other_project = await create_project(db_session)
        on_start = await create_task(db_session, team_project, due_date=date(2025, 3, 1))
        on_end = await create_task(
            db_session, other_project, due_date=date(2025, 3, 31), assignee_id=collaborator.id
        )
        await create_task(db_session, other_project, due_date=date(2025, 3, 15))
        await create_task(db_session, team_project, due_date=date(2025, 4, 1))

        response = await client.get(
            "/api/v1/tasks/due",
            params={"start": "2025-03-01", "end": "2025-03-31"},
            headers=auth_headers(collaborator),
        )
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [str(on_start.id), str(on_end.id)]

    async def test_manager_sees_all(
        self, client: AsyncClient, db_session: AsyncSession, manager: User
    ) -> None:
        project = await create_project(db_session)
        await create_task(db_session, project, due_date=date(2025, 3, 10))

        response = await client.get(
            "/api/v1/tasks/due",
            params={"start": "2025-03-01", "end": "2025-03-31"},
            headers=auth_headers(manager),
        )
        assert len(response.json()) == 1

    async def test_reversed_range_is_rejected(self, client: AsyncClient, manager: User) -> None:
        response = await client.get(
            "/api/v1/tasks/due",
            params={"start": "2025-03-31", "end": "2025-03-01"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 400
