"""User administration endpoints."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.models import ProjectMember, ResetToken, Task, User
from tests.helpers import auth_headers, create_project, create_task

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestInvite:
    async def test_invite_creates_user_and_sends_email(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: User,
        email_mocks: dict[str, MagicMock],
    ) -> None:
        response = await client.post(
            "/api/v1/users/invite",
            json={"name": " Grace Hopper ", "email": "Grace@Example.com", "role": "Project Manager"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["name"] == "Grace Hopper"
        assert data["email"] == "grace@example.com"
        assert data["role"] == "Project Manager"

        kwargs = email_mocks["invite"].call_args.kwargs
        assert kwargs["to"] == "grace@example.com"
        assert kwargs["inviter_name"] == "Alice Admin"

        token = (await db_session.execute(select(ResetToken))).scalar_one()
        assert token.purpose == "invite"

    async def test_duplicate_email_conflicts(
        self, client: AsyncClient, admin: User, manager: User
    ) -> None:
        response = await client.post(
            "/api/v1/users/invite",
            json={"name": "Copy", "email": manager.email.upper()},
            headers=auth_headers(admin),
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "User already exists"

    async def test_manager_cannot_invite(
        self, client: AsyncClient, manager: User, email_mocks: dict[str, MagicMock]
    ) -> None:
        response = await client.post(
            "/api/v1/users/invite",
            json={"name": "Someone", "email": "someone@example.com"},
            headers=auth_headers(manager),
        )
        assert response.status_code == 403
        email_mocks["invite"].assert_not_called()

    async def test_invalid_role_is_rejected(self, client: AsyncClient, admin: User) -> None:
        response = await client.post(
            "/api/v1/users/invite",
            json={"name": "Someone", "email": "someone@example.com", "role": "Owner"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 422


class TestUpdateUser:
    async def test_admin_changes_role(
        self, client: AsyncClient, admin: User, collaborator: User
    ) -> None:
        response = await client.patch(
            f"/api/v1/users/{collaborator.id}",
            json={"role": "Project Manager"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200
        assert response.json()["role"] == "Project Manager"
        assert response.json()["name"] == "Carla Collaborator"

        # The new role applies on the very next request
        reports = await client.get("/api/v1/dashboard/stats", headers=auth_headers(collaborator))
        assert reports.status_code == 200

    async def test_unknown_user(self, client: AsyncClient, admin: User) -> None:
        response = await client.patch(
            "/api/v1/users/00000000-0000-0000-0000-000000000000",
            json={"name": "Nobody"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 404


class TestDeleteUser:
    async def test_delete_cleans_up_references(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: User,
        collaborator: User,
    ) -> None:
        project = await create_project(db_session, team=[collaborator])
        task = await create_task(db_session, project, assignee_id=collaborator.id)
        task_id = task.id
        collaborator_id = collaborator.id

        response = await client.delete(
            f"/api/v1/users/{collaborator.id}", headers=auth_headers(admin)
        )
        assert response.status_code == 204

        db_session.expire_all()
        assert await db_session.get(User, collaborator_id) is None
        members = (await db_session.execute(select(ProjectMember))).scalars().all()
        assert members == []
        refreshed = await db_session.get(Task, task_id)
        assert refreshed is not None
        assert refreshed.assignee_id is None

    async def test_admin_cannot_delete_self(self, client: AsyncClient, admin: User) -> None:
        response = await client.delete(f"/api/v1/users/{admin.id}", headers=auth_headers(admin))
        assert response.status_code == 400


class TestListing:
    async def test_assignable_excludes_administrators(
        self,
        client: AsyncClient,
        admin: User,
        manager: User,
        collaborator: User,
    ) -> None:
        response = await client.get("/api/v1/users/assignable", headers=auth_headers(manager))
        assert response.status_code == 200
        ids = {u["id"] for u in response.json()}
        assert ids == {str(manager.id), str(collaborator.id)}
        assert set(response.json()[0]) == {"id", "name", "email"}

    async def test_collaborator_cannot_list_assignable(
        self, client: AsyncClient, collaborator: User
    ) -> None:
        response = await client.get("/api/v1/users/assignable", headers=auth_headers(collaborator))
        assert response.status_code == 403

    async def test_admin_lists_everyone(
        self, client: AsyncClient, admin: User, manager: User, collaborator: User
    ) -> None:
        response = await client.get("/api/v1/users", headers=auth_headers(admin))
        assert response.status_code == 200
        assert len(response.json()) == 3
