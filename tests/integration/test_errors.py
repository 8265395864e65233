"""Error response bodies."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.models import User
from tests.helpers import auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def test_not_found_includes_request_id(client: AsyncClient, manager: User) -> None:
    response = await client.get(
        "/api/v1/projects/00000000-0000-0000-0000-000000000000",
        headers={**auth_headers(manager), "X-Request-ID": "7c9e6679-7425-40de-944b-e07fc1f90ae7"},
    )
    assert response.status_code == 404
    assert response.json() == {
        "detail": "Project not found",
        "request_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
    }
    assert response.headers["x-request-id"] == "7c9e6679-7425-40de-944b-e07fc1f90ae7"


async def test_validation_error_lists_fields(client: AsyncClient, manager: User) -> None:
    response = await client.post(
        "/api/v1/projects",
        json={"name": "", "progress": 150},
        headers=auth_headers(manager),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["request_id"]
    fields = {tuple(err["loc"])[-1] for err in body["detail"]}
    assert {"name", "progress", "start_date"} <= fields


async def test_deadline_before_start_is_rejected(
    client: AsyncClient, db_session: AsyncSession, manager: User
) -> None:
    response = await client.post(
        "/api/v1/projects",
        json={"name": "Backwards", "start_date": "2025-06-01", "deadline": "2025-05-01"},
        headers=auth_headers(manager),
    )
    assert response.status_code == 422


async def test_malformed_id_is_validation_error(client: AsyncClient, manager: User) -> None:
    response = await client.get("/api/v1/projects/not-a-uuid", headers=auth_headers(manager))
    assert response.status_code == 422
