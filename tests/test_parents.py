import pytest
from httpx import AsyncClient

from helpers import create_parent


@pytest.mark.asyncio
async def test_create_and_find_parent_by_email(client: AsyncClient) -> None:
    created = await create_parent(client, "marko@example.com")
    response = await client.get("/api/v1/parent/email/marko@example.com")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_invalid_email_on_create_is_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/parent",
        json={"name": "Marko", "surname": "Jovic", "email": "not-an-email", "address": "Bulevar 1"},
    )
    assert response.status_code == 400
    assert "email" in response.json()


@pytest.mark.asyncio
async def test_invalid_email_on_update_is_400(client: AsyncClient) -> None:
    created = await create_parent(client)
    response = await client.put(f"/api/v1/parent/{created['id']}", json={"email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email format"

    # nothing was applied
    response = await client.get(f"/api/v1/parent/{created['id']}")
    assert response.json()["email"] == created["email"]


@pytest.mark.asyncio
async def test_duplicate_parent_email_conflicts(client: AsyncClient) -> None:
    await create_parent(client, "same@example.com")
    response = await client.post(
        "/api/v1/parent",
        json={"name": "Jelena", "surname": "Petrovic", "email": "same@example.com", "address": "Trg 2"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_parent_fields(client: AsyncClient) -> None:
    created = await create_parent(client)
    response = await client.put(
        f"/api/v1/parent/{created['id']}", json={"address": "  Nova 3 ", "email": "new@example.com"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["address"] == "Nova 3"
    assert data["email"] == "new@example.com"
    assert data["name"] == created["name"]


@pytest.mark.asyncio
async def test_delete_parent(client: AsyncClient) -> None:
    created = await create_parent(client)
    response = await client.delete(f"/api/v1/parent/{created['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/v1/parent/{created['id']}")
    assert response.status_code == 404
