import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import User
from app.core.security import password_matches

USER = {"username": "admin", "password": "Secret123", "email": "admin@example.com", "role_id": 1}


@pytest.mark.asyncio
async def test_create_user_hashes_password(client: AsyncClient, db_session: AsyncSession) -> None:
    response = await client.post("/api/v1/users", json=USER)
    assert response.status_code == 201
    data = response.json()
    assert "password" not in data
    assert "password_hash" not in data
    assert data["status"] is True

    user = (await db_session.execute(select(User).where(User.username == "admin"))).scalar_one()
    assert user.password_hash != "Secret123"
    assert password_matches("Secret123", user.password_hash)
    assert not password_matches("wrong", user.password_hash)


@pytest.mark.asyncio
async def test_user_finders(client: AsyncClient) -> None:
    created = (await client.post("/api/v1/users", json=USER)).json()

    response = await client.get("/api/v1/users/username/admin")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = await client.get("/api/v1/users/email/admin@example.com")
    assert response.status_code == 200

    response = await client.get("/api/v1/users/username/ghost")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_username_and_email_conflict(client: AsyncClient) -> None:
    await client.post("/api/v1/users", json=USER)

    response = await client.post("/api/v1/users", json={**USER, "email": "other@example.com"})
    assert response.status_code == 409
    assert response.json()["message"] == "Username admin already exists"

    response = await client.post("/api/v1/users", json={**USER, "username": "other"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_user_password_and_email(client: AsyncClient, db_session: AsyncSession) -> None:
    created = (await client.post("/api/v1/users", json=USER)).json()

    response = await client.put(f"/api/v1/users/{created['id']}", json={"email": "bad"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email format"

    response = await client.put(f"/api/v1/users/{created['id']}", json={"password": "NewPass1", "status": False})
    assert response.status_code == 200
    assert response.json()["status"] is False

    user = (await db_session.execute(select(User).where(User.id == created["id"]))).scalar_one()
    assert password_matches("NewPass1", user.password_hash)


@pytest.mark.asyncio
async def test_password_longer_than_72_bytes_is_400(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users", json={**USER, "password": "x" * 100})
    assert response.status_code == 400
    assert response.json()["message"] == "Password must be at most 72 bytes"

    created = (await client.post("/api/v1/users", json=USER)).json()
    response = await client.put(f"/api/v1/users/{created['id']}", json={"password": "x" * 100})
    assert response.status_code == 400

    response = await client.put(f"/api/v1/users/{created['id']}", json={"email": "a@b.rs\n"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email format"
