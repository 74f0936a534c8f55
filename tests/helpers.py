"""Request helpers that create the rows most tests need."""

from typing import Optional

from httpx import AsyncClient


async def create_activity(client: AsyncClient, name: str = "Swimming", price: str = "10.00") -> dict:
    response = await client.post("/api/v1/activities", json={"name": name, "price": price})
    assert response.status_code == 201, response.text
    return response.json()


async def create_group(client: AsyncClient, name: str = "Butterflies", price: str = "120.00") -> dict:
    response = await client.post("/api/v1/groups", json={"name": name, "price": price})
    assert response.status_code == 201, response.text
    return response.json()


async def create_parent(client: AsyncClient, email: str = "ana.parent@example.com") -> dict:
    response = await client.post(
        "/api/v1/parent",
        json={"name": "Marko", "surname": "Jovic", "email": email, "address": "Bulevar 1"},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_account(
    client: AsyncClient, account_number: str = "160-0000000001-11", identification_number: str = "12345678"
) -> dict:
    response = await client.post(
        "/api/v1/kindergarten-account",
        json={
            "bank_name": "Banca Intesa",
            "account_number": account_number,
            "pib": "123456789",
            "identification_number": identification_number,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_kindergarten(
    client: AsyncClient, name: str = "Sunshine", email: str = "office@sunshine.rs", account_id: Optional[int] = None
) -> dict:
    if account_id is None:
        account_id = (await create_account(client))["id"]
    response = await client.post(
        "/api/v1/kindergarten",
        json={"name": name, "address": "Main 5", "email": email, "account_id": account_id},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_child(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Ana", "surname": "Jovic"}
    if "group_id" not in overrides:
        payload["group_id"] = (await create_group(client))["id"]
    if "parent_id" not in overrides:
        payload["parent_id"] = (await create_parent(client))["id"]
    if "kindergarten_id" not in overrides:
        payload["kindergarten_id"] = (await create_kindergarten(client))["id"]
    payload.update(overrides)
    response = await client.post("/api/v1/child", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
