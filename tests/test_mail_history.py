import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_mail_history_create_and_find(client: AsyncClient) -> None:
    for addresses, message in (("a@test.rs", "hello"), ("b@test.rs", "hello"), ("a@test.rs", "bye")):
        response = await client.post("/api/v1/mail-history", json={"addresses": addresses, "message": message})
        assert response.status_code == 201
        assert response.json()["created_date"]

    response = await client.get("/api/v1/mail-history/addresses", params={"addresses": "a@test.rs"})
    assert [m["message"] for m in response.json()] == ["hello", "bye"]

    response = await client.get("/api/v1/mail-history/message", params={"message": "hello"})
    assert [m["addresses"] for m in response.json()] == ["a@test.rs", "b@test.rs"]

    response = await client.get("/api/v1/mail-history", params={"size": 2})
    assert response.json()["totalElements"] == 3
    assert response.json()["totalPages"] == 2


@pytest.mark.asyncio
async def test_mail_history_is_append_only(client: AsyncClient) -> None:
    created = (await client.post("/api/v1/mail-history", json={"addresses": "a@test.rs"})).json()

    response = await client.get(f"/api/v1/mail-history/{created['id']}")
    assert response.status_code == 200

    response = await client.put(f"/api/v1/mail-history/{created['id']}", json={"message": "x"})
    assert response.status_code == 405

    response = await client.delete(f"/api/v1/mail-history/{created['id']}")
    assert response.status_code == 405

    response = await client.get("/api/v1/mail-history/404")
    assert response.status_code == 404
