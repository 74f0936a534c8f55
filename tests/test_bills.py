from decimal import Decimal

import pytest
from httpx import AsyncClient

from helpers import create_child


@pytest.mark.asyncio
async def test_bill_crud(client: AsyncClient) -> None:
    child = await create_child(client)
    payload = {
        "year": 2024,
        "month": "September",
        "deadline": "2024-10-15",
        "bill_code": "SEP-24-1",
        "payment_sum": "130.50",
        "kindergarten_id": child["kindergarten_id"],
        "child_id": child["id"],
    }
    response = await client.post("/api/v1/bill", json=payload)
    assert response.status_code == 201
    bill = response.json()
    assert Decimal(bill["payment_sum"]) == Decimal("130.50")

    response = await client.put(f"/api/v1/bill/{bill['id']}", json={"bill_code": None, "payment_sum": "100"})
    assert response.status_code == 200
    data = response.json()
    assert data["bill_code"] is None
    assert Decimal(data["payment_sum"]) == Decimal("100")
    assert data["month"] == "September"

    response = await client.delete(f"/api/v1/bill/{bill['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/v1/bill/{bill['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bill_references(client: AsyncClient) -> None:
    child = await create_child(client)

    response = await client.post("/api/v1/bill", json={"year": 2024, "month": "May", "child_id": child["id"]})
    assert response.status_code == 400
    assert response.json()["message"] == "Kindergarten id must be provided"

    response = await client.post(
        "/api/v1/bill",
        json={"year": 2024, "month": "May", "kindergarten_id": child["kindergarten_id"], "child_id": 31},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Child id 31 not found"
