from datetime import datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.kindergartens import service as kindergarten_service
from app.core.associations import ASSOCIATION_CONFLICT
from app.core.exceptions import ConflictError
from helpers import create_account, create_activity, create_group, create_kindergarten


def _ids(items) -> list:
    return [item["id"] for item in items]


@pytest.mark.asyncio
async def test_create_kindergarten_and_finders(client: AsyncClient) -> None:
    created = await create_kindergarten(client, "Sunshine", "office@sunshine.rs")
    assert created["groups"] == []
    assert created["activities"] == []
    assert created["account_id"] is not None

    response = await client.get("/api/v1/kindergarten/name/Sunshine")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = await client.get("/api/v1/kindergarten/email/office@sunshine.rs")
    assert response.status_code == 200

    response = await client.get("/api/v1/kindergarten/name/Moonlight")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_account_is_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/kindergarten",
        json={"name": "Sunshine", "address": "Main 5", "email": "office@sunshine.rs", "account_id": 77},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Kindergarten account with id = 77 not found"


@pytest.mark.asyncio
async def test_missing_account_is_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/kindergarten",
        json={"name": "Sunshine", "address": "Main 5", "email": "office@sunshine.rs"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Account id must be provided"


@pytest.mark.asyncio
async def test_duplicate_name_conflicts(client: AsyncClient) -> None:
    account = await create_account(client)
    await create_kindergarten(client, "Sunshine", "a@sunshine.rs", account_id=account["id"])
    response = await client.post(
        "/api/v1/kindergarten",
        json={"name": "Sunshine", "address": "Other 1", "email": "b@sunshine.rs", "account_id": account["id"]},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_kindergarten(client: AsyncClient) -> None:
    created = await create_kindergarten(client)
    kid = created["id"]

    response = await client.put(f"/api/v1/kindergarten/{kid}", json={"phone_number": "011-123"})
    assert response.json()["phone_number"] == "011-123"

    response = await client.put(f"/api/v1/kindergarten/{kid}", json={"phone_number": None})
    assert response.status_code == 200
    assert response.json()["phone_number"] is None

    response = await client.put(f"/api/v1/kindergarten/{kid}", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email format"

    response = await client.put(f"/api/v1/kindergarten/{kid}", json={"account_id": 999})
    assert response.status_code == 404

    response = await client.get(f"/api/v1/kindergarten/{kid}")
    assert response.json()["account_id"] == created["account_id"]


@pytest.mark.asyncio
async def test_add_groups_is_a_union(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    a, b, c = [(await create_group(client, name))["id"] for name in ("A", "B", "C")]

    response = await client.post(f"/api/v1/kindergarten/{kid}/groups", json=[{"id": a}, {"id": b}])
    assert response.status_code == 200
    assert _ids(response.json()["groups"]) == [a, b]

    response = await client.post(f"/api/v1/kindergarten/{kid}/groups", json=[{"id": b}, {"id": c}])
    assert response.status_code == 200
    assert _ids(response.json()["groups"]) == [a, b, c]


@pytest.mark.asyncio
async def test_remove_and_clear_groups(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    a, b, c = [(await create_group(client, name))["id"] for name in ("A", "B", "C")]
    await client.post(f"/api/v1/kindergarten/{kid}/groups", json=[{"id": a}, {"id": b}])

    response = await client.request("DELETE", f"/api/v1/kindergarten/{kid}/groups", json=[{"id": a}])
    assert response.status_code == 200
    assert _ids(response.json()["groups"]) == [b]

    # removing a group that is not associated is a no-op
    response = await client.request("DELETE", f"/api/v1/kindergarten/{kid}/groups", json=[{"id": c}])
    assert response.status_code == 200
    assert _ids(response.json()["groups"]) == [b]

    response = await client.delete(f"/api/v1/kindergarten/{kid}/groups/clear")
    assert response.status_code == 200
    assert response.json()["groups"] == []


@pytest.mark.asyncio
async def test_unknown_activity_leaves_set_unchanged(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    swim = (await create_activity(client, "Swimming"))["id"]
    await client.post(f"/api/v1/kindergarten/{kid}/activities", json=[{"id": swim}])
    chess = (await create_activity(client, "Chess"))["id"]

    response = await client.post(f"/api/v1/kindergarten/{kid}/activities", json=[{"id": chess}, {"id": 99}])
    assert response.status_code == 404
    assert response.json()["message"] == "Activity with id 99 not found"

    response = await client.get(f"/api/v1/kindergarten/{kid}")
    assert _ids(response.json()["activities"]) == [swim]


@pytest.mark.asyncio
async def test_activities_add_remove_clear(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    swim = (await create_activity(client, "Swimming"))["id"]
    chess = (await create_activity(client, "Chess"))["id"]

    response = await client.post(f"/api/v1/kindergarten/{kid}/activities", json=[{"id": swim}, {"id": chess}])
    assert _ids(response.json()["activities"]) == [swim, chess]

    response = await client.request("DELETE", f"/api/v1/kindergarten/{kid}/activities", json=[{"id": swim}])
    assert _ids(response.json()["activities"]) == [chess]

    response = await client.delete(f"/api/v1/kindergarten/{kid}/activities/clear")
    assert response.json()["activities"] == []


@pytest.mark.asyncio
async def test_association_on_unknown_kindergarten_is_404(client: AsyncClient) -> None:
    response = await client.post("/api/v1/kindergarten/5/groups", json=[{"id": 1}])
    assert response.status_code == 404

    response = await client.delete("/api/v1/kindergarten/5/activities/clear")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_association_body_ids_must_be_positive(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    response = await client.post(f"/api/v1/kindergarten/{kid}/groups", json=[{"id": 0}])
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_kindergarten(client: AsyncClient) -> None:
    kid = (await create_kindergarten(client))["id"]
    response = await client.delete(f"/api/v1/kindergarten/{kid}")
    assert response.status_code == 204
    response = await client.get(f"/api/v1/kindergarten/{kid}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_group_changes_bump_updated_at(client: AsyncClient) -> None:
    created = await create_kindergarten(client)
    kid = created["id"]
    group = (await create_group(client, "A"))["id"]

    response = await client.post(f"/api/v1/kindergarten/{kid}/groups", json=[{"id": group}])
    added = response.json()
    assert datetime.fromisoformat(added["updated_at"]) > datetime.fromisoformat(created["updated_at"])

    response = await client.request("DELETE", f"/api/v1/kindergarten/{kid}/groups", json=[{"id": group}])
    removed = response.json()
    assert datetime.fromisoformat(removed["updated_at"]) > datetime.fromisoformat(added["updated_at"])

    response = await client.delete(f"/api/v1/kindergarten/{kid}/activities/clear")
    assert datetime.fromisoformat(response.json()["updated_at"]) > datetime.fromisoformat(removed["updated_at"])


@pytest.mark.asyncio
async def test_join_row_conflict_reports_association_message(
    client: AsyncClient, db_session: AsyncSession, monkeypatch
) -> None:
    kid = (await create_kindergarten(client))["id"]
    group = (await create_group(client, "A"))["id"]

    async def concurrent_insert() -> None:
        raise IntegrityError("INSERT INTO kindergarten_groups", {}, Exception("UNIQUE constraint failed"))

    # another request committed the same join row first
    monkeypatch.setattr(db_session, "commit", concurrent_insert)
    with pytest.raises(ConflictError) as exc:
        await kindergarten_service.add_groups(db_session, kid, [group])
    assert exc.value.status_code == 409
    assert exc.value.message == ASSOCIATION_CONFLICT
    monkeypatch.undo()

    response = await client.get(f"/api/v1/kindergarten/{kid}")
    assert response.json()["groups"] == []
