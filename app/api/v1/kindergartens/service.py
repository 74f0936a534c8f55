import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.activities.schemas import ActivitySummary
from app.api.v1.groups.schemas import GroupSummary
from app.core.associations import ASSOCIATION_CONFLICT, add_related, remove_related, resolve_related, touch
from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.models import Activity, Group, Kindergarten, KindergartenAccount
from app.core.schemas import PageResponse, build_page
from app.core.validators import ensure_email
from app.db import crud

from .schemas import KindergartenCreate, KindergartenResponse, KindergartenUpdate

logger = logging.getLogger(__name__)


def _to_response(k: Kindergarten) -> KindergartenResponse:
    return KindergartenResponse(
        id=k.id,
        name=k.name,
        address=k.address,
        phone_number=k.phone_number,
        email=k.email,
        logo=k.logo,
        account_id=k.account_id,
        groups=[GroupSummary.model_validate(g) for g in sorted(k.groups, key=lambda g: g.id)],
        activities=[ActivitySummary.model_validate(a) for a in sorted(k.activities, key=lambda a: a.id)],
        created_at=k.created_at,
        updated_at=k.updated_at,
    )


async def get_kindergarten_or_404(db: AsyncSession, kindergarten_id: int) -> Kindergarten:
    obj = await crud.get_by_id(db, Kindergarten, kindergarten_id)
    if not obj:
        raise NotFoundError(f"Kindergarten with id = {kindergarten_id} not found")
    return obj


async def _ensure_account(db: AsyncSession, account_id: Optional[int]) -> None:
    if account_id is None:
        raise ValidationError("Account id must be provided")
    if not await crud.exists_by(db, KindergartenAccount, KindergartenAccount.id, account_id):
        raise NotFoundError(f"Kindergarten account with id = {account_id} not found")


async def _save(
    db: AsyncSession, obj: Kindergarten, conflict_message: str = "Kindergarten name or email already exists"
) -> KindergartenResponse:
    """Commit pending changes and return the reloaded kindergarten with its sets."""
    name, email = obj.name, obj.email
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected kindergarten write name=%s email=%s", name, email)
        raise ConflictError(conflict_message)
    return _to_response(await get_kindergarten_or_404(db, obj.id))


async def create_kindergarten(db: AsyncSession, payload: KindergartenCreate) -> KindergartenResponse:
    await _ensure_account(db, payload.account_id)
    name = payload.name.strip()
    email = str(payload.email)
    if await crud.exists_by(db, Kindergarten, Kindergarten.name, name):
        raise ConflictError(f"Kindergarten with name {name} already exists")
    if await crud.exists_by(db, Kindergarten, Kindergarten.email, email):
        raise ConflictError(f"Kindergarten with email {email} already exists")
    obj = Kindergarten(
        name=name,
        address=payload.address.strip(),
        phone_number=payload.phone_number,
        email=email,
        logo=payload.logo,
        account_id=payload.account_id,
    )
    db.add(obj)
    result = await _save(db, obj)
    logger.info("Created kindergarten id=%s name=%s", result.id, result.name)
    return result


async def list_kindergartens(db: AsyncSession, page: int, size: int) -> PageResponse[KindergartenResponse]:
    rows, total = await crud.paginate(db, select(Kindergarten).order_by(Kindergarten.id), page, size)
    return build_page([_to_response(k) for k in rows], total, page, size)


async def get_kindergarten(db: AsyncSession, kindergarten_id: int) -> KindergartenResponse:
    return _to_response(await get_kindergarten_or_404(db, kindergarten_id))


async def get_kindergarten_by_name(db: AsyncSession, name: str) -> KindergartenResponse:
    obj = await crud.find_one_by(db, Kindergarten, Kindergarten.name, name)
    if not obj:
        raise NotFoundError(f"Kindergarten with name {name} not found")
    return _to_response(obj)


async def get_kindergarten_by_email(db: AsyncSession, email: str) -> KindergartenResponse:
    obj = await crud.find_one_by(db, Kindergarten, Kindergarten.email, email)
    if not obj:
        raise NotFoundError(f"Kindergarten with email {email} not found")
    return _to_response(obj)


async def update_kindergarten(
    db: AsyncSession, kindergarten_id: int, payload: KindergartenUpdate
) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    data = payload.patch_data()

    if "account_id" in data:
        await _ensure_account(db, data["account_id"])
        obj.account_id = data["account_id"]
    if "name" in data:
        name = data["name"].strip()
        if name != obj.name and await crud.exists_by(db, Kindergarten, Kindergarten.name, name, exclude_id=obj.id):
            raise ConflictError("Kindergarten name already exists")
        obj.name = name
    if "email" in data:
        email = ensure_email(data["email"])
        if email != obj.email and await crud.exists_by(
            db, Kindergarten, Kindergarten.email, email, exclude_id=obj.id
        ):
            raise ConflictError("Kindergarten email already exists")
        obj.email = email
    if "address" in data:
        obj.address = data["address"].strip()
    # nullable columns: an explicit null clears them
    if "phone_number" in data:
        obj.phone_number = data["phone_number"]
    if "logo" in data:
        obj.logo = data["logo"]

    return await _save(db, obj)


async def delete_kindergarten(db: AsyncSession, kindergarten_id: int) -> None:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    log_deletion("kindergarten", obj)
    try:
        await db.delete(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Kindergarten with id = {kindergarten_id} still has children or bills")


async def add_groups(db: AsyncSession, kindergarten_id: int, group_ids: Iterable[int]) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    groups = await resolve_related(db, Group, group_ids, "Group")
    add_related(obj.groups, groups)
    touch(obj)
    logger.info("Kindergarten id=%s: added groups %s", kindergarten_id, [g.id for g in groups])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def remove_groups(db: AsyncSession, kindergarten_id: int, group_ids: Iterable[int]) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    groups = await resolve_related(db, Group, group_ids, "Group")
    remove_related(obj.groups, groups)
    touch(obj)
    logger.info("Kindergarten id=%s: removed groups %s", kindergarten_id, [g.id for g in groups])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def clear_groups(db: AsyncSession, kindergarten_id: int) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    obj.groups.clear()
    touch(obj)
    logger.info("Kindergarten id=%s: cleared groups", kindergarten_id)
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def add_activities(
    db: AsyncSession, kindergarten_id: int, activity_ids: Iterable[int]
) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    activities = await resolve_related(db, Activity, activity_ids, "Activity")
    add_related(obj.activities, activities)
    touch(obj)
    logger.info("Kindergarten id=%s: added activities %s", kindergarten_id, [a.id for a in activities])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def remove_activities(
    db: AsyncSession, kindergarten_id: int, activity_ids: Iterable[int]
) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    activities = await resolve_related(db, Activity, activity_ids, "Activity")
    remove_related(obj.activities, activities)
    touch(obj)
    logger.info("Kindergarten id=%s: removed activities %s", kindergarten_id, [a.id for a in activities])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def clear_activities(db: AsyncSession, kindergarten_id: int) -> KindergartenResponse:
    obj = await get_kindergarten_or_404(db, kindergarten_id)
    obj.activities.clear()
    touch(obj)
    logger.info("Kindergarten id=%s: cleared activities", kindergarten_id)
    return await _save(db, obj, ASSOCIATION_CONFLICT)
