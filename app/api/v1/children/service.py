import logging
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.activities.schemas import ActivitySummary
from app.core.associations import ASSOCIATION_CONFLICT, add_related, remove_related, resolve_related, touch
from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.models import Activity, Child, Group, Kindergarten, Parent
from app.core.schemas import PageResponse, build_page
from app.db import crud

from .schemas import ChildCreate, ChildResponse, ChildUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CHILD = "Child already exists with same name, surname and parent"

# field -> (model, label) for the three required references
_REFERENCES = {
    "group_id": (Group, "Group"),
    "parent_id": (Parent, "Parent"),
    "kindergarten_id": (Kindergarten, "Kindergarten"),
}


def _to_response(c: Child) -> ChildResponse:
    return ChildResponse(
        id=c.id,
        name=c.name,
        surname=c.surname,
        sibling_order=c.sibling_order,
        birthday=c.birthday,
        status=c.status,
        group_id=c.group_id,
        parent_id=c.parent_id,
        kindergarten_id=c.kindergarten_id,
        activities=[ActivitySummary.model_validate(a) for a in sorted(c.activities, key=lambda a: a.id)],
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


async def get_child_or_404(db: AsyncSession, child_id: int) -> Child:
    obj = await crud.get_by_id(db, Child, child_id)
    if not obj:
        raise NotFoundError(f"Child with id {child_id} not found")
    return obj


async def _ensure_reference(db: AsyncSession, field: str, value: Optional[int]) -> None:
    model, label = _REFERENCES[field]
    if value is None:
        raise ValidationError(f"{label} id must be provided")
    if not await crud.exists_by(db, model, model.id, value):
        raise NotFoundError(f"{label} id {value} not found")


async def _duplicate_exists(
    db: AsyncSession, name: str, surname: str, parent_id: int, exclude_id: Optional[int] = None
) -> bool:
    stmt = select(Child.id).where(
        func.lower(Child.name) == name.lower(),
        func.lower(Child.surname) == surname.lower(),
        Child.parent_id == parent_id,
    )
    if exclude_id is not None:
        stmt = stmt.where(Child.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def _save(db: AsyncSession, obj: Child, conflict_message: str = DUPLICATE_CHILD) -> ChildResponse:
    triple = (obj.name, obj.surname, obj.parent_id)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected child write name=%s surname=%s parent_id=%s", *triple)
        raise ConflictError(conflict_message)
    return _to_response(await get_child_or_404(db, obj.id))


async def create_child(db: AsyncSession, payload: ChildCreate) -> ChildResponse:
    for field in ("group_id", "kindergarten_id", "parent_id"):
        await _ensure_reference(db, field, getattr(payload, field))
    name = payload.name.strip()
    surname = payload.surname.strip()
    if await _duplicate_exists(db, name, surname, payload.parent_id):
        raise ConflictError(DUPLICATE_CHILD)
    obj = Child(
        name=name,
        surname=surname,
        sibling_order=payload.sibling_order,
        birthday=payload.birthday,
        status=payload.status,
        group_id=payload.group_id,
        parent_id=payload.parent_id,
        kindergarten_id=payload.kindergarten_id,
    )
    db.add(obj)
    result = await _save(db, obj)
    logger.info("Created child id=%s", result.id)
    return result


async def list_children(db: AsyncSession, page: int, size: int) -> PageResponse[ChildResponse]:
    rows, total = await crud.paginate(db, select(Child).order_by(Child.id), page, size)
    return build_page([_to_response(c) for c in rows], total, page, size)


async def get_child(db: AsyncSession, child_id: int) -> ChildResponse:
    return _to_response(await get_child_or_404(db, child_id))


async def update_child(db: AsyncSession, child_id: int, payload: ChildUpdate) -> ChildResponse:
    obj = await get_child_or_404(db, child_id)
    data: Dict[str, Any] = payload.patch_data()

    for field in _REFERENCES:
        if field in data:
            await _ensure_reference(db, field, data[field])
    for field in ("name", "surname"):
        if field in data:
            data[field] = data[field].strip()

    if any(f in data for f in ("name", "surname", "parent_id")):
        name = data.get("name", obj.name)
        surname = data.get("surname", obj.surname)
        parent_id = data.get("parent_id", obj.parent_id)
        if await _duplicate_exists(db, name, surname, parent_id, exclude_id=obj.id):
            raise ConflictError(DUPLICATE_CHILD)

    for field, value in data.items():
        setattr(obj, field, value)
    return await _save(db, obj)


async def delete_child(db: AsyncSession, child_id: int) -> None:
    obj = await get_child_or_404(db, child_id)
    log_deletion("child", obj)
    try:
        await db.delete(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Child with id {child_id} still has bills")


async def add_activities(db: AsyncSession, child_id: int, activity_ids: Iterable[int]) -> ChildResponse:
    obj = await get_child_or_404(db, child_id)
    activities = await resolve_related(db, Activity, activity_ids, "Activity")
    add_related(obj.activities, activities)
    touch(obj)
    logger.info("Child id=%s: added activities %s", child_id, [a.id for a in activities])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def remove_activities(db: AsyncSession, child_id: int, activity_ids: Iterable[int]) -> ChildResponse:
    obj = await get_child_or_404(db, child_id)
    activities = await resolve_related(db, Activity, activity_ids, "Activity")
    remove_related(obj.activities, activities)
    touch(obj)
    logger.info("Child id=%s: removed activities %s", child_id, [a.id for a in activities])
    return await _save(db, obj, ASSOCIATION_CONFLICT)


async def clear_activities(db: AsyncSession, child_id: int) -> ChildResponse:
    obj = await get_child_or_404(db, child_id)
    obj.activities.clear()
    touch(obj)
    logger.info("Child id=%s: cleared activities", child_id)
    return await _save(db, obj, ASSOCIATION_CONFLICT)
