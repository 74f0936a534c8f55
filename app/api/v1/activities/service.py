import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import Activity
from app.core.schemas import PageResponse, build_page
from app.db import crud

from .schemas import ActivityCreate, ActivityResponse, ActivityUpdate

logger = logging.getLogger(__name__)


def _to_response(a: Activity) -> ActivityResponse:
    return ActivityResponse.model_validate(a)


async def get_activity_or_404(db: AsyncSession, activity_id: int) -> Activity:
    obj = await crud.get_by_id(db, Activity, activity_id)
    if not obj:
        raise NotFoundError(f"Activity with id = {activity_id} not found")
    return obj


async def create_activity(db: AsyncSession, payload: ActivityCreate) -> ActivityResponse:
    name = payload.name.strip()
    if await crud.exists_by(db, Activity, Activity.name, name):
        raise ConflictError(f"Activity {name} already exists")
    try:
        obj = Activity(name=name, price=payload.price, status=payload.status)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected duplicate activity name=%s", name)
        raise ConflictError(f"Activity {name} already exists")
    logger.info("Created activity id=%s name=%s", obj.id, obj.name)
    return _to_response(obj)


async def list_activities(db: AsyncSession, page: int, size: int) -> PageResponse[ActivityResponse]:
    rows, total = await crud.paginate(db, select(Activity).order_by(Activity.id), page, size)
    return build_page([_to_response(a) for a in rows], total, page, size)


async def get_activity(db: AsyncSession, activity_id: int) -> ActivityResponse:
    return _to_response(await get_activity_or_404(db, activity_id))


async def get_activity_by_name(db: AsyncSession, name: str) -> ActivityResponse:
    obj = await crud.find_one_by(db, Activity, Activity.name, name)
    if not obj:
        raise NotFoundError(f"Activity with name = {name} not found")
    return _to_response(obj)


async def update_activity(db: AsyncSession, activity_id: int, payload: ActivityUpdate) -> ActivityResponse:
    obj = await get_activity_or_404(db, activity_id)
    data = payload.patch_data()

    if "name" in data:
        name = data["name"].strip()
        if name != obj.name and await crud.exists_by(db, Activity, Activity.name, name, exclude_id=obj.id):
            raise ConflictError(f"Activity {name} already exists")
        obj.name = name
    if "price" in data:
        obj.price = data["price"]
    if "status" in data:
        obj.status = data["status"]

    name = obj.name
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Activity {name} already exists")
    return _to_response(obj)


async def delete_activity(db: AsyncSession, activity_id: int) -> None:
    obj = await get_activity_or_404(db, activity_id)
    log_deletion("activity", obj)
    try:
        await db.delete(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Activity with id = {activity_id} is still in use")
