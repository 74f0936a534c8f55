import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import Group
from app.core.schemas import PageResponse, build_page
from app.db import crud

from .schemas import GroupCreate, GroupResponse, GroupUpdate

logger = logging.getLogger(__name__)


async def get_group_or_404(db: AsyncSession, group_id: int) -> Group:
    obj = await crud.get_by_id(db, Group, group_id)
    if not obj:
        raise NotFoundError(f"Group with id {group_id} not found")
    return obj


async def create_group(db: AsyncSession, payload: GroupCreate) -> GroupResponse:
    name = payload.name.strip()
    if await crud.exists_by(db, Group, Group.name, name):
        raise ConflictError(f"Group with name {name} already exists")
    try:
        obj = Group(name=name, price=payload.price, discount=payload.discount, active=payload.active)
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected duplicate group name=%s", name)
        raise ConflictError(f"Group with name {name} already exists")
    logger.info("Created group id=%s name=%s", obj.id, obj.name)
    return GroupResponse.model_validate(obj)


async def list_groups(db: AsyncSession, page: int, size: int) -> PageResponse[GroupResponse]:
    rows, total = await crud.paginate(db, select(Group).order_by(Group.id), page, size)
    return build_page([GroupResponse.model_validate(g) for g in rows], total, page, size)


async def get_group(db: AsyncSession, group_id: int) -> GroupResponse:
    return GroupResponse.model_validate(await get_group_or_404(db, group_id))


async def get_group_by_name(db: AsyncSession, name: str) -> GroupResponse:
    obj = await crud.find_one_by(db, Group, Group.name, name)
    if not obj:
        raise NotFoundError(f"Group with name {name} not found")
    return GroupResponse.model_validate(obj)


async def update_group(db: AsyncSession, group_id: int, payload: GroupUpdate) -> GroupResponse:
    obj = await get_group_or_404(db, group_id)
    data = payload.patch_data()

    if "name" in data:
        name = data["name"].strip()
        if name != obj.name and await crud.exists_by(db, Group, Group.name, name, exclude_id=obj.id):
            raise ConflictError(f"Group with name {name} already exists")
        obj.name = name
    for field in ("price", "discount", "active"):
        if field in data:
            setattr(obj, field, data[field])

    name = obj.name
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Group with name {name} already exists")
    return GroupResponse.model_validate(obj)


async def delete_group(db: AsyncSession, group_id: int) -> None:
    obj = await get_group_or_404(db, group_id)
    log_deletion("group", obj)
    try:
        await db.delete(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Group with id {group_id} is still assigned to children")
