import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import Parent
from app.core.schemas import PageResponse, build_page
from app.core.validators import ensure_email
from app.db import crud

from .schemas import ParentCreate, ParentResponse, ParentUpdate

logger = logging.getLogger(__name__)


async def get_parent_or_404(db: AsyncSession, parent_id: int) -> Parent:
    obj = await crud.get_by_id(db, Parent, parent_id)
    if not obj:
        raise NotFoundError(f"Parent with id {parent_id} not found")
    return obj


async def create_parent(db: AsyncSession, payload: ParentCreate) -> ParentResponse:
    email = str(payload.email)
    if await crud.exists_by(db, Parent, Parent.email, email):
        raise ConflictError(f"Email {email} already exists")
    try:
        obj = Parent(
            name=payload.name.strip(),
            surname=payload.surname.strip(),
            email=email,
            address=payload.address.strip(),
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected duplicate parent email=%s", email)
        raise ConflictError(f"Email {email} already exists")
    logger.info("Created parent id=%s", obj.id)
    return ParentResponse.model_validate(obj)


async def list_parents(db: AsyncSession, page: int, size: int) -> PageResponse[ParentResponse]:
    rows, total = await crud.paginate(db, select(Parent).order_by(Parent.id), page, size)
    return build_page([ParentResponse.model_validate(p) for p in rows], total, page, size)


async def get_parent(db: AsyncSession, parent_id: int) -> ParentResponse:
    return ParentResponse.model_validate(await get_parent_or_404(db, parent_id))


async def get_parent_by_email(db: AsyncSession, email: str) -> ParentResponse:
    obj = await crud.find_one_by(db, Parent, Parent.email, email)
    if not obj:
        raise NotFoundError(f"Parent with email {email} not found")
    return ParentResponse.model_validate(obj)


async def update_parent(db: AsyncSession, parent_id: int, payload: ParentUpdate) -> ParentResponse:
    obj = await get_parent_or_404(db, parent_id)
    data = payload.patch_data()

    if "email" in data:
        email = ensure_email(data["email"])
        if email != obj.email and await crud.exists_by(db, Parent, Parent.email, email, exclude_id=obj.id):
            raise ConflictError(f"Email {email} already exists")
        obj.email = email
    for field in ("name", "surname", "address"):
        if field in data:
            setattr(obj, field, data[field].strip())

    email = obj.email
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Email {email} already exists")
    return ParentResponse.model_validate(obj)


async def delete_parent(db: AsyncSession, parent_id: int) -> None:
    obj = await get_parent_or_404(db, parent_id)
    log_deletion("parent", obj)
    try:
        await db.delete(obj)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Parent with id {parent_id} still has children")
