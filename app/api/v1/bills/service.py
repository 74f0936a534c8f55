import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import NotFoundError, ValidationError
from app.core.models import Bill, Child, Kindergarten
from app.core.schemas import PageResponse, build_page
from app.db import crud

from .schemas import BillCreate, BillResponse, BillUpdate

logger = logging.getLogger(__name__)


async def get_bill_or_404(db: AsyncSession, bill_id: int) -> Bill:
    obj = await crud.get_by_id(db, Bill, bill_id)
    if not obj:
        raise NotFoundError(f"Bill with id {bill_id} not found")
    return obj


async def _ensure_kindergarten(db: AsyncSession, kindergarten_id: Optional[int]) -> None:
    if kindergarten_id is None:
        raise ValidationError("Kindergarten id must be provided")
    if not await crud.exists_by(db, Kindergarten, Kindergarten.id, kindergarten_id):
        raise NotFoundError(f"Kindergarten id {kindergarten_id} not found")


async def _ensure_child(db: AsyncSession, child_id: Optional[int]) -> None:
    if child_id is None:
        raise ValidationError("Child id must be provided")
    if not await crud.exists_by(db, Child, Child.id, child_id):
        raise NotFoundError(f"Child id {child_id} not found")


async def create_bill(db: AsyncSession, payload: BillCreate) -> BillResponse:
    await _ensure_kindergarten(db, payload.kindergarten_id)
    await _ensure_child(db, payload.child_id)
    obj = Bill(
        year=payload.year,
        month=payload.month.strip(),
        deadline=payload.deadline,
        bill_code=payload.bill_code,
        payment_sum=payload.payment_sum,
        kindergarten_id=payload.kindergarten_id,
        child_id=payload.child_id,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Created bill id=%s child_id=%s %s/%s", obj.id, obj.child_id, obj.month, obj.year)
    return BillResponse.model_validate(obj)


async def list_bills(db: AsyncSession, page: int, size: int) -> PageResponse[BillResponse]:
    rows, total = await crud.paginate(db, select(Bill).order_by(Bill.id), page, size)
    return build_page([BillResponse.model_validate(b) for b in rows], total, page, size)


async def get_bill(db: AsyncSession, bill_id: int) -> BillResponse:
    return BillResponse.model_validate(await get_bill_or_404(db, bill_id))


async def update_bill(db: AsyncSession, bill_id: int, payload: BillUpdate) -> BillResponse:
    obj = await get_bill_or_404(db, bill_id)
    data = payload.patch_data()

    if "kindergarten_id" in data:
        await _ensure_kindergarten(db, data["kindergarten_id"])
    if "child_id" in data:
        await _ensure_child(db, data["child_id"])
    if "month" in data:
        data["month"] = data["month"].strip()
    for field, value in data.items():
        setattr(obj, field, value)

    await db.commit()
    await db.refresh(obj)
    return BillResponse.model_validate(obj)


async def delete_bill(db: AsyncSession, bill_id: int) -> None:
    obj = await get_bill_or_404(db, bill_id)
    log_deletion("bill", obj)
    await db.delete(obj)
    await db.commit()
