"""Append-only mail log: create and read, never update or delete."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.models import MailHistory
from app.core.schemas import PageResponse, build_page
from app.db import crud

from .schemas import MailHistoryCreate, MailHistoryResponse

logger = logging.getLogger(__name__)


async def record_mail(db: AsyncSession, addresses: str, message: Optional[str]) -> MailHistoryResponse:
    obj = MailHistory(addresses=addresses, message=message)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Recorded mail history id=%s addresses=%s", obj.id, addresses)
    return MailHistoryResponse.model_validate(obj)


async def create_mail_history(db: AsyncSession, payload: MailHistoryCreate) -> MailHistoryResponse:
    return await record_mail(db, payload.addresses.strip(), payload.message)


async def list_mail_history(db: AsyncSession, page: int, size: int) -> PageResponse[MailHistoryResponse]:
    rows, total = await crud.paginate(db, select(MailHistory).order_by(MailHistory.id), page, size)
    return build_page([MailHistoryResponse.model_validate(m) for m in rows], total, page, size)


async def get_mail_history(db: AsyncSession, mail_id: int) -> MailHistoryResponse:
    obj = await crud.get_by_id(db, MailHistory, mail_id)
    if not obj:
        raise NotFoundError(f"Mail history with id {mail_id} not found")
    return MailHistoryResponse.model_validate(obj)


async def find_by_addresses(db: AsyncSession, addresses: str) -> List[MailHistoryResponse]:
    rows = await crud.find_all_by(db, MailHistory, MailHistory.addresses, addresses)
    return [MailHistoryResponse.model_validate(m) for m in rows]


async def find_by_message(db: AsyncSession, message: str) -> List[MailHistoryResponse]:
    rows = await crud.find_all_by(db, MailHistory, MailHistory.message, message)
    return [MailHistoryResponse.model_validate(m) for m in rows]
