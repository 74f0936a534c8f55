import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import Kindergarten, KindergartenAccount
from app.core.schemas import PageResponse, build_page
from app.core.validators import ensure_pib
from app.db import crud

from .schemas import KindergartenAccountCreate, KindergartenAccountResponse, KindergartenAccountUpdate

logger = logging.getLogger(__name__)


async def get_account_or_404(db: AsyncSession, account_id: int) -> KindergartenAccount:
    obj = await crud.get_by_id(db, KindergartenAccount, account_id)
    if not obj:
        raise NotFoundError(f"Kindergarten account with id = {account_id} not found")
    return obj


async def _ensure_kindergarten(db: AsyncSession, kindergarten_id: Optional[int]) -> None:
    if kindergarten_id is None:
        return
    if not await crud.exists_by(db, Kindergarten, Kindergarten.id, kindergarten_id):
        raise NotFoundError(f"Kindergarten with id {kindergarten_id} not found")


async def create_account(db: AsyncSession, payload: KindergartenAccountCreate) -> KindergartenAccountResponse:
    await _ensure_kindergarten(db, payload.kindergarten_id)
    if await crud.exists_by(db, KindergartenAccount, KindergartenAccount.account_number, payload.account_number):
        raise ConflictError("Account number already exists")
    if await crud.exists_by(
        db, KindergartenAccount, KindergartenAccount.identification_number, payload.identification_number
    ):
        raise ConflictError("Identification number already exists")
    try:
        obj = KindergartenAccount(
            bank_name=payload.bank_name.strip(),
            account_number=payload.account_number,
            pib=payload.pib,
            identification_number=payload.identification_number,
            activity_code=payload.activity_code,
            kindergarten_id=payload.kindergarten_id,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected kindergarten account number=%s", payload.account_number)
        raise ConflictError("Account number or identification number already exists")
    logger.info("Created kindergarten account id=%s", obj.id)
    return KindergartenAccountResponse.model_validate(obj)


async def list_accounts(db: AsyncSession, page: int, size: int) -> PageResponse[KindergartenAccountResponse]:
    stmt = select(KindergartenAccount).order_by(KindergartenAccount.id)
    rows, total = await crud.paginate(db, stmt, page, size)
    return build_page([KindergartenAccountResponse.model_validate(a) for a in rows], total, page, size)


async def get_account(db: AsyncSession, account_id: int) -> KindergartenAccountResponse:
    return KindergartenAccountResponse.model_validate(await get_account_or_404(db, account_id))


async def get_account_by_number(db: AsyncSession, account_number: str) -> KindergartenAccountResponse:
    obj = await crud.find_one_by(db, KindergartenAccount, KindergartenAccount.account_number, account_number)
    if not obj:
        raise NotFoundError(f"Account number {account_number} does not exist")
    return KindergartenAccountResponse.model_validate(obj)


async def get_account_by_identification_number(
    db: AsyncSession, identification_number: str
) -> KindergartenAccountResponse:
    obj = await crud.find_one_by(
        db, KindergartenAccount, KindergartenAccount.identification_number, identification_number
    )
    if not obj:
        raise NotFoundError(f"Identification number {identification_number} does not exist")
    return KindergartenAccountResponse.model_validate(obj)


async def update_account(
    db: AsyncSession, account_id: int, payload: KindergartenAccountUpdate
) -> KindergartenAccountResponse:
    obj = await get_account_or_404(db, account_id)
    data = payload.patch_data()

    if "kindergarten_id" in data:
        await _ensure_kindergarten(db, data["kindergarten_id"])
        obj.kindergarten_id = data["kindergarten_id"]
    if "account_number" in data:
        number = data["account_number"]
        if number != obj.account_number and await crud.exists_by(
            db, KindergartenAccount, KindergartenAccount.account_number, number, exclude_id=obj.id
        ):
            raise ConflictError("Account number already exists")
        obj.account_number = number
    if "identification_number" in data:
        ident = data["identification_number"]
        if ident != obj.identification_number and await crud.exists_by(
            db, KindergartenAccount, KindergartenAccount.identification_number, ident, exclude_id=obj.id
        ):
            raise ConflictError("Identification number already exists")
        obj.identification_number = ident
    if "pib" in data:
        obj.pib = ensure_pib(data["pib"])
    if "bank_name" in data:
        obj.bank_name = data["bank_name"].strip()
    if "activity_code" in data:
        obj.activity_code = data["activity_code"]

    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Account number or identification number already exists")
    return KindergartenAccountResponse.model_validate(obj)


async def delete_account(db: AsyncSession, account_id: int) -> None:
    obj = await get_account_or_404(db, account_id)
    log_deletion("kindergarten_account", obj)
    await db.delete(obj)
    await db.commit()
