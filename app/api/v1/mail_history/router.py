from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import MailHistoryCreate, MailHistoryResponse
from . import service

router = APIRouter(prefix="/api/v1/mail-history", tags=["mail-history"])


@router.post("", response_model=MailHistoryResponse, status_code=status.HTTP_201_CREATED)
async def create_mail_history(
    payload: MailHistoryCreate,
    db: AsyncSession = Depends(get_db),
) -> MailHistoryResponse:
    return await service.create_mail_history(db, payload)


@router.get("", response_model=PageResponse[MailHistoryResponse])
async def list_mail_history(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_mail_history(db, page, size)


@router.get("/addresses", response_model=List[MailHistoryResponse])
async def find_by_addresses(
    addresses: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> List[MailHistoryResponse]:
    return await service.find_by_addresses(db, addresses)


@router.get("/message", response_model=List[MailHistoryResponse])
async def find_by_message(
    message: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> List[MailHistoryResponse]:
    return await service.find_by_message(db, message)


@router.get("/{mail_id}", response_model=MailHistoryResponse)
async def get_mail_history(
    mail_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> MailHistoryResponse:
    try:
        return await service.get_mail_history(db, mail_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
