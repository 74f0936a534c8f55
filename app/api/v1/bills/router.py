from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import BillCreate, BillResponse, BillUpdate
from . import service

router = APIRouter(prefix="/api/v1/bill", tags=["bills"])


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(
    payload: BillCreate,
    db: AsyncSession = Depends(get_db),
) -> BillResponse:
    try:
        return await service.create_bill(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[BillResponse])
async def list_bills(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_bills(db, page, size)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(
    bill_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> BillResponse:
    try:
        return await service.get_bill(db, bill_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{bill_id}", response_model=BillResponse)
async def update_bill(
    payload: BillUpdate,
    bill_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> BillResponse:
    try:
        return await service.update_bill(db, bill_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(
    bill_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_bill(db, bill_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
