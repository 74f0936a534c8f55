from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import KindergartenAccountCreate, KindergartenAccountResponse, KindergartenAccountUpdate
from . import service

router = APIRouter(prefix="/api/v1/kindergarten-account", tags=["kindergarten-accounts"])


@router.post("", response_model=KindergartenAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: KindergartenAccountCreate,
    db: AsyncSession = Depends(get_db),
) -> KindergartenAccountResponse:
    try:
        return await service.create_account(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[KindergartenAccountResponse])
async def list_accounts(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_accounts(db, page, size)


@router.get("/account/{account_number}", response_model=KindergartenAccountResponse)
async def get_account_by_number(
    account_number: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenAccountResponse:
    try:
        return await service.get_account_by_number(db, account_number)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/identification/{identification_number}", response_model=KindergartenAccountResponse)
async def get_account_by_identification_number(
    identification_number: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenAccountResponse:
    try:
        return await service.get_account_by_identification_number(db, identification_number)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{account_id}", response_model=KindergartenAccountResponse)
async def get_account(
    account_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenAccountResponse:
    try:
        return await service.get_account(db, account_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{account_id}", response_model=KindergartenAccountResponse)
async def update_account(
    payload: KindergartenAccountUpdate,
    account_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenAccountResponse:
    try:
        return await service.update_account(db, account_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_account(db, account_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
