from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import ParentCreate, ParentResponse, ParentUpdate
from . import service

router = APIRouter(prefix="/api/v1/parent", tags=["parents"])


@router.post("", response_model=ParentResponse, status_code=status.HTTP_201_CREATED)
async def create_parent(
    payload: ParentCreate,
    db: AsyncSession = Depends(get_db),
) -> ParentResponse:
    try:
        return await service.create_parent(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[ParentResponse])
async def list_parents(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_parents(db, page, size)


@router.get("/email/{email}", response_model=ParentResponse)
async def get_parent_by_email(
    email: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ParentResponse:
    try:
        return await service.get_parent_by_email(db, email)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{parent_id}", response_model=ParentResponse)
async def get_parent(
    parent_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ParentResponse:
    try:
        return await service.get_parent(db, parent_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{parent_id}", response_model=ParentResponse)
async def update_parent(
    payload: ParentUpdate,
    parent_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ParentResponse:
    try:
        return await service.update_parent(db, parent_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{parent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parent(
    parent_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_parent(db, parent_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
