from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import GroupCreate, GroupResponse, GroupUpdate
from . import service

router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    payload: GroupCreate,
    db: AsyncSession = Depends(get_db),
) -> GroupResponse:
    try:
        return await service.create_group(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[GroupResponse])
async def list_groups(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_groups(db, page, size)


@router.get("/name/{name}", response_model=GroupResponse)
async def get_group_by_name(
    name: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> GroupResponse:
    try:
        return await service.get_group_by_name(db, name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> GroupResponse:
    try:
        return await service.get_group(db, group_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    payload: GroupUpdate,
    group_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> GroupResponse:
    try:
        return await service.update_group(db, group_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_group(db, group_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
