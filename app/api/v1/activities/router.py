from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import PageResponse
from app.db.session import get_db

from .schemas import ActivityCreate, ActivityResponse, ActivityUpdate
from . import service

router = APIRouter(prefix="/api/v1/activities", tags=["activities"])


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ActivityCreate,
    db: AsyncSession = Depends(get_db),
) -> ActivityResponse:
    try:
        return await service.create_activity(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[ActivityResponse])
async def list_activities(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_activities(db, page, size)


@router.get("/name/{name}", response_model=ActivityResponse)
async def get_activity_by_name(
    name: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ActivityResponse:
    try:
        return await service.get_activity_by_name(db, name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ActivityResponse:
    try:
        return await service.get_activity(db, activity_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    payload: ActivityUpdate,
    activity_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ActivityResponse:
    try:
        return await service.update_activity(db, activity_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_activity(db, activity_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
