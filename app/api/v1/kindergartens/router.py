from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import IdRef, PageResponse
from app.db.session import get_db

from .schemas import KindergartenCreate, KindergartenResponse, KindergartenUpdate
from . import service

router = APIRouter(prefix="/api/v1/kindergarten", tags=["kindergartens"])


@router.post("", response_model=KindergartenResponse, status_code=status.HTTP_201_CREATED)
async def create_kindergarten(
    payload: KindergartenCreate,
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.create_kindergarten(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[KindergartenResponse])
async def list_kindergartens(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_kindergartens(db, page, size)


@router.get("/name/{name}", response_model=KindergartenResponse)
async def get_kindergarten_by_name(
    name: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.get_kindergarten_by_name(db, name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/email/{email}", response_model=KindergartenResponse)
async def get_kindergarten_by_email(
    email: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.get_kindergarten_by_email(db, email)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{kindergarten_id}", response_model=KindergartenResponse)
async def get_kindergarten(
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.get_kindergarten(db, kindergarten_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{kindergarten_id}", response_model=KindergartenResponse)
async def update_kindergarten(
    payload: KindergartenUpdate,
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.update_kindergarten(db, kindergarten_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{kindergarten_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_kindergarten(
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_kindergarten(db, kindergarten_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# ----- groups -----


@router.post("/{kindergarten_id}/groups", response_model=KindergartenResponse)
async def add_groups(
    payload: List[IdRef],
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.add_groups(db, kindergarten_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{kindergarten_id}/groups/clear", response_model=KindergartenResponse)
async def clear_groups(
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.clear_groups(db, kindergarten_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{kindergarten_id}/groups", response_model=KindergartenResponse)
async def remove_groups(
    payload: List[IdRef],
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.remove_groups(db, kindergarten_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# ----- activities -----


@router.post("/{kindergarten_id}/activities", response_model=KindergartenResponse)
async def add_activities(
    payload: List[IdRef],
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.add_activities(db, kindergarten_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{kindergarten_id}/activities/clear", response_model=KindergartenResponse)
async def clear_activities(
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.clear_activities(db, kindergarten_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{kindergarten_id}/activities", response_model=KindergartenResponse)
async def remove_activities(
    payload: List[IdRef],
    kindergarten_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> KindergartenResponse:
    try:
        return await service.remove_activities(db, kindergarten_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
