from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.schemas import IdRef, PageResponse
from app.db.session import get_db

from .schemas import ChildCreate, ChildResponse, ChildUpdate
from . import service

router = APIRouter(prefix="/api/v1/child", tags=["children"])


@router.post("", response_model=ChildResponse, status_code=status.HTTP_201_CREATED)
async def create_child(
    payload: ChildCreate,
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.create_child(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PageResponse[ChildResponse])
async def list_children(
    page: int = Query(0, ge=0, description="Page index must be zero or positive"),
    size: int = Query(10, ge=1, description="Page size must be at least 1"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_children(db, page, size)


@router.get("/{child_id}", response_model=ChildResponse)
async def get_child(
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.get_child(db, child_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{child_id}", response_model=ChildResponse)
async def update_child(
    payload: ChildUpdate,
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.update_child(db, child_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_child(
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await service.delete_child(db, child_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{child_id}/activities", response_model=ChildResponse)
async def add_activities(
    payload: List[IdRef],
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.add_activities(db, child_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{child_id}/activities/clear", response_model=ChildResponse)
async def clear_activities(
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.clear_activities(db, child_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{child_id}/activities", response_model=ChildResponse)
async def remove_activities(
    payload: List[IdRef],
    child_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ChildResponse:
    try:
        return await service.remove_activities(db, child_id, [ref.id for ref in payload])
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
