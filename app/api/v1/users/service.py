import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.audit import log_deletion
from app.core.exceptions import ConflictError, NotFoundError
from app.core.models import User
from app.core.schemas import PageResponse, build_page
from app.core.security import hash_password
from app.core.validators import ensure_email
from app.db import crud

from .schemas import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    obj = await crud.get_by_id(db, User, user_id)
    if not obj:
        raise NotFoundError(f"User with id = {user_id} not found")
    return obj


async def create_user(db: AsyncSession, payload: UserCreate) -> UserResponse:
    username = payload.username.strip()
    email = str(payload.email)
    if await crud.exists_by(db, User, User.username, username):
        raise ConflictError(f"Username {username} already exists")
    if await crud.exists_by(db, User, User.email, email):
        raise ConflictError(f"Email {email} already exists")
    try:
        obj = User(
            username=username,
            password_hash=hash_password(payload.password),
            email=email,
            role_id=payload.role_id,
            status=payload.status,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        logger.warning("Store rejected duplicate user username=%s email=%s", username, email)
        raise ConflictError("Username or email already exists")
    logger.info("Created user id=%s username=%s", obj.id, obj.username)
    return UserResponse.model_validate(obj)


async def list_users(db: AsyncSession, page: int, size: int) -> PageResponse[UserResponse]:
    rows, total = await crud.paginate(db, select(User).order_by(User.id), page, size)
    return build_page([UserResponse.model_validate(u) for u in rows], total, page, size)


async def get_user(db: AsyncSession, user_id: int) -> UserResponse:
    return UserResponse.model_validate(await get_user_or_404(db, user_id))


async def get_user_by_username(db: AsyncSession, username: str) -> UserResponse:
    obj = await crud.find_one_by(db, User, User.username, username)
    if not obj:
        raise NotFoundError(f"User with username = {username} not found")
    return UserResponse.model_validate(obj)


async def get_user_by_email(db: AsyncSession, email: str) -> UserResponse:
    obj = await crud.find_one_by(db, User, User.email, email)
    if not obj:
        raise NotFoundError(f"User with email = {email} not found")
    return UserResponse.model_validate(obj)


async def update_user(db: AsyncSession, user_id: int, payload: UserUpdate) -> UserResponse:
    obj = await get_user_or_404(db, user_id)
    data = payload.patch_data()

    if "username" in data:
        username = data["username"].strip()
        if username != obj.username and await crud.exists_by(db, User, User.username, username, exclude_id=obj.id):
            raise ConflictError(f"Username {username} already exists")
        obj.username = username
    if "email" in data:
        email = ensure_email(data["email"])
        if email != obj.email and await crud.exists_by(db, User, User.email, email, exclude_id=obj.id):
            raise ConflictError(f"Email {email} already exists")
        obj.email = email
    if "password" in data:
        obj.password_hash = hash_password(data["password"])
    if "role_id" in data:
        obj.role_id = data["role_id"]
    if "status" in data:
        obj.status = data["status"]

    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Username or email already exists")
    return UserResponse.model_validate(obj)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    obj = await get_user_or_404(db, user_id)
    log_deletion("user", obj)
    await db.delete(obj)
    await db.commit()
