"""
Generic async data-access helpers shared by every resource service.

Services own the business rules; these helpers only build and run the
queries (by id, by unique column, existence checks, paging, id-set lookup).
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def get_by_id(db: AsyncSession, model: Type[Any], obj_id: int) -> Optional[Any]:
    """Load one row by primary key, re-populating an already loaded instance (fresh collections)."""
    stmt = select(model).where(model.id == obj_id).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def find_one_by(db: AsyncSession, model: Type[Any], column: Any, value: Any) -> Optional[Any]:
    result = await db.execute(select(model).where(column == value))
    return result.scalars().first()


async def exists_by(
    db: AsyncSession,
    model: Type[Any],
    column: Any,
    value: Any,
    exclude_id: Optional[int] = None,
) -> bool:
    """True if another row already holds `value` in `column` (optionally ignoring row `exclude_id`)."""
    stmt = select(model.id).where(column == value)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def find_all_by(db: AsyncSession, model: Type[Any], column: Any, value: Any) -> List[Any]:
    result = await db.execute(select(model).where(column == value).order_by(model.id))
    return list(result.scalars().all())


async def get_many_by_ids(db: AsyncSession, model: Type[Any], ids: Iterable[int]) -> Dict[int, Any]:
    """Map id -> row for the ids that exist. Missing ids are simply absent from the result."""
    wanted = set(ids)
    if not wanted:
        return {}
    result = await db.execute(select(model).where(model.id.in_(wanted)))
    return {row.id: row for row in result.scalars().all()}


async def paginate(db: AsyncSession, stmt: Select, page: int, size: int) -> Tuple[List[Any], int]:
    """Run `stmt` for zero-based `page` of `size` rows. Returns (rows, total matching rows)."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total_result = await db.execute(count_stmt)
    total = total_result.scalar() or 0

    result = await db.execute(stmt.offset(page * size).limit(size))
    return list(result.scalars().all()), total
