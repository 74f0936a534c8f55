"""
Owner -> related set mutation shared by child activities and kindergarten groups/activities.

Every requested id is resolved before the owner's set is touched, so a single unknown
id aborts the whole call with the set unchanged.
"""

from typing import Any, Iterable, List, MutableSet, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utcnow
from app.core.exceptions import NotFoundError
from app.db import crud

ASSOCIATION_CONFLICT = "Association was modified concurrently, retry the request"


async def resolve_related(db: AsyncSession, model: Type[Any], ids: Iterable[int], label: str) -> List[Any]:
    """Load every id or raise NotFoundError for the smallest missing one."""
    wanted = sorted(set(ids))
    found = await crud.get_many_by_ids(db, model, wanted)
    for related_id in wanted:
        if related_id not in found:
            raise NotFoundError(f"{label} with id {related_id} not found")
    return [found[related_id] for related_id in wanted]


def add_related(current: MutableSet[Any], related: List[Any]) -> None:
    # set union: re-adding an existing member is a no-op
    current.update(related)


def remove_related(current: MutableSet[Any], related: List[Any]) -> None:
    for item in related:
        current.discard(item)


def touch(owner: Any) -> None:
    # join-table writes do not fire the owner's onupdate
    owner.updated_at = utcnow()
