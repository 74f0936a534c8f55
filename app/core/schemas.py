from typing import ClassVar, Generic, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Generic page: content plus total count and zero-based page info."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[T]
    total_elements: int = Field(..., ge=0, alias="totalElements")
    total_pages: int = Field(..., ge=0, alias="totalPages")
    page: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1)


def build_page(items: List[T], total: int, page: int, size: int) -> PageResponse[T]:
    total_pages = (total + size - 1) // size if size else 0
    return PageResponse(
        content=items,
        total_elements=total,
        total_pages=total_pages,
        page=page,
        size=size,
    )


class IdRef(BaseModel):
    """One element of an association request body: {"id": 3}."""

    id: int = Field(..., ge=1)


class PatchModel(BaseModel):
    """
    Base for partial-update payloads.

    Fields left out of the request body stay unchanged (see `model_fields_set`).
    An explicit null is only accepted for columns that are nullable in the store;
    subclasses list the others in `non_nullable`.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_on_required(self) -> "PatchModel":
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} can not be null")
        return self

    def patch_data(self) -> dict:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)
