"""Shared schema building blocks: camelCase models, envelopes, pagination.

Every JSON body in and out of the API uses camelCase keys. Python code
keeps snake_case attribute names; CamelModel maps between the two.
"""

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope: {"success": true, "data": ..., "message": ...}."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class Page(CamelModel, Generic[T]):
    """One page of results plus the paging counters clients rely on."""
    docs: list[T]
    total_docs: int
    limit: int
    total_pages: int
    page: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None


def page_meta(total: int, page: int, limit: int) -> dict:
    """Paging counters for `total` items split into pages of `limit`."""
    total_pages = math.ceil(total / limit) if limit else 0
    offset = (page - 1) * limit
    return {
        "total_docs": total,
        "limit": limit,
        "total_pages": total_pages,
        "page": page,
        "paging_counter": offset + 1,
        "has_prev_page": page > 1,
        "has_next_page": page < total_pages,
        "prev_page": page - 1 if page > 1 else None,
        "next_page": page + 1 if page < total_pages else None,
    }
