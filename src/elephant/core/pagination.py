"""Pagination value types shared by the services and the REST layer.

- Direction / SortOrder: one ``property,direction`` sort criterion
- Pageable: requested slice (page index, page size, sort orders)
- Page: returned slice with content and total element count
- parse_sort(): turns repeated ``sort`` query values into SortOrder objects
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

# page * MAX_PAGE_SIZE must stay within a signed 64-bit OFFSET
MAX_PAGE_INDEX = 2**31 - 1


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    """Sort by a single property."""

    prop: str
    direction: Direction = Direction.ASC


class Pageable(BaseModel):
    """A request for a bounded slice of a collection."""

    page: int = Field(default=0, ge=0, le=MAX_PAGE_INDEX)
    size: int = Field(default=20, ge=1)
    sort: list[SortOrder] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """A slice of a collection plus the metadata needed for paging headers."""

    content: list[T] = Field(default_factory=list)
    number: int = 0
    size: int = 20
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


def parse_sort(values: Iterable[str]) -> list[SortOrder]:
    """Parse ``sort`` query values of the form ``prop[,prop...][,asc|desc]``.

    A trailing direction applies to every property listed before it in the
    same value. Blank segments are ignored.
    """
    orders: list[SortOrder] = []
    for value in values:
        parts = [p.strip() for p in value.split(",") if p.strip()]
        if not parts:
            continue
        direction = Direction.ASC
        if parts[-1].lower() in (Direction.ASC.value, Direction.DESC.value):
            direction = Direction(parts.pop().lower())
        orders.extend(SortOrder(prop=p, direction=direction) for p in parts)
    return orders
