"""Search result – one page of rows plus the facet descriptors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from mp_facets.search.facets import FacetDescriptor

T = TypeVar("T")


@dataclass
class SearchResult(Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    took_ms: int = 0
    facets: list[FacetDescriptor] = field(default_factory=list)
    sort: str = ""
    is_canceled: bool = False

    @classmethod
    def canceled(cls, page: int = 1, page_size: int = 0) -> "SearchResult[T]":
        return cls(items=[], total=0, page=page, page_size=page_size, is_canceled=True)

    @property
    def total_pages(self) -> int:
        if self.page_size == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def facet(self, field_name: str) -> FacetDescriptor | None:
        return next((f for f in self.facets if f.field_name == field_name), None)


__all__ = ["SearchResult"]
