"""Filter handlers – inclusive date range on a direct column."""
from __future__ import annotations

from typing import Any

from mp_facets.search.context import QueryContext
from mp_facets.search.facets import FacetKind
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.ports import StoreQuery


class DateRangeHandler(FilterHandler):
    """Apply ``from <= column <= to`` for whichever bounds the token carries.

    Reversed bounds arrive already swapped from
    :meth:`~mp_facets.search.query.SearchQuery.get_date_range`.
    """

    def __init__(self, token: str, column: Any, *, kind: FacetKind | None = FacetKind.DATE) -> None:
        self.token = token
        self.column = column
        self.kind = kind

    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery:
        bounds = context.query.get_date_range(context.token_for(self.kind, self.token))
        if bounds is None:
            return query
        lower, upper = bounds
        if lower is not None:
            query = query.where(self.column >= lower)
        if upper is not None:
            query = query.where(self.column <= upper)
        return query

    def __repr__(self) -> str:
        return f"DateRangeHandler(token={self.token!r})"


__all__ = ["DateRangeHandler"]
