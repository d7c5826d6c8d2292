"""Filter handlers – direct column id inclusion."""
from __future__ import annotations

from typing import Any

from mp_facets.search.context import QueryContext
from mp_facets.search.facets import FacetKind
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.ports import StoreQuery


class IdInclusionHandler(FilterHandler):
    """``WHERE column IN (ids)`` for one token. Never joins, never groups."""

    def __init__(self, token: str, column: Any, *, kind: FacetKind | None = None) -> None:
        self.token = token
        self.column = column
        self.kind = kind

    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery:
        ids = context.query.get_id_list(context.token_for(self.kind, self.token))
        if not ids:
            return query
        if len(ids) == 1:
            return query.where(self.column == ids[0])
        return query.where(self.column.in_(ids))

    def __repr__(self) -> str:
        return f"IdInclusionHandler(token={self.token!r})"


__all__ = ["IdInclusionHandler"]
