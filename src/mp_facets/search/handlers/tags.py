"""Filter handlers – many-to-many tag membership."""
from __future__ import annotations

from mp_facets.search.context import QueryContext
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.handlers.dimensions import MembershipTable
from mp_facets.search.ports import StoreQuery


class TagHandler(FilterHandler):
    def __init__(self, token: str, membership: MembershipTable) -> None:
        self.token = token
        self.membership = membership

    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery:
        ids = context.query.get_id_list(self.token)
        if not ids:
            return query
        context.require_grouping()
        return self.membership.join_to(query, ids)

    def __repr__(self) -> str:
        return f"TagHandler(token={self.token!r})"


__all__ = ["TagHandler"]
