"""Filter handlers – membership dimensions (category, manufacturer).

Plain id lists join the membership table; a lone ``0`` is the sentinel for
"no membership at all". Featured / not-featured lists join with the
featured flag pinned. Every id list offers its first id as the context
default for the dimension; the first offer wins.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.orm import aliased

from mp_facets.search.context import QueryContext
from mp_facets.search.facets import FacetKind
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.ports import StoreQuery


@dataclasses.dataclass(frozen=True)
class MembershipTable:
    """Link entity between the searched root and a dimension."""
    entity: Any
    root_key: str
    value_key: str
    featured: str | None = None

    def join_to(
        self,
        query: StoreQuery,
        ids: tuple[int, ...],
        featured: bool | None = None,
    ) -> StoreQuery:
        link = aliased(self.entity)
        criteria = [getattr(link, self.root_key) == query.key, getattr(link, self.value_key).in_(ids)]
        if featured is not None and self.featured is not None:
            criteria.append(getattr(link, self.featured).is_(featured))
        return query.join(link, and_(*criteria))

    def count_for(self, root_key: Any) -> Any:
        link = aliased(self.entity)
        return (
            select(func.count())
            .select_from(link)
            .where(getattr(link, self.root_key) == root_key)
            .scalar_subquery()
        )


class MembershipDimensionHandler(FilterHandler):
    """Category / manufacturer style dimension with sentinel zero and featured tri-state."""

    def __init__(
        self,
        kind: FacetKind,
        membership: MembershipTable,
        *,
        token: str,
        featured_token: str | None = None,
        not_featured_token: str | None = None,
    ) -> None:
        self.kind = kind
        self.membership = membership
        self.token = token
        self.featured_token = featured_token
        self.not_featured_token = not_featured_token

    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery:
        default = context.default_id(self.kind)

        ids = context.query.get_id_list(context.token_for(self.kind, self.token))
        if ids:
            default.offer(ids[0])
            if ids == (0,):
                query = query.where(self.membership.count_for(query.key) == 0)
            else:
                context.require_grouping()
                query = self.membership.join_to(query, ids)

        for token, featured in ((self.featured_token, True), (self.not_featured_token, False)):
            if token is None:
                continue
            flagged_ids = context.query.get_id_list(token)
            if flagged_ids:
                context.require_grouping()
                default.offer(flagged_ids[0])
                query = self.membership.join_to(query, flagged_ids, featured)

        return query

    def __repr__(self) -> str:
        return f"MembershipDimensionHandler(kind={self.kind.value!r}, token={self.token!r})"


__all__ = ["MembershipDimensionHandler", "MembershipTable"]
