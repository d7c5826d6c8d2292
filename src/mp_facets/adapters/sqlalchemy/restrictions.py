"""SQLAlchemy adapter – store-scope and ACL restriction overlays.

Both overlays filter with correlated EXISTS subqueries, so they never
duplicate root rows and never require grouping. An entity without any
mapping row is visible everywhere.
"""
from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import exists, or_
from sqlalchemy.orm import aliased

from mp_facets.adapters.sqlalchemy.models import AclRecord, StoreMapping
from mp_facets.kernel.security import Principal
from mp_facets.search.ports import RestrictionOverlay, StoreQuery


def _limited_to(mapping: Any, entity_name: str, key: Any, column: str, allowed: Sequence[int]) -> Any:
    any_row = aliased(mapping)
    allowed_row = aliased(mapping)
    unrestricted = ~exists().where(any_row.entity_id == key, any_row.entity_name == entity_name)
    if not allowed:
        return unrestricted
    permitted = exists().where(
        allowed_row.entity_id == key,
        allowed_row.entity_name == entity_name,
        getattr(allowed_row, column).in_(allowed),
    )
    return or_(unrestricted, permitted)


class StoreMappingRestriction:
    """Hide entities mapped to other stores than the principal's.

    A principal without a store sees everything.
    """

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name

    def apply(self, query: StoreQuery, principal: Principal) -> StoreQuery:
        if principal.store_id is None:
            return query
        return query.where(
            _limited_to(StoreMapping, self.entity_name, query.key, "store_id", [principal.store_id])
        )


class AclRestriction:
    """Hide entities whose ACL grants none of the principal's roles."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name

    def apply(self, query: StoreQuery, principal: Principal) -> StoreQuery:
        roles = sorted(principal.role_ids)
        return query.where(_limited_to(AclRecord, self.entity_name, query.key, "customer_role_id", roles))


class CompositeRestriction:
    def __init__(self, overlays: Sequence[RestrictionOverlay]) -> None:
        self._overlays = tuple(overlays)

    def apply(self, query: StoreQuery, principal: Principal) -> StoreQuery:
        for overlay in self._overlays:
            query = overlay.apply(query, principal)
        return query


__all__ = ["AclRestriction", "CompositeRestriction", "StoreMappingRestriction"]
