"""Search ports – collaborators the engine delegates to."""
from __future__ import annotations

import asyncio
from typing import Any, Protocol, Sequence, runtime_checkable

from mp_facets.kernel.security import Principal
from mp_facets.search.facets import FacetCandidate, FacetKind


@runtime_checkable
class StoreQuery(Protocol):
    """An immutable, not-yet-executed query; every method returns a new query."""

    @property
    def entity(self) -> Any: ...
    @property
    def key(self) -> Any: ...
    @property
    def skip(self) -> int: ...
    @property
    def take(self) -> int | None: ...

    def where(self, *criteria: Any) -> "StoreQuery": ...
    def join(self, target: Any, onclause: Any, *, outer: bool = False) -> "StoreQuery": ...
    def order_by(self, *clauses: Any) -> "StoreQuery": ...
    def group_by_first(self) -> "StoreQuery": ...
    def skip_take(self, skip: int, take: int) -> "StoreQuery": ...


@runtime_checkable
class EntityStore(Protocol):
    def create_base_query(self, kind: Any) -> StoreQuery: ...

    async def materialize(
        self, query: StoreQuery, cancel: asyncio.Event | None = None
    ) -> tuple[Sequence[Any], int]: ...


@runtime_checkable
class RestrictionOverlay(Protocol):
    """Access-control / store-scope filtering. Must be idempotent and pure."""

    def apply(self, query: StoreQuery, principal: Principal) -> StoreQuery: ...


@runtime_checkable
class AliasResolver(Protocol):
    def resolve(self, kind: FacetKind, language_id: int) -> str | None: ...


@runtime_checkable
class Localizer(Protocol):
    def label(self, resource_key: str) -> str: ...


@runtime_checkable
class FacetCandidateSource(Protocol):
    async def candidates(self, kind: FacetKind, language_id: int | None) -> Sequence[FacetCandidate]: ...


__all__ = [
    "AliasResolver",
    "EntityStore",
    "FacetCandidateSource",
    "Localizer",
    "RestrictionOverlay",
    "StoreQuery",
]
