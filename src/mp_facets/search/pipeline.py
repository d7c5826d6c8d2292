"""Search pipeline – fixed-stage composition of one search run.

Stages run in :class:`Stage` order and nowhere else::

    BASE -> RESTRICT -> FILTER -> (seal) -> DEDUP -> SORT -> PAGE

The grouping flag is sealed between FILTER and DEDUP, so a handler that
tries to request grouping after the dedup decision fails loudly.
"""
from __future__ import annotations

import dataclasses
from enum import IntEnum
from typing import Callable

from mp_facets.kernel.errors import InvariantViolationError
from mp_facets.kernel.security import ANONYMOUS, Principal
from mp_facets.observability.logging import get_logger
from mp_facets.search.context import QueryContext
from mp_facets.search.errors import MissingCollaboratorError
from mp_facets.search.ports import EntityStore, RestrictionOverlay, StoreQuery
from mp_facets.search.query import SearchQuery
from mp_facets.search.scope import SearchScope
from mp_facets.search.snapshot import SearchSnapshot

_log = get_logger(__name__)


class Stage(IntEnum):
    BASE = 1
    RESTRICT = 2
    FILTER = 3
    DEDUP = 4
    SORT = 5
    PAGE = 6


@dataclasses.dataclass(frozen=True)
class ComposedSearch:
    """A composed, not-yet-executed query plus the final run context."""
    query: StoreQuery
    context: QueryContext
    page_index: int
    page_size: int
    sort_key: str = ""

    @property
    def skip(self) -> int:
        return (self.page_index - 1) * self.page_size

    @property
    def is_grouped(self) -> bool:
        return self.context.is_grouping_required


@dataclasses.dataclass
class _Run:
    search: SearchQuery
    context: QueryContext
    principal: Principal
    query: StoreQuery | None = None
    page_index: int = 1
    page_size: int = 0
    sort_key: str = ""


class PipelineRunner:
    """Run the stages of a :class:`SearchScope` against an entity store.

    Usage::

        runner = PipelineRunner(catalog_scope(), store, restriction)
        composed = runner.run(query, snapshot, principal)
        rows, total = await store.materialize(composed.query)
    """

    def __init__(
        self,
        scope: SearchScope,
        store: EntityStore,
        restriction: RestrictionOverlay | None = None,
    ) -> None:
        self._scope = scope
        self._store = store
        self._restriction = restriction
        self._stages: dict[Stage, Callable[[_Run], None]] = {
            Stage.BASE: self._base,
            Stage.RESTRICT: self._restrict,
            Stage.FILTER: self._filter,
            Stage.DEDUP: self._dedup,
            Stage.SORT: self._sort,
            Stage.PAGE: self._page,
        }

    @property
    def scope(self) -> SearchScope:
        return self._scope

    def run(
        self,
        search: SearchQuery,
        snapshot: SearchSnapshot,
        principal: Principal = ANONYMOUS,
    ) -> ComposedSearch:
        """Compose *search* for *principal*.

        Raises :class:`MissingCollaboratorError` before the store is touched
        when restrictions are enforced but no overlay was supplied.
        """
        if snapshot.settings.enforce_restrictions and self._restriction is None:
            raise MissingCollaboratorError("restriction")

        context = QueryContext(query=search, snapshot=snapshot, language_id=search.language_id)
        state = _Run(search=search, context=context, principal=principal)
        for stage in sorted(Stage):
            self._stages[stage](state)

        query = state.query
        if query is None:
            raise InvariantViolationError("Pipeline finished without a query")
        _log.debug(
            "search_composed",
            scope=self._scope.name,
            grouping=context.is_grouping_required,
            skip=query.skip,
            take=query.take,
            sort=state.sort_key,
        )
        return ComposedSearch(
            query=query,
            context=context,
            page_index=state.page_index,
            page_size=state.page_size,
            sort_key=state.sort_key,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _base(self, state: _Run) -> None:
        query = self._store.create_base_query(self._scope.entity)
        if self._scope.base_criteria:
            query = query.where(*self._scope.base_criteria)
        state.query = query

    def _restrict(self, state: _Run) -> None:
        if self._restriction is None or not state.context.snapshot.settings.enforce_restrictions:
            return
        state.query = self._restriction.apply(state.query, state.principal)

    def _filter(self, state: _Run) -> None:
        query = state.query
        for handler in self._scope.handlers:
            query = handler.apply(query, state.context)
        state.query = query
        state.context.seal()

    def _dedup(self, state: _Run) -> None:
        if state.context.is_grouping_required:
            state.query = state.query.group_by_first()

    def _sort(self, state: _Run) -> None:
        settings = state.context.snapshot.settings
        key, clause = self._scope.resolve_sort(state.search.sort, settings.default_sort)
        clauses = [clause] if clause is not None else []
        state.query = state.query.order_by(*clauses, state.query.key.asc())
        state.sort_key = key

    def _page(self, state: _Run) -> None:
        settings = state.context.snapshot.settings
        index = state.search.page_index or 1
        if index <= 0:
            index = 1
        size = settings.page_size_for(state.search.origin, state.search.page_size)
        state.page_index = index
        state.page_size = size
        state.query = state.query.skip_take((index - 1) * size, size)


__all__ = ["ComposedSearch", "PipelineRunner", "Stage"]
