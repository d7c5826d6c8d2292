"""Search service – composes, materializes and facets one search request."""
from __future__ import annotations

import asyncio
import time
from typing import Any, Iterable, Mapping, Sequence

from mp_facets.config.settings import SettingsProvider
from mp_facets.kernel.security import ANONYMOUS, Principal
from mp_facets.kernel.time import Clock
from mp_facets.observability.logging import get_logger
from mp_facets.search.cancellation import cancellable, raise_if_canceled
from mp_facets.search.errors import MissingCollaboratorError, SearchCanceledError
from mp_facets.search.facet_builder import FacetBuilder
from mp_facets.search.facets import FacetDescriptor, FacetKind
from mp_facets.search.pipeline import ComposedSearch, PipelineRunner
from mp_facets.search.ports import (
    AliasResolver,
    EntityStore,
    FacetCandidateSource,
    Localizer,
    RestrictionOverlay,
)
from mp_facets.search.query import SearchQuery
from mp_facets.search.result import SearchResult
from mp_facets.search.scope import SearchScope
from mp_facets.search.settings import SearchSettings
from mp_facets.search.snapshot import SearchSnapshot

_log = get_logger(__name__)


class SearchService:
    """Entry point of a search scope.

    Configuration defects (unknown facet kinds, a missing restriction
    overlay while restrictions are enforced, EXACT match mode) are raised at
    construction and again at the start of every run, always before the
    store is touched.

    Usage::

        service = SearchService(
            catalog_scope(),
            SqlAlchemyEntityStore(sessions),
            SettingsProvider(settings),
            restriction=CompositeRestriction([StoreMappingRestriction("Product"), AclRestriction("Product")]),
            localizer=DictLocalizer(resources),
        )
        query = service.create_query({"q": "chair", "categoryid": "5"}, language_id=2)
        result = await service.search(query, principal)
    """

    def __init__(
        self,
        scope: SearchScope,
        store: EntityStore | None,
        settings: SearchSettings | SettingsProvider[SearchSettings],
        *,
        restriction: RestrictionOverlay | None = None,
        aliases: AliasResolver | None = None,
        localizer: Localizer | None = None,
        candidates: FacetCandidateSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        if store is None:
            raise MissingCollaboratorError("store")
        if localizer is None:
            raise MissingCollaboratorError("localizer")
        self._scope = scope
        self._store = store
        self._settings = settings if isinstance(settings, SettingsProvider) else SettingsProvider(settings)
        self._restriction = restriction
        self._aliases = aliases
        self._candidates = candidates
        self._runner = PipelineRunner(scope, store, restriction)
        self._facets = FacetBuilder(scope, localizer, clock)
        self._log = _log.bind(scope=scope.name)
        self._check(self._settings.snapshot())

    @property
    def scope(self) -> SearchScope:
        return self._scope

    def _check(self, settings: SearchSettings, kinds: Iterable[FacetKind | str] | None = None) -> None:
        if settings.enforce_restrictions and self._restriction is None:
            raise MissingCollaboratorError("restriction")
        self._scope.resolve_kinds(settings.enabled_facets)
        if kinds is not None:
            self._scope.resolve_kinds(kinds)

    def create_query(
        self,
        raw: Mapping[str, str | Sequence[str]],
        *,
        language_id: int | None = None,
        currency_id: int | None = None,
        origin: str = "",
        instant: bool = False,
    ) -> SearchQuery:
        """Build a :class:`SearchQuery` from raw request tokens using the current settings."""
        settings = self._settings.snapshot()
        return SearchQuery.from_tokens(
            raw,
            fields=settings.search_fields or self._scope.default_fields,
            mode=settings.search_mode,
            language_id=language_id,
            currency_id=currency_id,
            origin=origin,
            instant=instant,
        )

    def compose(
        self,
        search: SearchQuery,
        principal: Principal = ANONYMOUS,
        *,
        facets: Iterable[FacetKind | str] | None = None,
    ) -> tuple[ComposedSearch, list[FacetDescriptor]]:
        """Compose the query and the selection-only facet descriptors without I/O."""
        settings = self._settings.snapshot()
        kinds = list(facets) if facets is not None else None
        self._check(settings, kinds)

        snapshot = SearchSnapshot.capture(settings, self._aliases, self._scope.dimensions, search.language_id)
        descriptors = self._facets.build(search, snapshot, principal, kinds) if search.build_facets else []
        return self._runner.run(search, snapshot, principal), descriptors

    async def search(
        self,
        search: SearchQuery,
        principal: Principal = ANONYMOUS,
        *,
        cancel: asyncio.Event | None = None,
        facets: Iterable[FacetKind | str] | None = None,
    ) -> SearchResult[Any]:
        """Run one search.

        Returns a canceled result (no rows, no facets) when *cancel* is set
        before or during materialization. Store failures propagate unchanged.
        """
        t0 = time.monotonic()
        composed, descriptors = self.compose(search, principal, facets=facets)

        try:
            raise_if_canceled(cancel)
            rows, total = await cancellable(self._store.materialize(composed.query, cancel), cancel)
            if descriptors and self._candidates is not None:
                descriptors = await cancellable(
                    self._facets.expand(descriptors, self._candidates, search.language_id), cancel
                )
        except SearchCanceledError:
            self._log.info("search_canceled", page=composed.page_index)
            return SearchResult.canceled(composed.page_index, composed.page_size)

        took_ms = int((time.monotonic() - t0) * 1000)
        self._log.info(
            "search_completed",
            total=total,
            page=composed.page_index,
            facets=len(descriptors),
            took_ms=took_ms,
        )
        return SearchResult(
            items=list(rows),
            total=total,
            page=composed.page_index,
            page_size=composed.page_size,
            took_ms=took_ms,
            facets=descriptors,
            sort=composed.sort_key,
        )


__all__ = ["SearchService"]
