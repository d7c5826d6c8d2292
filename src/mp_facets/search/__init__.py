"""Search – faceted query composition over an entity store."""
from mp_facets.search.aliases import DictLocalizer, InMemoryAliasResolver
from mp_facets.search.cancellation import cancellable
from mp_facets.search.context import FirstWriteWins, QueryContext
from mp_facets.search.errors import (
    MissingCollaboratorError,
    SearchCanceledError,
    UnknownFacetKindError,
    UnsupportedSearchModeError,
)
from mp_facets.search.facet_builder import FacetBuilder
from mp_facets.search.facets import (
    FacetCandidate,
    FacetDescriptor,
    FacetDimension,
    FacetKind,
    FacetSorting,
    FacetValue,
    IndexTypeCode,
)
from mp_facets.search.pipeline import ComposedSearch, PipelineRunner, Stage
from mp_facets.search.ports import (
    AliasResolver,
    EntityStore,
    FacetCandidateSource,
    Localizer,
    RestrictionOverlay,
    StoreQuery,
)
from mp_facets.search.query import SearchMode, SearchQuery
from mp_facets.search.result import SearchResult
from mp_facets.search.scope import SearchScope
from mp_facets.search.service import SearchService
from mp_facets.search.settings import SearchSettings
from mp_facets.search.snapshot import SearchSnapshot

__all__ = [
    "AliasResolver",
    "ComposedSearch",
    "DictLocalizer",
    "EntityStore",
    "FacetBuilder",
    "FacetCandidate",
    "FacetCandidateSource",
    "FacetDescriptor",
    "FacetDimension",
    "FacetKind",
    "FacetSorting",
    "FacetValue",
    "FirstWriteWins",
    "InMemoryAliasResolver",
    "IndexTypeCode",
    "Localizer",
    "MissingCollaboratorError",
    "PipelineRunner",
    "QueryContext",
    "RestrictionOverlay",
    "SearchCanceledError",
    "SearchMode",
    "SearchQuery",
    "SearchResult",
    "SearchScope",
    "SearchService",
    "SearchSettings",
    "SearchSnapshot",
    "Stage",
    "StoreQuery",
    "UnknownFacetKindError",
    "UnsupportedSearchModeError",
]
