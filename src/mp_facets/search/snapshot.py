"""Search snapshot – configuration read once per search run."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Iterable, Mapping

from mp_facets.search.facets import FacetDimension, FacetKind
from mp_facets.search.ports import AliasResolver
from mp_facets.search.settings import SearchSettings


@dataclasses.dataclass(frozen=True)
class SearchSnapshot:
    """Settings plus resolved token aliases for one run.

    Filter handlers and the facet builder read tokens through the same
    snapshot, which keeps applied filters and facet selection in sync even
    when settings are hot-reloaded mid-request.
    """
    settings: SearchSettings
    aliases: Mapping[FacetKind, str] = dataclasses.field(default_factory=dict)
    language_id: int | None = None

    @classmethod
    def capture(
        cls,
        settings: SearchSettings,
        resolver: AliasResolver | None,
        dimensions: Iterable[FacetDimension],
        language_id: int | None = None,
    ) -> "SearchSnapshot":
        aliases: dict[FacetKind, str] = {}
        for dimension in dimensions:
            alias = resolver.resolve(dimension.kind, language_id or 0) if resolver else None
            aliases[dimension.kind] = (alias or dimension.default_token).strip().lower()
        return cls(settings=settings, aliases=MappingProxyType(aliases), language_id=language_id)

    def token_for(self, kind: FacetKind | None, default: str) -> str:
        if kind is None:
            return default
        return self.aliases.get(kind) or default


__all__ = ["SearchSnapshot"]
