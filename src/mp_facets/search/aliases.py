"""In-memory alias resolver and localizer."""
from __future__ import annotations

from typing import Mapping

from mp_facets.search.facets import FacetKind


class InMemoryAliasResolver:
    """Resolve user-configured facet tokens.

    Language-specific aliases win over language-neutral ones (registered
    under language id ``0``).
    """

    def __init__(self, aliases: Mapping[tuple[FacetKind, int], str] | None = None) -> None:
        self._aliases: dict[tuple[FacetKind, int], str] = dict(aliases or {})

    def add(self, kind: FacetKind, alias: str, language_id: int = 0) -> None:
        self._aliases[(kind, language_id)] = alias

    def resolve(self, kind: FacetKind, language_id: int) -> str | None:
        alias = self._aliases.get((kind, language_id)) or self._aliases.get((kind, 0))
        return alias if alias and alias.strip() else None


class DictLocalizer:
    """Label lookup backed by a dict; unknown keys render as the key itself."""

    def __init__(self, resources: Mapping[str, str] | None = None) -> None:
        self._resources = dict(resources or {})

    def label(self, resource_key: str) -> str:
        return self._resources.get(resource_key, resource_key)


__all__ = ["DictLocalizer", "InMemoryAliasResolver"]
