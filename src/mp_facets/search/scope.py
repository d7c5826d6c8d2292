"""Search scope – the wiring of one searchable entity family."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Mapping, Sequence

from mp_facets.observability.logging import get_logger
from mp_facets.search.errors import UnknownFacetKindError
from mp_facets.search.facets import FacetDimension, FacetKind
from mp_facets.search.handlers.base import FilterHandler

_log = get_logger(__name__)

INITIAL_SORT = "initial"


@dataclasses.dataclass(frozen=True)
class SearchScope:
    """Static description of a search scope (e.g. catalog, forum topics).

    ``sort_options`` maps lower-case sort keys to SQLAlchemy order clauses;
    ``base_criteria`` are always-on predicates of the BASE stage.
    """
    name: str
    entity: Any
    handlers: Sequence[FilterHandler]
    dimensions: Sequence[FacetDimension] = ()
    sort_options: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    default_sort: str = ""
    default_fields: Sequence[str] = ()
    base_criteria: Sequence[Any] = ()

    def __post_init__(self) -> None:
        if self.default_sort and self.default_sort not in self.sort_options:
            raise ValueError(f"default_sort {self.default_sort!r} is not a sort option of {self.name!r}")

    def dimension(self, kind: FacetKind | str) -> FacetDimension:
        for dimension in self.dimensions:
            if dimension.kind == kind or dimension.kind.value == kind:
                return dimension
        _log.error("facet_kind_unknown", scope=self.name, kind=str(getattr(kind, "value", kind)))
        raise UnknownFacetKindError(kind, (d.kind for d in self.dimensions))

    def resolve_kinds(self, names: Iterable[FacetKind | str] | None) -> list[FacetDimension]:
        """Return the enabled dimensions in declaration order; ``None`` enables all."""
        if names is None:
            return list(self.dimensions)
        wanted = {self.dimension(str(getattr(n, "value", n)).strip().lower()).kind for n in names}
        return [d for d in self.dimensions if d.kind in wanted]

    def resolve_sort(self, requested: str | None, configured: str = "") -> tuple[str, Any]:
        """Pick the order clause for *requested*, falling back to the configured default."""
        key = (requested or "").strip().lower()
        if not key or key == INITIAL_SORT or key not in self.sort_options:
            key = configured if configured in self.sort_options else self.default_sort
        return key, self.sort_options.get(key)


__all__ = ["INITIAL_SORT", "SearchScope"]
