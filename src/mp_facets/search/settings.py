"""Search settings – per-deployment search configuration."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_facets.config.settings import Settings
from mp_facets.config.validation import InvalidSettingValueError
from mp_facets.search.errors import UnsupportedSearchModeError
from mp_facets.search.query import SearchMode


@dataclasses.dataclass
class SearchSettings(Settings):
    """Search configuration, loaded from ``SEARCH_*`` environment variables.

    Empty ``search_fields`` / ``default_sort`` fall back to the scope's own
    defaults. ``enabled_facets`` of ``None`` enables every dimension of the
    scope; names that the scope does not define are configuration errors.
    """

    _prefix: ClassVar[str] = "SEARCH"

    search_mode: SearchMode = SearchMode.CONTAINS
    search_fields: list[str] = dataclasses.field(default_factory=list)
    default_sort: str = ""
    default_page_size: int = 24
    page_sizes: dict[str, int] = dataclasses.field(default_factory=dict)
    allow_page_size_selection: bool = False
    max_page_size: int = 100
    enforce_restrictions: bool = True
    enabled_facets: list[str] | None = None
    facet_display_orders: dict[str, int] = dataclasses.field(default_factory=dict)
    filter_min_hit_count: int = 1
    filter_max_choices_count: int = 20

    def _validate(self) -> None:
        if self.search_mode is SearchMode.EXACT:
            raise UnsupportedSearchModeError(self.search_mode)
        if self.default_page_size < 1:
            raise InvalidSettingValueError("default_page_size", self.default_page_size, "must be >= 1")
        if self.max_page_size < 1:
            raise InvalidSettingValueError("max_page_size", self.max_page_size, "must be >= 1")
        for origin, size in self.page_sizes.items():
            if size < 1:
                raise InvalidSettingValueError(f"page_sizes[{origin}]", size, "must be >= 1")

    def page_size_for(self, origin: str, requested: int | None = None) -> int:
        """Resolve the page size of a request coming from *origin*."""
        if self.allow_page_size_selection and requested is not None and requested > 0:
            return min(requested, self.max_page_size)
        return self.page_sizes.get(origin, self.default_page_size)


__all__ = ["SearchSettings"]
