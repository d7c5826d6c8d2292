"""Filter handlers – FilterHandler base."""
from __future__ import annotations

import abc

from mp_facets.search.context import QueryContext
from mp_facets.search.ports import StoreQuery


class FilterHandler(abc.ABC):
    """Single link in the filter chain.

    Handlers hold configuration only. ``apply`` returns a new query and may
    mutate nothing but *context*.
    """

    @abc.abstractmethod
    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["FilterHandler"]
