"""Search context – the per-run accumulator threaded through the filter chain."""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, TypeVar

from mp_facets.kernel.errors import InvariantViolationError
from mp_facets.search.facets import FacetKind
from mp_facets.search.query import SearchQuery
from mp_facets.search.snapshot import SearchSnapshot

T = TypeVar("T")


class FirstWriteWins(Generic[T]):
    """Optional value that can be assigned only while unset."""

    __slots__ = ("_value", "_is_set")

    def __init__(self) -> None:
        self._value: T | None = None
        self._is_set = False

    def offer(self, value: T) -> bool:
        """Store *value* unless a value is already held; return whether it was stored."""
        if self._is_set:
            return False
        self._value = value
        self._is_set = True
        return True

    @property
    def is_set(self) -> bool:
        return self._is_set

    @property
    def value(self) -> T | None:
        return self._value

    def __repr__(self) -> str:
        return f"FirstWriteWins({self._value!r})" if self._is_set else "FirstWriteWins(<unset>)"


@dataclasses.dataclass
class QueryContext:
    """Mutable state of exactly one pipeline run.

    Created at pipeline start, discarded at the end; never shared between
    requests. The grouping flag is sealed once the filter stage completes.
    """
    query: SearchQuery
    snapshot: SearchSnapshot
    language_id: int | None = None
    custom_data: dict[str, Any] = dataclasses.field(default_factory=dict)
    _defaults: dict[FacetKind, FirstWriteWins[int]] = dataclasses.field(default_factory=dict, repr=False)
    _grouping_required: bool = dataclasses.field(default=False, repr=False)
    _sealed: bool = dataclasses.field(default=False, repr=False)

    def default_id(self, kind: FacetKind) -> FirstWriteWins[int]:
        return self._defaults.setdefault(kind, FirstWriteWins())

    def default_value(self, kind: FacetKind) -> int | None:
        register = self._defaults.get(kind)
        return register.value if register is not None else None

    @property
    def is_grouping_required(self) -> bool:
        return self._grouping_required

    def require_grouping(self) -> None:
        """Record that a handler joined rows that may duplicate the root entity."""
        if self._sealed:
            raise InvariantViolationError("Grouping requested after the filter stage was sealed")
        self._grouping_required = True

    def seal(self) -> None:
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def token_for(self, kind: FacetKind | None, default: str) -> str:
        return self.snapshot.token_for(kind, default)


__all__ = ["FirstWriteWins", "QueryContext"]
