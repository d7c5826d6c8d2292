"""Search facets – dimensions, descriptors and values."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any


class FacetKind(str, Enum):
    """Facetable dimension families known to the engine."""
    CATEGORY = "category"
    MANUFACTURER = "manufacturer"
    DELIVERY_TIME = "deliverytime"
    FORUM = "forum"
    CUSTOMER = "customer"
    DATE = "date"


class FacetSorting(str, Enum):
    HITS_DESC = "hits_desc"
    DISPLAY_ORDER = "display_order"
    VALUE_ASC = "value_asc"


class IndexTypeCode(str, Enum):
    INT32 = "int32"
    DOUBLE = "double"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    STRING = "string"


@dataclasses.dataclass(frozen=True)
class FacetDimension:
    """Static description of one facetable dimension of a search scope.

    ``default_token`` is the request token used when no alias is configured
    for the dimension; the filter handler and the facet builder both resolve
    the token through the same run snapshot.
    """
    kind: FacetKind
    default_token: str
    field_name: str
    sorting: FacetSorting = FacetSorting.HITS_DESC
    is_range: bool = False

    @property
    def is_multi_select(self) -> bool:
        return not self.is_range

    @property
    def label_key(self) -> str:
        return f"Search.Facet.{self.kind.value}"


@dataclasses.dataclass(frozen=True)
class FacetCandidate:
    """A refinement offered by a candidate source (e.g. one category)."""
    value: int
    label: str
    display_order: int = 0
    hit_count: int = 0


@dataclasses.dataclass
class FacetValue:
    """A discrete value, or a ``(value, upper_value)`` range when ``is_range``."""
    value: Any = None
    upper_value: Any = None
    is_range: bool = False
    is_selected: bool = False
    display_order: int = 0
    label: str | None = None
    type_code: IndexTypeCode = IndexTypeCode.INT32
    hit_count: int = 0

    @property
    def sort_label(self) -> str:
        if self.label:
            return self.label.lower()
        return str(self.value if self.value is not None else self.upper_value)


@dataclasses.dataclass
class FacetDescriptor:
    """One facet group as handed to the presentation layer."""
    kind: FacetKind
    field_name: str
    label: str
    is_multi_select: bool
    display_order: int = 0
    sorting: FacetSorting = FacetSorting.HITS_DESC
    min_hit_count: int = 1
    max_choices_count: int = 0
    values: list[FacetValue] = dataclasses.field(default_factory=list)

    def add_value(self, value: FacetValue) -> FacetValue:
        self.values.append(value)
        return value

    @property
    def selected_values(self) -> list[FacetValue]:
        return [v for v in self.values if v.is_selected]

    def ordered(self, values: list[FacetValue]) -> list[FacetValue]:
        """Return *values* ordered by this descriptor's sort rule."""
        if self.sorting is FacetSorting.HITS_DESC:
            return sorted(values, key=lambda v: (-v.hit_count, v.display_order, v.sort_label))
        if self.sorting is FacetSorting.VALUE_ASC:
            return sorted(values, key=lambda v: v.sort_label)
        return sorted(values, key=lambda v: (v.display_order, v.sort_label))


__all__ = [
    "FacetCandidate",
    "FacetDescriptor",
    "FacetDimension",
    "FacetKind",
    "FacetSorting",
    "FacetValue",
    "IndexTypeCode",
]
