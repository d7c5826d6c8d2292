"""Search facets – descriptor construction and candidate expansion.

Selection is re-derived from the request tokens with the same parser and
the same run snapshot the filter handlers use, so ``is_selected`` always
mirrors the filter that was actually applied.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Sequence

from mp_facets.kernel.security import ANONYMOUS, Principal
from mp_facets.kernel.time import Clock, SystemClock, naive_utc, utc_midnight
from mp_facets.search.facets import (
    FacetCandidate,
    FacetDescriptor,
    FacetKind,
    FacetValue,
    IndexTypeCode,
)
from mp_facets.search.ports import FacetCandidateSource, Localizer
from mp_facets.search.query import SearchQuery
from mp_facets.search.scope import SearchScope
from mp_facets.search.snapshot import SearchSnapshot

LAST_VISIT = "LastVisit"

# Named date ranges, in days before today's UTC midnight.
DATE_RANGES: tuple[tuple[str, int], ...] = (
    ("Yesterday", 1),
    ("LastWeek", 7),
    ("LastTwoWeeks", 14),
    ("LastMonth", 30),
    ("LastThreeMonths", 92),
    ("LastSixMonths", 183),
    ("LastYear", 365),
)


def date_label_key(name: str) -> str:
    return f"Search.DateFilter.{name}"


class FacetBuilder:
    """Build one :class:`FacetDescriptor` per enabled dimension of a scope."""

    def __init__(self, scope: SearchScope, localizer: Localizer, clock: Clock | None = None) -> None:
        self._scope = scope
        self._localizer = localizer
        self._clock = clock or SystemClock()

    def build(
        self,
        search: SearchQuery,
        snapshot: SearchSnapshot,
        principal: Principal = ANONYMOUS,
        kinds: Iterable[FacetKind | str] | None = None,
    ) -> list[FacetDescriptor]:
        """Return selection-only descriptors for the enabled dimensions.

        Raises :class:`~mp_facets.search.errors.UnknownFacetKindError` for a
        requested or configured dimension the scope does not define.
        """
        settings = snapshot.settings
        enabled = kinds if kinds is not None else settings.enabled_facets
        descriptors: list[FacetDescriptor] = []

        for position, dimension in enumerate(self._scope.resolve_kinds(enabled)):
            descriptor = FacetDescriptor(
                kind=dimension.kind,
                field_name=dimension.field_name,
                label=self._localizer.label(dimension.label_key),
                is_multi_select=dimension.is_multi_select,
                display_order=settings.facet_display_orders.get(dimension.kind.value, position),
                sorting=dimension.sorting,
                min_hit_count=settings.filter_min_hit_count,
                max_choices_count=settings.filter_max_choices_count,
            )
            token = snapshot.token_for(dimension.kind, dimension.default_token)
            if dimension.is_range:
                self._add_date_ranges(descriptor, search.get_date_range(token), principal)
            else:
                for value in search.get_id_list(token):
                    descriptor.add_value(FacetValue(value=value, is_selected=True))
            descriptors.append(descriptor)

        return descriptors

    def _add_date_ranges(
        self,
        descriptor: FacetDescriptor,
        requested: tuple[datetime | None, datetime | None] | None,
        principal: Principal,
    ) -> None:
        lower, upper = requested if requested is not None else (None, None)
        upper_only = lower is None and upper is not None
        bound = upper if upper_only else lower

        anchors: list[tuple[str, datetime]] = []
        if principal.last_visit_utc is not None:
            anchors.append((LAST_VISIT, naive_utc(principal.last_visit_utc)))
        today = utc_midnight(self._clock.now())
        anchors.extend((name, today - timedelta(days=days)) for name, days in DATE_RANGES)

        for order, (name, anchor) in enumerate(anchors):
            descriptor.add_value(
                FacetValue(
                    value=None if upper_only else anchor,
                    upper_value=anchor if upper_only else None,
                    is_range=True,
                    is_selected=bound is not None and bound == anchor,
                    display_order=order,
                    label=self._localizer.label(date_label_key(name)),
                    type_code=IndexTypeCode.DATETIME,
                )
            )

    async def expand(
        self,
        descriptors: Sequence[FacetDescriptor],
        source: FacetCandidateSource,
        language_id: int | None = None,
    ) -> list[FacetDescriptor]:
        """Merge candidate refinements into id descriptors.

        Thresholds and ordering follow each descriptor's settings; selected
        values survive both the hit-count threshold and truncation.
        Descriptors left without any value are dropped.
        """
        expanded: list[FacetDescriptor] = []
        for descriptor in descriptors:
            if descriptor.is_multi_select:
                candidates = await source.candidates(descriptor.kind, language_id)
                descriptor.values = self._merge(descriptor, candidates)
            if descriptor.values:
                expanded.append(descriptor)
        return expanded

    @staticmethod
    def _merge(descriptor: FacetDescriptor, candidates: Iterable[FacetCandidate]) -> list[FacetValue]:
        selected = {v.value: v for v in descriptor.selected_values}
        values: list[FacetValue] = []
        for candidate in candidates:
            is_selected = candidate.value in selected
            if not is_selected and candidate.hit_count < descriptor.min_hit_count:
                continue
            values.append(
                FacetValue(
                    value=candidate.value,
                    is_selected=is_selected,
                    display_order=candidate.display_order,
                    label=candidate.label,
                    hit_count=candidate.hit_count,
                )
            )
            selected.pop(candidate.value, None)

        ordered = descriptor.ordered(values)
        if descriptor.max_choices_count > 0 and len(ordered) > descriptor.max_choices_count:
            kept = ordered[: descriptor.max_choices_count]
            kept.extend(v for v in ordered[descriptor.max_choices_count:] if v.is_selected)
            ordered = descriptor.ordered(kept)

        # Selected ids the source no longer offers are still reported.
        ordered.extend(selected.values())
        return ordered


__all__ = ["DATE_RANGES", "FacetBuilder", "LAST_VISIT", "date_label_key"]
