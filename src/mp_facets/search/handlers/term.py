"""Filter handlers – free-text term over direct, related and localized columns."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping

from sqlalchemy import and_, exists, false, or_
from sqlalchemy.orm import aliased

from mp_facets.search.context import QueryContext
from mp_facets.search.errors import UnsupportedSearchModeError
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.ports import StoreQuery
from mp_facets.search.query import SearchMode

Matcher = Callable[[Any, str], Any]

_MATCHERS: dict[SearchMode, Matcher] = {
    SearchMode.STARTS_WITH: lambda column, term: column.startswith(term, autoescape=True),
    SearchMode.CONTAINS: lambda column, term: column.contains(term, autoescape=True),
}


def matcher_for(mode: SearchMode) -> Matcher:
    try:
        return _MATCHERS[mode]
    except KeyError:
        raise UnsupportedSearchModeError(mode) from None


@dataclasses.dataclass(frozen=True)
class LocalizedText:
    """Side table of per-language values for the root entity.

    ``keys`` lists the locale keys (e.g. ``Name``) that are searchable.
    """
    entity: Any
    key_group: str
    keys: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class RelatedText:
    """Text column of another table, matched through a correlated EXISTS.

    A related row belongs to the root row when
    ``entity.<related_key> == root_column``; e.g. a topic's author
    (``Customer.id == ForumTopic.customer_id``) or its posts
    (``ForumPost.topic_id == ForumTopic.id``).
    """
    entity: Any
    column: str
    related_key: str
    root_column: Any

    def matches(self, match: Matcher, term: str) -> Any:
        row = aliased(self.entity)
        return exists().where(
            getattr(row, self.related_key) == self.root_column,
            match(getattr(row, self.column), term),
        )


class TermHandler(FilterHandler):
    """OR-match the term across requested columns and localized values.

    ``columns`` maps field names to columns of the root entity or to
    :class:`RelatedText` lookups.

    Active only for a non-blank term and at least one non-blank field name.
    The localized side table is outer-joined, so grouping is always required.
    """

    def __init__(self, columns: Mapping[str, Any], localized: LocalizedText | None = None) -> None:
        self.columns = {name.lower(): column for name, column in columns.items()}
        self.localized = localized

    def apply(self, query: StoreQuery, context: QueryContext) -> StoreQuery:
        search = context.query
        match = matcher_for(search.mode)

        fields = [f.strip().lower() for f in search.fields if f and f.strip()]
        if not search.has_term or not fields:
            return query

        term = search.term.strip()
        context.require_grouping()

        predicates = [self._predicate(self.columns[name], match, term) for name in fields if name in self.columns]

        if self.localized is not None and context.language_id:
            lp = aliased(self.localized.entity)
            query = query.join(
                lp,
                and_(
                    lp.entity_id == query.key,
                    lp.locale_key_group == self.localized.key_group,
                    lp.language_id == context.language_id,
                    lp.locale_key.in_(self.localized.keys),
                ),
                outer=True,
            )
            predicates.append(match(lp.locale_value, term))

        return query.where(or_(*predicates) if predicates else false())

    @staticmethod
    def _predicate(column: Any, match: Matcher, term: str) -> Any:
        if isinstance(column, RelatedText):
            return column.matches(match, term)
        return match(column, term)

    def __repr__(self) -> str:
        return f"TermHandler(columns={sorted(self.columns)!r})"


__all__ = ["LocalizedText", "RelatedText", "TermHandler", "matcher_for"]
