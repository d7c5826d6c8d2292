"""SQLAlchemy adapter – facet candidates with localized labels and hit counts."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence

from sqlalchemy import and_, func, select
from sqlalchemy.orm import aliased

from mp_facets.adapters.sqlalchemy.mixins import SoftDeleteMixin, is_soft_deletable
from mp_facets.adapters.sqlalchemy.models import LocalizedProperty
from mp_facets.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_facets.adapters.sqlalchemy.store import primary_key_of
from mp_facets.search.facets import FacetCandidate, FacetKind
from mp_facets.search.handlers.dimensions import MembershipTable


@dataclasses.dataclass(frozen=True)
class CandidateTable:
    """Where the refinements of one dimension come from.

    ``membership`` links candidates to searched roots and drives the hit
    count; ``locale_key_group`` enables localized labels (falling back to
    the base ``label`` column when no translation exists).
    """
    entity: Any
    label: str = "name"
    display_order: str | None = "display_order"
    membership: MembershipTable | None = None
    locale_key_group: str | None = None
    locale_key: str = "Name"
    criteria: Sequence[Any] = ()


class SqlAlchemyCandidateSource:
    """:class:`~mp_facets.search.ports.FacetCandidateSource` over mapped tables."""

    def __init__(
        self,
        session_factory: SqlAlchemySessionFactory,
        tables: Mapping[FacetKind, CandidateTable],
    ) -> None:
        self._sessions = session_factory
        self._tables = dict(tables)

    def statement(self, table: CandidateTable, language_id: int | None) -> Any:
        entity = table.entity
        key = primary_key_of(entity)
        label = getattr(entity, table.label)
        display_order = getattr(entity, table.display_order) if table.display_order else None
        hits = None

        columns: list[Any] = [key, label]
        group_by: list[Any] = [key, label]
        if display_order is not None:
            columns.append(display_order)
            group_by.append(display_order)

        localized = None
        if table.locale_key_group and language_id:
            localized = aliased(LocalizedProperty)
            columns[1] = func.coalesce(func.nullif(localized.locale_value, ""), label)
            group_by.append(localized.locale_value)

        if table.membership is not None:
            link = aliased(table.membership.entity)
            hits = func.count(func.distinct(getattr(link, table.membership.root_key)))

        statement = select(*columns, *([hits] if hits is not None else [])).select_from(entity)
        if localized is not None:
            statement = statement.outerjoin(
                localized,
                and_(
                    localized.entity_id == key,
                    localized.locale_key_group == table.locale_key_group,
                    localized.locale_key == table.locale_key,
                    localized.language_id == language_id,
                ),
            )
        if hits is not None:
            onclause = [getattr(link, table.membership.value_key) == key]
            if is_soft_deletable(table.membership.entity):
                onclause.append(SoftDeleteMixin.not_deleted_filter(link))
            statement = statement.outerjoin(link, and_(*onclause))
        if is_soft_deletable(entity):
            statement = statement.where(entity.not_deleted_filter())
        if table.criteria:
            statement = statement.where(*table.criteria)
        return statement.group_by(*group_by)

    async def candidates(self, kind: FacetKind, language_id: int | None) -> list[FacetCandidate]:
        table = self._tables.get(kind)
        if table is None:
            return []
        async with self._sessions() as session:
            rows = (await session.execute(self.statement(table, language_id))).all()

        has_order = table.display_order is not None
        has_hits = table.membership is not None
        candidates = []
        for row in rows:
            candidates.append(
                FacetCandidate(
                    value=row[0],
                    label=row[1] or "",
                    display_order=row[2] if has_order else 0,
                    hit_count=row[-1] if has_hits else 0,
                )
            )
        return candidates


__all__ = ["CandidateTable", "SqlAlchemyCandidateSource"]
