"""SQLAlchemy adapter – entity store over async sessions.

Queries are immutable wrappers around a ``Select``; nothing touches the
database until :meth:`SqlAlchemyEntityStore.materialize`.
"""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Sequence

from sqlalchemy import Select, func, inspect, select

from mp_facets.adapters.sqlalchemy.mixins import is_soft_deletable
from mp_facets.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_facets.search.cancellation import raise_if_canceled


def primary_key_of(entity: Any) -> Any:
    """Return the mapped attribute of *entity*'s (single-column) primary key."""
    mapper = inspect(entity)
    column = mapper.primary_key[0]
    return getattr(entity, mapper.get_property_by_column(column).key)


@dataclasses.dataclass(frozen=True)
class SqlAlchemyQuery:
    entity: Any
    statement: Select[Any]
    skip: int = 0
    take: int | None = None

    @property
    def key(self) -> Any:
        return primary_key_of(self.entity)

    def where(self, *criteria: Any) -> "SqlAlchemyQuery":
        return dataclasses.replace(self, statement=self.statement.where(*criteria))

    def join(self, target: Any, onclause: Any, *, outer: bool = False) -> "SqlAlchemyQuery":
        return dataclasses.replace(self, statement=self.statement.join(target, onclause, isouter=outer))

    def order_by(self, *clauses: Any) -> "SqlAlchemyQuery":
        return dataclasses.replace(self, statement=self.statement.order_by(*clauses))

    def group_by_first(self) -> "SqlAlchemyQuery":
        """Collapse joined duplicates to one row per primary key.

        The filtered statement is reduced to its grouped keys and the entity
        is re-selected by key, which keeps ordering and paging on plain
        entity rows.
        """
        key = self.key
        ids = self.statement.with_only_columns(key).group_by(key).order_by(None).correlate(None)
        return dataclasses.replace(self, statement=select(self.entity).where(key.in_(ids)))

    def skip_take(self, skip: int, take: int) -> "SqlAlchemyQuery":
        return dataclasses.replace(self, skip=max(skip, 0), take=take)

    @property
    def count_statement(self) -> Select[Any]:
        return select(func.count()).select_from(self.statement.order_by(None).subquery())

    @property
    def paged_statement(self) -> Select[Any]:
        statement = self.statement
        if self.skip:
            statement = statement.offset(self.skip)
        if self.take is not None:
            statement = statement.limit(self.take)
        return statement


class SqlAlchemyEntityStore:
    """:class:`~mp_facets.search.ports.EntityStore` backed by SQLAlchemy.

    Base queries exclude soft-deleted rows of entities that use
    :class:`~mp_facets.adapters.sqlalchemy.mixins.SoftDeleteMixin`.
    Database errors propagate unchanged.
    """

    def __init__(self, session_factory: SqlAlchemySessionFactory) -> None:
        self._sessions = session_factory

    def create_base_query(self, kind: Any) -> SqlAlchemyQuery:
        statement = select(kind)
        if is_soft_deletable(kind):
            statement = statement.where(kind.not_deleted_filter())
        return SqlAlchemyQuery(entity=kind, statement=statement)

    async def materialize(
        self,
        query: SqlAlchemyQuery,
        cancel: asyncio.Event | None = None,
    ) -> tuple[Sequence[Any], int]:
        raise_if_canceled(cancel)
        async with self._sessions() as session:
            total = (await session.execute(query.count_statement)).scalar_one()
            raise_if_canceled(cancel)
            if total == 0 or (query.take is not None and query.skip >= total):
                return [], total
            result = await session.execute(query.paged_statement)
            return list(result.scalars().all()), total


__all__ = ["SqlAlchemyEntityStore", "SqlAlchemyQuery", "primary_key_of"]
