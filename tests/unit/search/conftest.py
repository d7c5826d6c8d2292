"""Shared fixtures for search tests: recording fakes and seeded SQLite stores."""

from __future__ import annotations

import asyncio
import dataclasses
from datetime import datetime
from typing import Any, Awaitable, Callable, Sequence

import pytest
from sqlalchemy.pool import StaticPool

from mp_facets.adapters.sqlalchemy.models import AclRecord, Base, LocalizedProperty, StoreMapping
from mp_facets.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_facets.catalog.models import (
    Category,
    DeliveryTime,
    Manufacturer,
    Product,
    ProductCategory,
    ProductManufacturer,
    ProductTag,
    ProductTagMapping,
)
from mp_facets.forums.models import Customer, Forum, ForumPost, ForumTopic
from mp_facets.kernel.security import Principal
from mp_facets.search.ports import StoreQuery


# ---------------------------------------------------------------------------
# Recording fakes
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class RecordingQuery:
    """StoreQuery that records the operations applied to it."""

    entity: Any
    ops: tuple[str, ...] = ("base",)
    skip: int = 0
    take: int | None = None
    clauses: tuple[Any, ...] = ()

    @property
    def key(self) -> Any:
        return self.entity.id

    def _with(self, op: str, **changes: Any) -> "RecordingQuery":
        return dataclasses.replace(self, ops=self.ops + (op,), **changes)

    def where(self, *criteria: Any) -> "RecordingQuery":
        return self._with("where")

    def join(self, target: Any, onclause: Any, *, outer: bool = False) -> "RecordingQuery":
        return self._with("outerjoin" if outer else "join")

    def order_by(self, *clauses: Any) -> "RecordingQuery":
        return self._with("order_by", clauses=clauses)

    def group_by_first(self) -> "RecordingQuery":
        return self._with("group_by_first")

    def skip_take(self, skip: int, take: int) -> "RecordingQuery":
        return self._with("skip_take", skip=skip, take=take)


class RecordingStore:
    """EntityStore fake; ``materialize`` behaviour is pluggable."""

    def __init__(
        self,
        rows: Sequence[Any] = (),
        materialize: Callable[[StoreQuery, asyncio.Event | None], Awaitable[tuple[Sequence[Any], int]]] | None = None,
    ) -> None:
        self.rows = list(rows)
        self.base_calls: list[Any] = []
        self.materialized: list[StoreQuery] = []
        self._materialize = materialize

    def create_base_query(self, kind: Any) -> RecordingQuery:
        self.base_calls.append(kind)
        return RecordingQuery(kind)

    async def materialize(self, query: StoreQuery, cancel: asyncio.Event | None = None) -> tuple[Sequence[Any], int]:
        self.materialized.append(query)
        if self._materialize is not None:
            return await self._materialize(query, cancel)
        return self.rows, len(self.rows)


class RecordingRestriction:
    def __init__(self) -> None:
        self.principals: list[Principal] = []

    def apply(self, query: RecordingQuery, principal: Principal) -> RecordingQuery:
        self.principals.append(principal)
        return query._with("restrict")


@pytest.fixture()
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def store_factory() -> type[RecordingStore]:
    return RecordingStore


@pytest.fixture()
def recording_restriction() -> RecordingRestriction:
    return RecordingRestriction()


# ---------------------------------------------------------------------------
# Seeded SQLite databases
# ---------------------------------------------------------------------------


async def _open(rows: list[Any]) -> SqlAlchemySessionFactory:
    sessions = SqlAlchemySessionFactory("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await sessions.create_all(Base.metadata)
    async with sessions() as session:
        session.add_all(rows)
        await session.commit()
    return sessions


def _catalog_rows() -> list[Any]:
    day = datetime(2024, 1, 1)
    return [
        DeliveryTime(id=1, name="Fast", display_order=1),
        DeliveryTime(id=2, name="Slow", display_order=2),
        Category(id=5, name="Chairs", display_order=1),
        Category(id=6, name="Tables", display_order=2),
        Category(id=7, name="Lamps", display_order=3),
        Manufacturer(id=1, name="Acme", display_order=1),
        Manufacturer(id=2, name="Globex", display_order=2),
        ProductTag(id=1, name="wood"),
        ProductTag(id=2, name="indoor"),
        Product(id=1, name="Oak chair", sku="CH-1", price=50.0, delivery_time_id=1, created_on_utc=day),
        Product(id=2, name="Pine chair", sku="CH-2", price=30.0, delivery_time_id=2, created_on_utc=day),
        Product(id=3, name="Glass table", sku="TB-1", price=200.0, delivery_time_id=1, created_on_utc=datetime(2024, 3, 1)),
        Product(id=4, name="Desk lamp", sku="LP-1", price=20.0, created_on_utc=datetime(2024, 2, 1)),
        Product(id=5, name="Gift card", is_system_product=True, created_on_utc=day),
        Product(id=6, name="Old chair", sku="CH-0", price=10.0, deleted_at=day, created_on_utc=day),
        ProductCategory(product_id=1, category_id=5, is_featured_product=True),
        ProductCategory(product_id=1, category_id=6),
        ProductCategory(product_id=2, category_id=5),
        ProductCategory(product_id=3, category_id=6),
        ProductCategory(product_id=6, category_id=5),
        ProductManufacturer(product_id=1, manufacturer_id=1),
        ProductManufacturer(product_id=2, manufacturer_id=2),
        ProductManufacturer(product_id=3, manufacturer_id=1),
        ProductTagMapping(product_id=1, product_tag_id=1),
        ProductTagMapping(product_id=1, product_tag_id=2),
        ProductTagMapping(product_id=3, product_tag_id=2),
        LocalizedProperty(entity_id=1, language_id=2, locale_key_group="Product", locale_key="Name", locale_value="Eichenstuhl"),
        LocalizedProperty(
            entity_id=1, language_id=2, locale_key_group="Product", locale_key="ShortDescription", locale_value="Ein Stuhl"
        ),
        LocalizedProperty(entity_id=2, language_id=2, locale_key_group="Product", locale_key="Name", locale_value="Kiefernstuhl"),
        LocalizedProperty(entity_id=3, language_id=2, locale_key_group="Product", locale_key="Name", locale_value="Glastisch"),
        LocalizedProperty(entity_id=5, language_id=2, locale_key_group="Category", locale_key="Name", locale_value="Stühle"),
        StoreMapping(entity_id=3, entity_name="Product", store_id=2),
        AclRecord(entity_id=2, entity_name="Product", customer_role_id=10),
    ]


def _forum_rows() -> list[Any]:
    return [
        Forum(id=1, name="General", display_order=2),
        Forum(id=2, name="Help", display_order=1),
        Customer(id=1, username="ann"),
        Customer(id=2, username="bob"),
        ForumTopic(id=1, forum_id=1, customer_id=1, subject="Hello world", num_posts=3, created_on_utc=datetime(2024, 1, 5)),
        ForumTopic(id=2, forum_id=2, customer_id=2, subject="Need help", num_posts=9, created_on_utc=datetime(2024, 2, 10)),
        ForumTopic(id=3, forum_id=1, customer_id=2, subject="Hello again", num_posts=1, created_on_utc=datetime(2024, 3, 20)),
        ForumTopic(id=4, forum_id=1, customer_id=1, subject="Hello draft", published=False, created_on_utc=datetime(2024, 1, 6)),
        ForumTopic(
            id=5, forum_id=2, customer_id=1, subject="Hello spam", created_on_utc=datetime(2024, 1, 7), deleted_at=datetime(2024, 1, 8)
        ),
        ForumPost(id=1, topic_id=1, customer_id=1, text="Welcome everyone"),
        ForumPost(id=2, topic_id=2, customer_id=2, text="My router keeps dropping the connection"),
        ForumPost(id=3, topic_id=2, customer_id=1, text="Try restarting the router"),
        ForumPost(id=4, topic_id=3, customer_id=2, text="Same question as before"),
        ForumPost(id=5, topic_id=4, customer_id=1, text="Router draft notes"),
    ]


@pytest.fixture()
def catalog_db() -> Callable[[], Awaitable[SqlAlchemySessionFactory]]:
    """Return a coroutine factory opening a seeded catalog database.

    Call it inside the test's own event loop; connections are loop-bound.
    """
    return lambda: _open(_catalog_rows())


@pytest.fixture()
def forum_db() -> Callable[[], Awaitable[SqlAlchemySessionFactory]]:
    return lambda: _open(_forum_rows())
