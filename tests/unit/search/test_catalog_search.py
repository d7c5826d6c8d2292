"""End-to-end catalog searches against a seeded in-memory SQLite database."""

from __future__ import annotations

import asyncio
from typing import Any

from mp_facets.adapters.sqlalchemy import (
    AclRestriction,
    CompositeRestriction,
    SqlAlchemyCandidateSource,
    SqlAlchemyEntityStore,
    StoreMappingRestriction,
)
from mp_facets.catalog import ENTITY_NAME, catalog_candidate_tables, catalog_scope
from mp_facets.kernel.security import ANONYMOUS, Principal
from mp_facets.search.aliases import DictLocalizer, InMemoryAliasResolver
from mp_facets.search.facets import FacetKind
from mp_facets.search.result import SearchResult
from mp_facets.search.service import SearchService
from mp_facets.search.settings import SearchSettings


def _search(
    catalog_db: Any,
    tokens: dict[str, Any],
    *,
    settings: SearchSettings | None = None,
    principal: Principal = ANONYMOUS,
    language_id: int | None = None,
    restricted: bool = False,
    aliases: Any = None,
) -> SearchResult[Any]:
    async def run() -> SearchResult[Any]:
        sessions = await catalog_db()
        try:
            service = SearchService(
                catalog_scope(),
                SqlAlchemyEntityStore(sessions),
                settings or SearchSettings(enforce_restrictions=restricted),
                restriction=CompositeRestriction(
                    [StoreMappingRestriction(ENTITY_NAME), AclRestriction(ENTITY_NAME)]
                ),
                aliases=aliases,
                localizer=DictLocalizer(),
                candidates=SqlAlchemyCandidateSource(sessions, catalog_candidate_tables()),
            )
            query = service.create_query(tokens, language_id=language_id)
            return await service.search(query, principal)
        finally:
            await sessions.dispose()

    return asyncio.run(run())


def _ids(result: SearchResult[Any]) -> list[int]:
    return [p.id for p in result.items]


class TestBaseQuery:
    def test_excludes_deleted_and_system_products(self, catalog_db) -> None:
        result = _search(catalog_db, {})
        assert sorted(_ids(result)) == [1, 2, 3, 4]
        assert result.total == 4

    def test_default_sort_by_name(self, catalog_db) -> None:
        assert _ids(_search(catalog_db, {})) == [4, 3, 1, 2]

    def test_price_sort(self, catalog_db) -> None:
        assert _ids(_search(catalog_db, {"o": "price_desc"})) == [3, 1, 2, 4]


class TestDimensions:
    def test_category_filter(self, catalog_db) -> None:
        result = _search(catalog_db, {"categoryid": "5"})
        assert sorted(_ids(result)) == [1, 2]
        category = result.facet("categoryid")
        assert category is not None
        assert [v.value for v in category.selected_values] == [5]

    def test_multiple_categories_are_deduplicated(self, catalog_db) -> None:
        result = _search(catalog_db, {"categoryid": "5,6"})
        assert sorted(_ids(result)) == [1, 2, 3]
        assert result.total == 3

    def test_sentinel_zero(self, catalog_db) -> None:
        assert _ids(_search(catalog_db, {"categoryid": "0"})) == [4]

    def test_featured_category(self, catalog_db) -> None:
        assert _ids(_search(catalog_db, {"featuredcategoryid": "5"})) == [1]

    def test_not_featured_category(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {"notfeaturedcategoryid": "5,6"}))) == [1, 2, 3]

    def test_manufacturer_and_tag(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {"manufacturerid": "1"}))) == [1, 3]
        assert sorted(_ids(_search(catalog_db, {"tagid": "2"}))) == [1, 3]
        assert _ids(_search(catalog_db, {"tagid": "2", "manufacturerid": "1", "categoryid": "5"})) == [1]

    def test_delivery_time_alias(self, catalog_db) -> None:
        aliases = InMemoryAliasResolver({(FacetKind.DELIVERY_TIME, 0): "delivery"})
        result = _search(catalog_db, {"delivery": "2"}, aliases=aliases)
        assert _ids(result) == [2]
        assert [v.value for v in result.facet("deliverytimeid").selected_values] == [2]

    def test_malformed_filter_is_ignored(self, catalog_db) -> None:
        assert _search(catalog_db, {"categoryid": "abc"}).total == 4

    def test_oversized_ids_are_ignored(self, catalog_db) -> None:
        assert _search(catalog_db, {"categoryid": "99999999999999999999"}).total == 4
        assert _search(catalog_db, {"id": "99999999999999999999"}).total == 4
        assert _ids(_search(catalog_db, {"id": "99999999999999999999,3"})) == [3]


class TestCreatedOn:
    def test_lower_bound(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {"createdon": "2024-02-01~"}))) == [3, 4]

    def test_upper_bound(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {"createdon": "~2024-01-31"}))) == [1, 2]

    def test_reversed_bounds(self, catalog_db) -> None:
        forward = _search(catalog_db, {"createdon": "2024-01-15~2024-02-15"})
        backward = _search(catalog_db, {"createdon": "2024-02-15~2024-01-15"})
        assert _ids(forward) == _ids(backward) == [4]

    def test_malformed_range_is_ignored(self, catalog_db) -> None:
        assert _search(catalog_db, {"createdon": "soon~later"}).total == 4


class TestTerm:
    def test_direct_columns(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {"q": "chair"}))) == [1, 2]

    def test_sku(self, catalog_db) -> None:
        assert _ids(_search(catalog_db, {"q": "TB-"})) == [3]

    def test_localized_values_deduplicated(self, catalog_db) -> None:
        result = _search(catalog_db, {"q": "stuhl"}, language_id=2)
        assert sorted(_ids(result)) == [1, 2]
        assert result.total == 2

    def test_localized_values_need_language(self, catalog_db) -> None:
        assert _search(catalog_db, {"q": "stuhl"}).total == 0

    def test_wildcard_is_literal(self, catalog_db) -> None:
        assert _search(catalog_db, {"q": "%"}).total == 0


class TestPaging:
    def test_second_page(self, catalog_db) -> None:
        settings = SearchSettings(enforce_restrictions=False, default_page_size=3)
        result = _search(catalog_db, {"i": "2"}, settings=settings)
        assert _ids(result) == [2]
        assert result.total == 4
        assert result.total_pages == 2

    def test_oversized_page_index_falls_back_to_first_page(self, catalog_db) -> None:
        result = _search(catalog_db, {"i": "99999999999999999999"})
        assert result.page == 1
        assert result.total == 4

    def test_page_beyond_end(self, catalog_db) -> None:
        settings = SearchSettings(enforce_restrictions=False, default_page_size=3)
        result = _search(catalog_db, {"i": "9"}, settings=settings)
        assert result.items == []
        assert result.total == 4


class TestRestrictions:
    def test_anonymous_hides_acl_products(self, catalog_db) -> None:
        assert sorted(_ids(_search(catalog_db, {}, restricted=True))) == [1, 3, 4]

    def test_role_grants_access(self, catalog_db) -> None:
        principal = Principal(subject="u", role_ids=frozenset({10}))
        assert sorted(_ids(_search(catalog_db, {}, restricted=True, principal=principal))) == [1, 2, 3, 4]

    def test_store_mapping(self, catalog_db) -> None:
        principal = Principal(subject="u", store_id=1, role_ids=frozenset({10}))
        assert sorted(_ids(_search(catalog_db, {}, restricted=True, principal=principal))) == [1, 2, 4]
        principal = Principal(subject="u", store_id=2, role_ids=frozenset({10}))
        assert sorted(_ids(_search(catalog_db, {}, restricted=True, principal=principal))) == [1, 2, 3, 4]

    def test_restrictions_disabled(self, catalog_db) -> None:
        principal = Principal(subject="u", store_id=1)
        assert _search(catalog_db, {}, principal=principal).total == 4


class TestFacets:
    def test_category_candidates(self, catalog_db) -> None:
        category = _search(catalog_db, {"categoryid": "5"}).facet("categoryid")
        assert [(v.value, v.label, v.is_selected) for v in category.values] == [
            (5, "Chairs", True),
            (6, "Tables", False),
        ]

    def test_localized_candidate_label(self, catalog_db) -> None:
        category = _search(catalog_db, {}, language_id=2).facet("categoryid")
        assert [v.label for v in category.values] == ["Stühle", "Tables"]

    def test_manufacturer_hits(self, catalog_db) -> None:
        manufacturer = _search(catalog_db, {}).facet("manufacturerid")
        assert [(v.label, v.hit_count) for v in manufacturer.values] == [("Acme", 2), ("Globex", 1)]

    def test_unused_values_below_threshold(self, catalog_db) -> None:
        category = _search(catalog_db, {}).facet("categoryid")
        assert 7 not in [v.value for v in category.values]

    def test_selected_value_kept_below_threshold(self, catalog_db) -> None:
        category = _search(catalog_db, {"categoryid": "7"}).facet("categoryid")
        assert [(v.value, v.hit_count, v.is_selected) for v in category.values][-1] == (7, 0, True)
