"""Unit tests for the per-run query context."""

from __future__ import annotations

import pytest

from mp_facets.kernel.errors import InvariantViolationError
from mp_facets.search.aliases import InMemoryAliasResolver
from mp_facets.search.context import FirstWriteWins, QueryContext
from mp_facets.search.facets import FacetDimension, FacetKind
from mp_facets.search.query import SearchQuery
from mp_facets.search.settings import SearchSettings
from mp_facets.search.snapshot import SearchSnapshot


def _context(**tokens: str) -> QueryContext:
    return QueryContext(query=SearchQuery(tokens=tokens), snapshot=SearchSnapshot(SearchSettings()))


class TestFirstWriteWins:
    def test_first_offer_is_kept(self) -> None:
        register: FirstWriteWins[int] = FirstWriteWins()
        assert register.offer(5) is True
        assert register.offer(9) is False
        assert register.value == 5
        assert register.is_set

    def test_zero_counts_as_set(self) -> None:
        register: FirstWriteWins[int] = FirstWriteWins()
        register.offer(0)
        assert register.offer(3) is False
        assert register.value == 0

    def test_unset(self) -> None:
        register: FirstWriteWins[int] = FirstWriteWins()
        assert register.value is None
        assert not register.is_set
        assert "unset" in repr(register)


class TestQueryContext:
    def test_default_ids_are_per_kind(self) -> None:
        ctx = _context()
        ctx.default_id(FacetKind.CATEGORY).offer(5)
        ctx.default_id(FacetKind.MANUFACTURER).offer(7)
        assert ctx.default_value(FacetKind.CATEGORY) == 5
        assert ctx.default_value(FacetKind.MANUFACTURER) == 7
        assert ctx.default_value(FacetKind.FORUM) is None

    def test_grouping_before_seal(self) -> None:
        ctx = _context()
        assert ctx.is_grouping_required is False
        ctx.require_grouping()
        assert ctx.is_grouping_required is True

    def test_grouping_after_seal_raises(self) -> None:
        ctx = _context()
        ctx.seal()
        with pytest.raises(InvariantViolationError):
            ctx.require_grouping()
        assert ctx.is_grouping_required is False


class TestSearchSnapshot:
    def test_alias_wins_over_default_token(self) -> None:
        resolver = InMemoryAliasResolver()
        resolver.add(FacetKind.CATEGORY, "Kategorie", language_id=2)
        dims = [FacetDimension(FacetKind.CATEGORY, "categoryid", "categoryid")]
        snap = SearchSnapshot.capture(SearchSettings(), resolver, dims, language_id=2)
        assert snap.token_for(FacetKind.CATEGORY, "categoryid") == "kategorie"

    def test_neutral_alias_fallback(self) -> None:
        resolver = InMemoryAliasResolver({(FacetKind.FORUM, 0): "forum"})
        dims = [FacetDimension(FacetKind.FORUM, "f", "forumid")]
        snap = SearchSnapshot.capture(SearchSettings(), resolver, dims, language_id=3)
        assert snap.token_for(FacetKind.FORUM, "f") == "forum"

    def test_without_resolver_uses_default(self) -> None:
        dims = [FacetDimension(FacetKind.FORUM, "f", "forumid")]
        snap = SearchSnapshot.capture(SearchSettings(), None, dims)
        assert snap.token_for(FacetKind.FORUM, "f") == "f"
        assert snap.token_for(None, "tagid") == "tagid"

    def test_aliases_are_read_only(self) -> None:
        snap = SearchSnapshot.capture(SearchSettings(), None, [FacetDimension(FacetKind.FORUM, "f", "forumid")])
        with pytest.raises(TypeError):
            snap.aliases[FacetKind.FORUM] = "x"  # type: ignore[index]
