"""Filter handlers – ordered, stateless transforms over (query, context)."""
from mp_facets.search.handlers.base import FilterHandler
from mp_facets.search.handlers.dates import DateRangeHandler
from mp_facets.search.handlers.dimensions import MembershipDimensionHandler, MembershipTable
from mp_facets.search.handlers.ids import IdInclusionHandler
from mp_facets.search.handlers.tags import TagHandler
from mp_facets.search.handlers.term import LocalizedText, RelatedText, TermHandler

__all__ = [
    "DateRangeHandler",
    "FilterHandler",
    "IdInclusionHandler",
    "LocalizedText",
    "MembershipDimensionHandler",
    "MembershipTable",
    "RelatedText",
    "TagHandler",
    "TermHandler",
]
