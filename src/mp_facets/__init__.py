"""
mp_facets – faceted query-composition engine.

Import path convention::

    from mp_facets.search import SearchQuery, SearchService
    from mp_facets.catalog import catalog_scope
    from mp_facets.adapters.sqlalchemy import SqlAlchemyEntityStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
