"""Catalog – product search scope."""
from mp_facets.catalog.scope import ENTITY_NAME, catalog_candidate_tables, catalog_scope

__all__ = ["ENTITY_NAME", "catalog_candidate_tables", "catalog_scope"]
