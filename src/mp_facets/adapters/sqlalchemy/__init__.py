"""SQLAlchemy adapter – entity store, restriction overlays, facet candidates."""
from mp_facets.adapters.sqlalchemy.candidates import CandidateTable, SqlAlchemyCandidateSource
from mp_facets.adapters.sqlalchemy.mixins import SoftDeleteMixin
from mp_facets.adapters.sqlalchemy.models import AclRecord, Base, LocalizedProperty, StoreMapping
from mp_facets.adapters.sqlalchemy.restrictions import (
    AclRestriction,
    CompositeRestriction,
    StoreMappingRestriction,
)
from mp_facets.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_facets.adapters.sqlalchemy.store import SqlAlchemyEntityStore, SqlAlchemyQuery

__all__ = [
    "AclRecord",
    "AclRestriction",
    "Base",
    "CandidateTable",
    "CompositeRestriction",
    "LocalizedProperty",
    "SoftDeleteMixin",
    "SqlAlchemyCandidateSource",
    "SqlAlchemyEntityStore",
    "SqlAlchemyQuery",
    "SqlAlchemySessionFactory",
    "StoreMapping",
]
