"""SQLAlchemy adapter – shared declarative base and cross-cutting tables.

``LocalizedProperty`` holds per-language text for any entity;
``StoreMapping`` and ``AclRecord`` back the restriction overlays. All three
are keyed by ``(entity_name, entity_id)`` rather than foreign keys so one
table serves every entity type.
"""
from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class LocalizedProperty(Base):
    __tablename__ = "localized_property"
    __table_args__ = (Index("ix_localized_property_lookup", "locale_key_group", "entity_id", "language_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    entity_id: Mapped[int] = mapped_column()
    language_id: Mapped[int] = mapped_column()
    locale_key_group: Mapped[str] = mapped_column(String(150))
    locale_key: Mapped[str] = mapped_column(String(150))
    locale_value: Mapped[str] = mapped_column(Text, default="")


class StoreMapping(Base):
    __tablename__ = "store_mapping"
    __table_args__ = (Index("ix_store_mapping_entity", "entity_name", "entity_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    entity_id: Mapped[int] = mapped_column()
    entity_name: Mapped[str] = mapped_column(String(400))
    store_id: Mapped[int] = mapped_column()


class AclRecord(Base):
    __tablename__ = "acl_record"
    __table_args__ = (Index("ix_acl_record_entity", "entity_name", "entity_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    entity_id: Mapped[int] = mapped_column()
    entity_name: Mapped[str] = mapped_column(String(400))
    customer_role_id: Mapped[int] = mapped_column()


__all__ = ["AclRecord", "Base", "LocalizedProperty", "StoreMapping"]
