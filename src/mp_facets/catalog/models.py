"""Catalog – ORM models of the product search scope."""
from __future__ import annotations

import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mp_facets.adapters.sqlalchemy.mixins import SoftDeleteMixin
from mp_facets.adapters.sqlalchemy.models import Base


class DeliveryTime(Base):
    __tablename__ = "delivery_time"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    display_order: Mapped[int] = mapped_column(default=0)


class Product(SoftDeleteMixin, Base):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(400))
    sku: Mapped[str | None] = mapped_column(String(400), nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    parent_grouped_product_id: Mapped[int] = mapped_column(default=0, index=True)
    delivery_time_id: Mapped[int | None] = mapped_column(ForeignKey("delivery_time.id"), nullable=True)
    condition: Mapped[int] = mapped_column(default=0)
    is_system_product: Mapped[bool] = mapped_column(Boolean, default=False)
    created_on_utc: Mapped[datetime.datetime] = mapped_column(
        DateTime(), default=lambda: datetime.datetime.now(datetime.UTC).replace(tzinfo=None)
    )


class Category(SoftDeleteMixin, Base):
    __tablename__ = "category"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(400))
    display_order: Mapped[int] = mapped_column(default=0)


class ProductCategory(Base):
    __tablename__ = "product_category_mapping"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("product.id"), index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("category.id"), index=True)
    is_featured_product: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(default=0)


class Manufacturer(SoftDeleteMixin, Base):
    __tablename__ = "manufacturer"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(400))
    display_order: Mapped[int] = mapped_column(default=0)


class ProductManufacturer(Base):
    __tablename__ = "product_manufacturer_mapping"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("product.id"), index=True)
    manufacturer_id: Mapped[int] = mapped_column(ForeignKey("manufacturer.id"), index=True)
    is_featured_product: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(default=0)


class ProductTag(Base):
    __tablename__ = "product_tag"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(400))


class ProductTagMapping(Base):
    __tablename__ = "product_product_tag_mapping"

    product_id: Mapped[int] = mapped_column(ForeignKey("product.id"), primary_key=True)
    product_tag_id: Mapped[int] = mapped_column(ForeignKey("product_tag.id"), primary_key=True)


__all__ = [
    "Category",
    "DeliveryTime",
    "Manufacturer",
    "Product",
    "ProductCategory",
    "ProductManufacturer",
    "ProductTag",
    "ProductTagMapping",
]
