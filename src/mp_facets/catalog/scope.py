"""Catalog – product search scope wiring.

Request tokens: ``q`` term, ``i`` page, ``s`` page size, ``o`` sort, ``id``,
``parentid``, ``categoryid`` and ``manufacturerid`` (plus featured and
not-featured variants), ``tagid``, ``deliveryid``, ``condition`` and
``createdon`` (``from~to``).
"""
from __future__ import annotations

from mp_facets.adapters.sqlalchemy.candidates import CandidateTable
from mp_facets.adapters.sqlalchemy.models import LocalizedProperty
from mp_facets.catalog.models import (
    Category,
    DeliveryTime,
    Manufacturer,
    Product,
    ProductCategory,
    ProductManufacturer,
    ProductTagMapping,
)
from mp_facets.search.facets import FacetDimension, FacetKind, FacetSorting
from mp_facets.search.handlers import (
    DateRangeHandler,
    IdInclusionHandler,
    LocalizedText,
    MembershipDimensionHandler,
    MembershipTable,
    TagHandler,
    TermHandler,
)
from mp_facets.search.scope import SearchScope

ENTITY_NAME = "Product"

CATEGORIES = MembershipTable(ProductCategory, "product_id", "category_id", featured="is_featured_product")
MANUFACTURERS = MembershipTable(ProductManufacturer, "product_id", "manufacturer_id", featured="is_featured_product")
TAGS = MembershipTable(ProductTagMapping, "product_id", "product_tag_id")

DIMENSIONS = (
    FacetDimension(FacetKind.CATEGORY, "categoryid", "categoryid", FacetSorting.DISPLAY_ORDER),
    FacetDimension(FacetKind.MANUFACTURER, "manufacturerid", "manufacturerid"),
    FacetDimension(FacetKind.DELIVERY_TIME, "deliveryid", "deliverytimeid", FacetSorting.DISPLAY_ORDER),
)

SORT_OPTIONS = {
    "name_asc": Product.name.asc(),
    "name_desc": Product.name.desc(),
    "price_asc": Product.price.asc(),
    "price_desc": Product.price.desc(),
    "created_on": Product.created_on_utc.desc(),
    "created_on_asc": Product.created_on_utc.asc(),
}


def catalog_scope() -> SearchScope:
    handlers = [
        IdInclusionHandler("id", Product.id),
        IdInclusionHandler("parentid", Product.parent_grouped_product_id),
        MembershipDimensionHandler(
            FacetKind.CATEGORY,
            CATEGORIES,
            token="categoryid",
            featured_token="featuredcategoryid",
            not_featured_token="notfeaturedcategoryid",
        ),
        MembershipDimensionHandler(
            FacetKind.MANUFACTURER,
            MANUFACTURERS,
            token="manufacturerid",
            featured_token="featuredmanufacturerid",
            not_featured_token="notfeaturedmanufacturerid",
        ),
        TagHandler("tagid", TAGS),
        IdInclusionHandler("deliveryid", Product.delivery_time_id, kind=FacetKind.DELIVERY_TIME),
        IdInclusionHandler("condition", Product.condition),
        DateRangeHandler("createdon", Product.created_on_utc, kind=None),
        TermHandler(
            {"name": Product.name, "sku": Product.sku, "shortdescription": Product.short_description},
            LocalizedText(LocalizedProperty, ENTITY_NAME, ("Name", "ShortDescription")),
        ),
    ]
    return SearchScope(
        name="catalog",
        entity=Product,
        handlers=handlers,
        dimensions=DIMENSIONS,
        sort_options=SORT_OPTIONS,
        default_sort="name_asc",
        default_fields=("name", "sku", "shortdescription"),
        base_criteria=(Product.is_system_product.is_(False),),
    )


def catalog_candidate_tables() -> dict[FacetKind, CandidateTable]:
    return {
        FacetKind.CATEGORY: CandidateTable(Category, membership=CATEGORIES, locale_key_group="Category"),
        FacetKind.MANUFACTURER: CandidateTable(Manufacturer, membership=MANUFACTURERS, locale_key_group="Manufacturer"),
        FacetKind.DELIVERY_TIME: CandidateTable(
            DeliveryTime,
            membership=MembershipTable(Product, "id", "delivery_time_id"),
            locale_key_group="DeliveryTime",
        ),
    }


__all__ = ["DIMENSIONS", "ENTITY_NAME", "SORT_OPTIONS", "catalog_candidate_tables", "catalog_scope"]
