"""Catalog pages, filtering and price formatting."""

from storefront.catalog.filters import (
    ALL_SENTINEL,
    FacetValueSet,
    FilterCriteria,
    FilterEngine,
    filter_products,
)
from storefront.catalog.pricing import PRICE_UNAVAILABLE, format_price, format_price_range
from storefront.catalog.service import CatalogService, ProductListing, page_title

__all__ = [
    # Filters
    "ALL_SENTINEL",
    "FacetValueSet",
    "FilterCriteria",
    "FilterEngine",
    "filter_products",
    # Pricing
    "PRICE_UNAVAILABLE",
    "format_price",
    "format_price_range",
    # Service
    "CatalogService",
    "ProductListing",
    "page_title",
]
