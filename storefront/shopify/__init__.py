"""Shopify Storefront API integration.

GraphQL client, query documents and catalog models.
"""

from storefront.shopify.client import (
    ApiError,
    ApiErrorLocation,
    CachePolicy,
    FetchResult,
    ShopifyClient,
)
from storefront.shopify.models import (
    Collection,
    Image,
    Money,
    PriceRange,
    Product,
    ProductOption,
    ProductVariant,
    SelectedOption,
)
from storefront.shopify.queries import build_verification_query

__all__ = [
    # Client
    "ApiError",
    "ApiErrorLocation",
    "CachePolicy",
    "FetchResult",
    "ShopifyClient",
    # Models
    "Collection",
    "Image",
    "Money",
    "PriceRange",
    "Product",
    "ProductOption",
    "ProductVariant",
    "SelectedOption",
    # Queries
    "build_verification_query",
]
