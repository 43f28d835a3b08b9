"""FastAPI dependencies for the storefront API."""

from storefront.catalog.service import CatalogService
from storefront.config import settings
from storefront.shopify.client import ShopifyClient

# Global client instance
_shopify_client: ShopifyClient | None = None


def get_shopify_client() -> ShopifyClient:
    """Get or create the Storefront API client.

    Returns:
        ShopifyClient built from application settings.
    """
    global _shopify_client
    if _shopify_client is None:
        _shopify_client = ShopifyClient(settings.shopify_config())
    return _shopify_client


async def close_shopify_client() -> None:
    """Close and drop the global client."""
    global _shopify_client
    if _shopify_client is not None:
        await _shopify_client.close()
        _shopify_client = None


def get_catalog_service() -> CatalogService:
    """Get catalog service dependency."""
    return CatalogService(
        get_shopify_client(),
        b2b_tag_filter=settings.b2b_tag_filter,
        products_page_size=settings.products_page_size,
        collections_page_size=settings.collections_page_size,
    )
