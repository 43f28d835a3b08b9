"""Pytest configuration and shared fixtures."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.catalog.service import CatalogService
from storefront.config import ShopifyConfig
from storefront.shopify.client import ApiError, FetchResult, ShopifyClient
from storefront.shopify.models import Product


def make_product_node(
    index: int,
    tags: list[str],
    vendor: str | None,
    title: str | None = None,
    amount: str = "10.00",
) -> dict[str, Any]:
    """Build a product node in the Storefront API shape."""
    return {
        "id": f"gid://shopify/Product/{index}",
        "handle": f"product-{index}",
        "title": title or f"Product {index}",
        "tags": tags,
        "vendor": vendor,
        "featuredImage": {
            "url": f"https://cdn.example.com/{index}.jpg",
            "altText": None,
            "width": 800,
            "height": 800,
        },
        "priceRange": {
            "minVariantPrice": {"amount": amount, "currencyCode": "USD"},
        },
    }


def product_detail_data(product_id: str, verified_id: str | None) -> dict[str, Any]:
    """Build the product-by-handle response data with a verification result."""
    node = make_product_node(1, ["B2B"], "Acme", title="Steel Bolts", amount="10.00")
    node["id"] = product_id
    node["handle"] = "steel-bolts"
    node["descriptionHtml"] = "<p>Strong</p>"
    node["priceRange"]["maxVariantPrice"] = {"amount": "20.00", "currencyCode": "USD"}
    node["options"] = [{"id": "o1", "name": "Title", "values": ["Default Title"]}]
    node["variants"] = {"edges": []}
    edges = [] if verified_id is None else [{"node": {"id": verified_id}}]
    return {"productByHandle": node, "b2bVerifiedProduct": {"edges": edges}}


def make_success_result(data: dict[str, Any]) -> FetchResult[dict[str, Any]]:
    """Create a successful fetch result."""
    return FetchResult(data=data)


def make_error_result(message: str) -> FetchResult[dict[str, Any]]:
    """Create a failed fetch result."""
    return FetchResult(data=None, errors=[ApiError(message=message)])


@pytest.fixture
def shopify_config() -> ShopifyConfig:
    """Complete client configuration."""
    return ShopifyConfig(
        store_domain="test-store.myshopify.com",
        access_token="test-token",
        api_version="2024-04",
        timeout=5.0,
        cache_ttl_seconds=60.0,
    )


@pytest.fixture
def product_nodes() -> list[dict[str, Any]]:
    """Three B2B products: two from Acme, one from Globex."""
    return [
        make_product_node(1, ["B2B", "Sale"], "Acme", title="Steel Bolts"),
        make_product_node(2, ["B2B"], "Acme", title="Copper Wire"),
        make_product_node(3, ["B2B", "New"], "Globex", title="Safety Gloves"),
    ]


@pytest.fixture
def products(product_nodes: list[dict[str, Any]]) -> list[Product]:
    """Parsed sample products."""
    return [Product.model_validate(node) for node in product_nodes]


@pytest.fixture
def mock_shopify_client() -> MagicMock:
    """Create a mock Storefront API client."""
    client = MagicMock(spec=ShopifyClient)
    client.fetch = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def catalog_service(mock_shopify_client: MagicMock) -> CatalogService:
    """Create a catalog service with a mocked client."""
    return CatalogService(
        mock_shopify_client,
        b2b_tag_filter="tag:B2B",
        products_page_size=24,
        collections_page_size=25,
    )
