"""Catalog service for the storefront pages.

Combines Storefront API fetches with the page-level policies: listing
pages fail as "unavailable", detail pages fail as "not found".
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import ValidationError

from storefront.catalog.filters import FacetValueSet, FilterCriteria, FilterEngine
from storefront.exceptions import CatalogUnavailableError, NotFoundError
from storefront.shopify.client import CachePolicy, FetchResult, ShopifyClient
from storefront.shopify.models import Collection, Product, connection_nodes
from storefront.shopify.queries import (
    GET_ALL_COLLECTIONS_QUERY,
    GET_B2B_PRODUCTS_QUERY,
    GET_COLLECTION_WITH_B2B_PRODUCTS_QUERY,
    GET_PRODUCT_BY_HANDLE_QUERY,
    build_verification_query,
    tag_value,
)

logger = structlog.get_logger()


@dataclass
class ProductListing:
    """Product list page state.

    Attributes:
        products: Full fetched slice.
        facets: Tags and vendors available for filtering.
        criteria: Filters applied to produce `visible`.
        visible: Products matching the criteria, in original order.
    """

    products: list[Product]
    facets: FacetValueSet
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    visible: list[Product] = field(default_factory=list)


def page_title(handle: str) -> str:
    """Title-case a handle, e.g. 'blue-widget' -> 'Blue Widget'."""
    return " ".join(word[:1].upper() + word[1:] for word in handle.split("-"))


def _error_messages(result: FetchResult[Any]) -> list[str]:
    return [error.message for error in result.errors]


class CatalogService:
    """Service for catalog pages.

    Example usage:
        client = ShopifyClient(settings.shopify_config())
        service = CatalogService(client, b2b_tag_filter="tag:B2B")

        listing = await service.list_products(FilterCriteria(search="acme"))
        product = await service.get_product("blue-widget")
    """

    def __init__(
        self,
        client: ShopifyClient,
        b2b_tag_filter: str = "tag:B2B",
        products_page_size: int = 24,
        collections_page_size: int = 25,
        cache: CachePolicy = CachePolicy.DEFAULT,
    ) -> None:
        """Initialize service.

        Args:
            client: Storefront API client.
            b2b_tag_filter: Search expression selecting wholesale products.
            products_page_size: Products fetched per listing.
            collections_page_size: Collections fetched per listing.
            cache: Cache directive used for page fetches.
        """
        self.client = client
        self.b2b_tag_filter = b2b_tag_filter
        self.products_page_size = products_page_size
        self.collections_page_size = collections_page_size
        self.cache = cache

    async def list_collections(self) -> list[Collection]:
        """Get all collections.

        Raises:
            CatalogUnavailableError: If the fetch failed or returned no data.
        """
        result = await self.client.fetch(
            GET_ALL_COLLECTIONS_QUERY,
            variables={"first": self.collections_page_size},
            cache=self.cache,
        )

        if result.has_errors or not result.data or not result.data.get("collections"):
            logger.error("Failed to fetch collections", errors=_error_messages(result))
            raise CatalogUnavailableError("collections", _error_messages(result))

        try:
            return [
                Collection.model_validate(node)
                for node in connection_nodes(result.data["collections"])
            ]
        except ValidationError as e:
            logger.error("Malformed collections payload", error=str(e))
            raise CatalogUnavailableError("collections", [str(e)]) from e

    async def get_collection(self, handle: str) -> Collection:
        """Get a collection with its B2B products.

        The tag filter is applied upstream through the `filters` argument.

        Args:
            handle: Collection handle.

        Raises:
            NotFoundError: If the fetch failed or the collection is absent.
        """
        result = await self.client.fetch(
            GET_COLLECTION_WITH_B2B_PRODUCTS_QUERY,
            variables={
                "handle": handle,
                "firstProducts": self.products_page_size,
                "productFilters": [{"tag": tag_value(self.b2b_tag_filter)}],
            },
            cache=self.cache,
        )

        node = (result.data or {}).get("collectionByHandle")
        if result.has_errors or not node:
            logger.error(
                "Failed to fetch collection or its B2B products",
                handle=handle,
                errors=_error_messages(result),
            )
            raise NotFoundError("Collection", handle)

        try:
            return Collection.model_validate(node)
        except ValidationError as e:
            logger.error("Malformed collection payload", handle=handle, error=str(e))
            raise NotFoundError("Collection", handle, reason="malformed payload") from e

    async def fetch_products(self) -> list[Product]:
        """Fetch the B2B product slice.

        Raises:
            CatalogUnavailableError: If the fetch failed or returned no data.
        """
        result = await self.client.fetch(
            GET_B2B_PRODUCTS_QUERY,
            variables={"first": self.products_page_size, "query": self.b2b_tag_filter},
            cache=self.cache,
        )

        if result.has_errors or not result.data or not result.data.get("products"):
            logger.error("Failed to fetch B2B products", errors=_error_messages(result))
            raise CatalogUnavailableError("wholesale products", _error_messages(result))

        try:
            return [
                Product.model_validate(node)
                for node in connection_nodes(result.data["products"])
            ]
        except ValidationError as e:
            logger.error("Malformed products payload", error=str(e))
            raise CatalogUnavailableError("wholesale products", [str(e)]) from e

    async def list_products(self, criteria: FilterCriteria | None = None) -> ProductListing:
        """Get the product list page with facets and filtered products.

        Args:
            criteria: Active filters; empty when omitted.

        Raises:
            CatalogUnavailableError: If the product slice could not be loaded.
        """
        criteria = criteria or FilterCriteria()
        products = await self.fetch_products()
        engine = FilterEngine(products)

        if not products:
            logger.warning(
                "No wholesale products found",
                tag_filter=self.b2b_tag_filter,
            )

        return ProductListing(
            products=products,
            facets=engine.facets,
            criteria=criteria,
            visible=engine.apply(criteria),
        )

    async def get_product(self, handle: str) -> Product:
        """Get a B2B product by handle.

        Fetches the product together with a verification search restricted
        to the B2B tag filter; the product is returned only when the
        verification finds the same product.

        Args:
            handle: Product handle.

        Raises:
            NotFoundError: If the fetch failed, the product is absent,
                or it is not a B2B product.
        """
        result = await self.client.fetch(
            GET_PRODUCT_BY_HANDLE_QUERY,
            variables={
                "handle": handle,
                "productQueryForVerification": build_verification_query(
                    handle, self.b2b_tag_filter
                ),
            },
            cache=self.cache,
        )

        data = result.data or {}
        node = data.get("productByHandle")
        if result.has_errors or not node:
            logger.error(
                "Failed to fetch product by handle",
                handle=handle,
                errors=_error_messages(result),
            )
            raise NotFoundError("Product", handle)

        try:
            product = Product.model_validate(node)
        except ValidationError as e:
            logger.error("Malformed product payload", handle=handle, error=str(e))
            raise NotFoundError("Product", handle, reason="malformed payload") from e

        verified_ids = [
            verified.get("id")
            for verified in connection_nodes(data.get("b2bVerifiedProduct"))
            if isinstance(verified, dict)
        ]
        if not verified_ids or verified_ids[0] != product.id:
            logger.warning(
                "Product found but failed B2B verification",
                handle=handle,
                product_id=product.id,
                verified_ids=verified_ids,
            )
            raise NotFoundError("Product", handle, reason="not a B2B product")

        return product
