"""Catalog endpoints.

Collection list, collection detail, product list and product detail pages.
Errors raised by the catalog service are mapped to responses in main.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import get_catalog_service
from storefront.api.schemas import (
    CollectionDetailSchema,
    CollectionListResponse,
    CollectionSchema,
    ErrorResponse,
    ProductDetailSchema,
    ProductListResponse,
)
from storefront.catalog.filters import FilterCriteria
from storefront.catalog.service import CatalogService

router = APIRouter()


@router.get(
    "/collections",
    response_model=CollectionListResponse,
    responses={502: {"model": ErrorResponse}},
    tags=["Collections"],
)
async def list_collections(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CollectionListResponse:
    """List collections."""
    collections = await catalog.list_collections()
    return CollectionListResponse(
        items=[CollectionSchema.from_collection(c) for c in collections],
        total=len(collections),
    )


@router.get(
    "/collections/{handle}",
    response_model=CollectionDetailSchema,
    responses={404: {"model": ErrorResponse}},
    tags=["Collections"],
)
async def get_collection(
    handle: str,
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CollectionDetailSchema:
    """Get a collection with its B2B products."""
    collection = await catalog.get_collection(handle)
    return CollectionDetailSchema.from_collection(collection)


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={502: {"model": ErrorResponse}},
    tags=["Products"],
)
async def list_products(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    search: Annotated[str, Query(max_length=200)] = "",
    tag: Annotated[str | None, Query()] = None,
    vendor: Annotated[str | None, Query()] = None,
) -> ProductListResponse:
    """List B2B products.

    Args:
        search: Case-insensitive substring of title, tag or vendor.
        tag: Exact tag; 'all' or empty means no filter.
        vendor: Exact vendor; 'all' or empty means no filter.

    Returns:
        Matching products with facet values for the filter dropdowns.
    """
    criteria = FilterCriteria(search=search, tag=tag, vendor=vendor)
    listing = await catalog.list_products(criteria)
    return ProductListResponse.from_listing(listing)


@router.get(
    "/products/{handle}",
    response_model=ProductDetailSchema,
    responses={404: {"model": ErrorResponse}},
    tags=["Products"],
)
async def get_product(
    handle: str,
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductDetailSchema:
    """Get a verified B2B product."""
    product = await catalog.get_product(handle)
    return ProductDetailSchema.from_product(product)
