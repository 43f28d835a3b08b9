"""Response schemas for the storefront API.

Catalog models are flattened into display-ready payloads with formatted
prices.
"""

from pydantic import BaseModel, Field

from storefront.catalog.filters import FacetValueSet, FilterCriteria
from storefront.catalog.pricing import format_price, format_price_range
from storefront.catalog.service import ProductListing, page_title
from storefront.shopify.models import Collection, Image, Product, ProductVariant


# ============================================================================
# Common Types
# ============================================================================


class ImageSchema(BaseModel):
    """Image reference with alt text fallback applied."""

    url: str
    alt_text: str
    width: int | None = None
    height: int | None = None

    @classmethod
    def from_image(cls, image: Image | None, fallback_alt: str) -> "ImageSchema | None":
        """Convert an image, using `fallback_alt` when alt text is missing."""
        if image is None or not image.url:
            return None
        return cls(
            url=image.url,
            alt_text=image.alt_text or fallback_alt,
            width=image.width,
            height=image.height,
        )


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error_code: str
    message: str
    details: dict = Field(default_factory=dict)
    request_id: str | None = None


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCardSchema(BaseModel):
    """Product as shown in a grid."""

    id: str
    handle: str
    title: str
    tags: list[str]
    vendor: str | None = None
    image: ImageSchema | None = None
    price: str = Field(..., description="Formatted minimum price")

    @classmethod
    def from_product(cls, product: Product) -> "ProductCardSchema":
        """Build a grid card from a product."""
        min_price = product.price_range.min_variant_price if product.price_range else None
        return cls(
            id=product.id,
            handle=product.handle,
            title=product.title,
            tags=product.tags,
            vendor=product.vendor,
            image=ImageSchema.from_image(product.featured_image, product.title),
            price=format_price(min_price),
        )


class OptionSchema(BaseModel):
    """Option group."""

    name: str
    values: list[str]


class VariantSchema(BaseModel):
    """Product variant."""

    id: str
    title: str
    sku: str | None = None
    available_for_sale: bool
    price: str
    selected_options: dict[str, str]

    @classmethod
    def from_variant(cls, variant: ProductVariant) -> "VariantSchema":
        """Build a variant payload."""
        return cls(
            id=variant.id,
            title=variant.title,
            sku=variant.sku,
            available_for_sale=variant.available_for_sale,
            price=format_price(variant.price),
            selected_options={opt.name: opt.value for opt in variant.selected_options},
        )


class ProductDetailSchema(ProductCardSchema):
    """Product detail page."""

    page_title: str
    description_html: str
    options: list[OptionSchema]
    variants: list[VariantSchema]

    @classmethod
    def from_product(cls, product: Product) -> "ProductDetailSchema":
        """Build the detail payload from a verified product."""
        card = ProductCardSchema.from_product(product)
        return cls(
            **card.model_dump(exclude={"price", "image"}),
            image=card.image,
            price=format_price_range(product.price_range),
            page_title=f"{page_title(product.handle)} | Wholesale Portal",
            description_html=product.description_html,
            options=[
                OptionSchema(name=option.name, values=option.values)
                for option in product.display_options
            ],
            variants=[VariantSchema.from_variant(v) for v in product.variants],
        )


class FacetsSchema(BaseModel):
    """Filter dropdown values."""

    tags: list[str]
    vendors: list[str]

    @classmethod
    def from_facets(cls, facets: FacetValueSet) -> "FacetsSchema":
        return cls(tags=list(facets.tags), vendors=list(facets.vendors))


class FiltersSchema(BaseModel):
    """Active filters echoed back to the client."""

    search: str
    tag: str | None = None
    vendor: str | None = None

    @classmethod
    def from_criteria(cls, criteria: FilterCriteria) -> "FiltersSchema":
        return cls(search=criteria.search, tag=criteria.tag, vendor=criteria.vendor)


class ProductListResponse(BaseModel):
    """Product list page."""

    items: list[ProductCardSchema] = Field(..., description="Products matching the filters")
    total: int = Field(..., description="Number of matching products")
    fetched: int = Field(..., description="Number of products in the fetched slice")
    facets: FacetsSchema
    filters: FiltersSchema

    @classmethod
    def from_listing(cls, listing: ProductListing) -> "ProductListResponse":
        """Build the list page payload."""
        return cls(
            items=[ProductCardSchema.from_product(p) for p in listing.visible],
            total=len(listing.visible),
            fetched=len(listing.products),
            facets=FacetsSchema.from_facets(listing.facets),
            filters=FiltersSchema.from_criteria(listing.criteria),
        )


# ============================================================================
# Collection Schemas
# ============================================================================


class CollectionSchema(BaseModel):
    """Collection as shown in the collection list."""

    id: str
    handle: str
    title: str
    description_html: str | None = None
    image: ImageSchema | None = None

    @classmethod
    def from_collection(cls, collection: Collection) -> "CollectionSchema":
        """Build a collection card."""
        return cls(
            id=collection.id,
            handle=collection.handle,
            title=collection.title,
            description_html=collection.description_html,
            image=ImageSchema.from_image(collection.image, collection.title),
        )


class CollectionListResponse(BaseModel):
    """Collection list page."""

    items: list[CollectionSchema]
    total: int


class CollectionDetailSchema(CollectionSchema):
    """Collection detail page with its B2B products."""

    page_title: str
    products: list[ProductCardSchema]

    @classmethod
    def from_collection(cls, collection: Collection) -> "CollectionDetailSchema":
        """Build the collection detail payload."""
        base = CollectionSchema.from_collection(collection)
        return cls(
            **base.model_dump(exclude={"image"}),
            image=base.image,
            page_title=f"Collection: {page_title(collection.handle)} | Wholesale Portal",
            products=[ProductCardSchema.from_product(p) for p in collection.products],
        )
