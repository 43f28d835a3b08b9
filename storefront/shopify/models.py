"""Pydantic models for Storefront API catalog objects.

Field names are snake_case; the upstream camelCase names are accepted as
aliases. Relay connections (`{"edges": [{"node": ...}]}`) are unwrapped
into plain lists.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def connection_nodes(value: Any) -> list[Any]:
    """Unwrap a GraphQL connection into its list of nodes.

    Plain lists pass through unchanged; None becomes an empty list.
    """
    if value is None:
        return []
    if isinstance(value, dict):
        edges = value.get("edges") or []
        return [edge["node"] for edge in edges if isinstance(edge, dict) and "node" in edge]
    return list(value)


class ShopifyModel(BaseModel):
    """Base model accepting Storefront API camelCase payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Common Types
# ============================================================================


class Money(ShopifyModel):
    """Decimal amount kept as a string, plus an ISO 4217 currency code."""

    amount: str = Field(..., description="Decimal amount, e.g. '10.5'")
    currency_code: str = Field(..., description="ISO 4217 currency code")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> str:
        """Require a non-negative decimal."""
        text = str(value).strip()
        try:
            parsed = Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"Invalid money amount: {value!r}") from e
        if not parsed.is_finite() or parsed < 0:
            raise ValueError(f"Money amount must be a non-negative decimal: {value!r}")
        return text

    @field_validator("currency_code")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        """Normalize currency to uppercase."""
        return value.strip().upper()

    def to_decimal(self) -> Decimal:
        """Get amount as decimal."""
        return Decimal(self.amount)


class Image(ShopifyModel):
    """Image reference."""

    url: str
    alt_text: str | None = None
    width: int | None = None
    height: int | None = None


class PriceRange(ShopifyModel):
    """Minimum and maximum variant prices."""

    min_variant_price: Money
    max_variant_price: Money | None = None

    @property
    def is_range(self) -> bool:
        """True when min and max amounts differ."""
        return (
            self.max_variant_price is not None
            and self.min_variant_price.to_decimal() != self.max_variant_price.to_decimal()
        )


# ============================================================================
# Product Types
# ============================================================================


class ProductOption(ShopifyModel):
    """Option group, e.g. Size with values S/M/L."""

    id: str | None = None
    name: str
    values: list[str] = Field(default_factory=list)

    @property
    def is_default_title(self) -> bool:
        """True for the placeholder option Shopify adds to single-variant products."""
        return (
            self.name.lower() == "title"
            and len(self.values) <= 1
            and (not self.values or self.values[0].lower() == "default title")
        )


class SelectedOption(ShopifyModel):
    """Option name/value pair chosen by a variant."""

    name: str
    value: str


class ProductVariant(ShopifyModel):
    """Purchasable variant of a product."""

    id: str
    title: str = ""
    sku: str | None = None
    available_for_sale: bool = False
    price: Money
    image: Image | None = None
    selected_options: list[SelectedOption] = Field(default_factory=list)


class Product(ShopifyModel):
    """Catalog item."""

    id: str
    handle: str
    title: str
    description_html: str = ""
    tags: list[str] = Field(default_factory=list)
    vendor: str | None = None
    featured_image: Image | None = None
    price_range: PriceRange | None = None
    options: list[ProductOption] = Field(default_factory=list)
    variants: list[ProductVariant] = Field(default_factory=list)

    @field_validator("variants", mode="before")
    @classmethod
    def unwrap_variants(cls, value: Any) -> list[Any]:
        """Accept the variants connection shape."""
        return connection_nodes(value)

    @field_validator("tags", "options", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        """Treat null lists as empty."""
        return [] if value is None else value

    @property
    def display_options(self) -> list[ProductOption]:
        """Options worth showing to a buyer."""
        return [option for option in self.options if not option.is_default_title]


class Collection(ShopifyModel):
    """Product collection."""

    id: str
    handle: str = ""
    title: str
    description_html: str | None = None
    image: Image | None = None
    products: list[Product] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def unwrap_products(cls, value: Any) -> list[Any]:
        """Accept the products connection shape."""
        return connection_nodes(value)
