"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from dataclasses import dataclass

from pydantic import field_validator
from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class ShopifyConfig:
    """Connection settings for the Shopify Storefront API.

    Attributes:
        store_domain: Store domain, e.g. 'example.myshopify.com'.
        access_token: Storefront API access token.
        api_version: Storefront API version segment of the endpoint.
        timeout: Request timeout in seconds.
        cache_ttl_seconds: Max age of cached results for the 'default' policy.
        cache_max_items: Upper bound on stored results; oldest are evicted first.
    """

    store_domain: str | None
    access_token: str | None
    api_version: str = "2024-04"
    timeout: float = 30.0
    cache_ttl_seconds: float = 60.0
    cache_max_items: int = 500

    @property
    def is_complete(self) -> bool:
        """Check that both required values are present."""
        return bool(self.store_domain) and bool(self.access_token)

    @property
    def endpoint(self) -> str:
        """GraphQL endpoint URL."""
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Shopify
    shopify_store_domain: str | None = None
    shopify_storefront_access_token: str | None = None
    shopify_api_version: str = "2024-04"
    shopify_timeout: float = 30.0
    cache_ttl_seconds: float = 60.0
    cache_max_items: int = 500

    # Catalog
    # Single tag term; it also feeds the collection ProductFilter input
    b2b_tag_filter: str = "tag:B2B"
    products_page_size: int = 24
    collections_page_size: int = 25

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    frontend_url: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("b2b_tag_filter")
    @classmethod
    def validate_b2b_tag_filter(cls, value: str) -> str:
        """Require a single 'tag:' term."""
        from storefront.shopify.queries import tag_value

        if not value.startswith("tag:"):
            raise ValueError("b2b_tag_filter must start with 'tag:'")
        tag_value(value)
        return value

    def shopify_config(self) -> ShopifyConfig:
        """Build the explicit client configuration from these settings."""
        return ShopifyConfig(
            store_domain=self.shopify_store_domain,
            access_token=self.shopify_storefront_access_token,
            api_version=self.shopify_api_version,
            timeout=self.shopify_timeout,
            cache_ttl_seconds=self.cache_ttl_seconds,
            cache_max_items=self.cache_max_items,
        )


settings = Settings()
