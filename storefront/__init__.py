"""B2B Storefront.

Wholesale product catalog backed by the Shopify Storefront GraphQL API.

This package provides:
- A GraphQL fetch client that normalizes transport and API errors
- Catalog models for products, collections and money
- A pure filter engine for search, tag and vendor filtering
- Catalog pages (collections, products, product detail) as JSON endpoints
"""

__version__ = "0.1.0"
