"""GraphQL documents used by the catalog pages."""

IMAGE_FIELDS = """
  url
  altText
  width
  height
"""

GET_ALL_COLLECTIONS_QUERY = f"""
  query GetAllCollections($first: Int!) {{
    collections(first: $first) {{
      edges {{
        node {{
          id
          handle
          title
          descriptionHtml
          image {{ {IMAGE_FIELDS} }}
        }}
      }}
    }}
  }}
"""

GET_COLLECTION_WITH_B2B_PRODUCTS_QUERY = f"""
  query GetCollectionWithB2BProducts(
    $handle: String!,
    $firstProducts: Int!,
    $productFilters: [ProductFilter!]
  ) {{
    collectionByHandle(handle: $handle) {{
      id
      handle
      title
      descriptionHtml
      image {{ {IMAGE_FIELDS} }}
      products(first: $firstProducts, filters: $productFilters) {{
        edges {{
          node {{
            id
            handle
            title
            tags
            vendor
            featuredImage {{ {IMAGE_FIELDS} }}
            priceRange {{
              minVariantPrice {{ amount currencyCode }}
            }}
          }}
        }}
      }}
    }}
  }}
"""

GET_B2B_PRODUCTS_QUERY = f"""
  query GetB2BProducts($first: Int!, $query: String) {{
    products(first: $first, query: $query) {{
      edges {{
        node {{
          id
          handle
          title
          tags
          vendor
          featuredImage {{ {IMAGE_FIELDS} }}
          priceRange {{
            minVariantPrice {{ amount currencyCode }}
          }}
        }}
      }}
    }}
  }}
"""

GET_PRODUCT_BY_HANDLE_QUERY = f"""
  query GetProductByHandle($handle: String!, $productQueryForVerification: String!) {{
    productByHandle(handle: $handle) {{
      id
      handle
      title
      descriptionHtml
      tags
      vendor
      featuredImage {{ {IMAGE_FIELDS} }}
      priceRange {{
        minVariantPrice {{ amount currencyCode }}
        maxVariantPrice {{ amount currencyCode }}
      }}
      options {{
        id
        name
        values
      }}
      variants(first: 20) {{
        edges {{
          node {{
            id
            title
            sku
            availableForSale
            image {{ {IMAGE_FIELDS} }}
            price {{ amount currencyCode }}
            selectedOptions {{
              name
              value
            }}
          }}
        }}
      }}
    }}
    b2bVerifiedProduct: products(first: 1, query: $productQueryForVerification) {{
      edges {{
        node {{
          id
        }}
      }}
    }}
  }}
"""


def build_verification_query(handle: str, tag_filter: str) -> str:
    """Build the search query that confirms a product carries the B2B tag.

    Args:
        handle: Product handle.
        tag_filter: Single tag term, e.g. 'tag:B2B'.

    Returns:
        Search string such as 'handle:widget AND (tag:B2B)'.
    """
    return f"handle:{handle} AND ({tag_filter})"


def tag_value(tag_filter: str) -> str:
    """Strip the 'tag:' prefix from a single tag term.

    The collection `ProductFilter` input takes a bare tag value, so the
    configured filter must name exactly one tag.

    Raises:
        ValueError: If the expression is empty or combines several terms.
    """
    prefix = "tag:"
    value = tag_filter[len(prefix):] if tag_filter.startswith(prefix) else tag_filter
    if not value or any(c.isspace() or c in "()" for c in value):
        raise ValueError(f"Expected a single tag term, got {tag_filter!r}")
    return value
