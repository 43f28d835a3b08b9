"""Tests for GraphQL query helpers."""

import pytest

from storefront.shopify.queries import (
    GET_B2B_PRODUCTS_QUERY,
    GET_PRODUCT_BY_HANDLE_QUERY,
    build_verification_query,
    tag_value,
)


def test_build_verification_query():
    """Handle and tag filter are combined with AND."""
    assert build_verification_query("steel-bolts", "tag:B2B") == (
        "handle:steel-bolts AND (tag:B2B)"
    )


def test_tag_value_strips_prefix():
    """The 'tag:' prefix is removed for ProductFilter inputs."""
    assert tag_value("tag:B2B") == "B2B"
    assert tag_value("wholesale") == "wholesale"


@pytest.mark.parametrize(
    "tag_filter", ["tag:B2B OR tag:wholesale", "(tag:B2B)", "tag:", ""]
)
def test_tag_value_rejects_compound_filters(tag_filter):
    """Only a single tag term can feed a ProductFilter input."""
    with pytest.raises(ValueError):
        tag_value(tag_filter)


def test_product_query_requests_verification():
    """Product detail query carries the verification connection."""
    assert "b2bVerifiedProduct: products(first: 1" in GET_PRODUCT_BY_HANDLE_QUERY
    assert "$productQueryForVerification" in GET_PRODUCT_BY_HANDLE_QUERY


def test_products_query_fetches_filter_fields():
    """Listing query fetches the fields the filter engine reads."""
    for field in ("title", "tags", "vendor"):
        assert field in GET_B2B_PRODUCTS_QUERY
