"""Tests for the product filter engine."""

import pytest

from storefront.catalog.filters import (
    ALL_SENTINEL,
    FacetValueSet,
    FilterCriteria,
    FilterEngine,
    filter_products,
    normalize_selection,
)
from storefront.shopify.models import Product


def ids(products: list[Product]) -> list[str]:
    return [p.id.rsplit("/", 1)[-1] for p in products]


class TestFilterCriteria:
    """Tests for FilterCriteria state."""

    def test_created_empty(self):
        """Default criteria have no active filter."""
        criteria = FilterCriteria()
        assert criteria.is_empty
        assert criteria.snapshot() == ("", None, None)

    @pytest.mark.parametrize("value", [None, "", ALL_SENTINEL])
    def test_sentinel_maps_to_not_set(self, value):
        """'all' and empty selections mean no filter."""
        criteria = FilterCriteria(tag=value, vendor=value)
        assert criteria.tag is None
        assert criteria.vendor is None

    def test_select_and_clear(self):
        """Selections mutate in place and clear resets them."""
        criteria = FilterCriteria()
        criteria.set_search("bolt")
        criteria.select_tag("Sale")
        criteria.select_vendor("Acme")
        assert criteria.snapshot() == ("bolt", "Sale", "Acme")

        criteria.select_tag(ALL_SENTINEL)
        assert criteria.tag is None

        criteria.clear()
        assert criteria.is_empty

    def test_whitespace_search_is_empty(self):
        """A blank search term does not filter."""
        assert FilterCriteria(search="   ").is_empty

    def test_normalize_selection_keeps_values(self):
        assert normalize_selection("B2B") == "B2B"


class TestFilterProducts:
    """Tests for filter_products."""

    def test_empty_criteria_is_identity(self, products):
        """No active filter returns the input unchanged."""
        assert filter_products(products, FilterCriteria()) == products

    def test_empty_input(self):
        """Empty input gives empty output."""
        assert filter_products([], FilterCriteria(search="x", tag="B2B")) == []

    def test_tag_filter(self, products):
        """Tag 'Sale' selects only the first product."""
        result = filter_products(products, FilterCriteria(search="", tag="Sale", vendor=""))
        assert ids(result) == ["1"]

    def test_search_matches_vendor_case_insensitive(self, products):
        """Search 'acme' matches both Acme products."""
        result = filter_products(products, FilterCriteria(search="acme", tag="", vendor=""))
        assert ids(result) == ["1", "2"]

    def test_search_matches_title(self, products):
        """Search matches a title substring."""
        result = filter_products(products, FilterCriteria(search="WIRE"))
        assert ids(result) == ["2"]

    def test_search_matches_tag_substring(self, products):
        """Search matches tag substrings, unlike the tag stage."""
        result = filter_products(products, FilterCriteria(search="ne"))
        assert ids(result) == ["3"]

    def test_search_without_match(self, products):
        """Unknown term yields nothing."""
        assert filter_products(products, FilterCriteria(search="zzz-none")) == []

    def test_search_term_is_not_trimmed(self, products):
        """Surrounding spaces are part of the substring."""
        assert filter_products(products, FilterCriteria(search=" acme ")) == []

    def test_tag_is_exact_and_case_sensitive(self, products):
        """Tag stage does not match by substring or case."""
        assert filter_products(products, FilterCriteria(tag="sale")) == []
        assert filter_products(products, FilterCriteria(tag="Sal")) == []

    def test_vendor_filter(self, products):
        """Vendor stage is exact equality."""
        assert ids(filter_products(products, FilterCriteria(vendor="Globex"))) == ["3"]
        assert filter_products(products, FilterCriteria(vendor="acme")) == []

    def test_stages_combine_with_and(self, products):
        """All stages must match."""
        criteria = FilterCriteria(search="b2b", tag="B2B", vendor="Acme")
        assert ids(filter_products(products, criteria)) == ["1", "2"]

        criteria.select_tag("New")
        assert filter_products(products, criteria) == []

    def test_product_without_vendor(self, products):
        """Products without vendor are skipped by vendor search, not errors."""
        no_vendor = products[0].model_copy(update={"vendor": None, "title": "Plain"})
        result = filter_products([no_vendor], FilterCriteria(search="acme"))
        assert result == []

    @pytest.mark.parametrize(
        "criteria",
        [
            FilterCriteria(search="a"),
            FilterCriteria(tag="B2B"),
            FilterCriteria(search="o", vendor="Acme"),
            FilterCriteria(search="s", tag="New"),
        ],
    )
    def test_idempotent_and_order_preserving(self, products, criteria):
        """Filtering twice equals filtering once; output is a subsequence."""
        once = filter_products(products, criteria)
        twice = filter_products(once, criteria)
        assert twice == once

        positions = [products.index(p) for p in once]
        assert positions == sorted(positions)

    def test_input_not_mutated(self, products):
        """The fetched slice is not modified."""
        original = list(products)
        filter_products(products, FilterCriteria(tag="Sale"))
        assert products == original


class TestFacetValueSet:
    """Tests for facet derivation."""

    def test_distinct_sorted_values(self, products):
        """Facets are distinct and sorted."""
        facets = FacetValueSet.from_products(products)
        assert facets.tags == ("B2B", "New", "Sale")
        assert facets.vendors == ("Acme", "Globex")

    def test_empty(self):
        assert FacetValueSet.from_products([]) == FacetValueSet()


class TestFilterEngine:
    """Tests for the memoizing engine."""

    def test_facets_fixed_at_load(self, products):
        """Facets come from the full slice regardless of filters."""
        engine = FilterEngine(products)
        engine.apply(FilterCriteria(vendor="Globex"))
        assert engine.facets.vendors == ("Acme", "Globex")

    def test_apply_matches_pure_function(self, products):
        """Engine results equal filter_products."""
        engine = FilterEngine(products)
        criteria = FilterCriteria(search="acme")
        assert engine.apply(criteria) == filter_products(products, criteria)

    def test_recomputes_on_criteria_change(self, products):
        """Mutating criteria yields a new result."""
        engine = FilterEngine(products)
        criteria = FilterCriteria()
        assert len(engine.apply(criteria)) == 3

        criteria.select_tag("Sale")
        assert ids(engine.apply(criteria)) == ["1"]

        criteria.clear()
        assert len(engine.apply(criteria)) == 3

    def test_returned_list_is_a_copy(self, products):
        """Callers cannot corrupt the memoized result."""
        engine = FilterEngine(products)
        first = engine.apply(FilterCriteria())
        first.clear()
        assert len(engine.apply(FilterCriteria())) == 3
