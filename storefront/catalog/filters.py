"""Product filtering for the product grid.

Filtering is a pure function of (items, criteria). The grid re-invokes it on
every criteria change; FilterEngine adds memoization for one page view.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from storefront.shopify.models import Product

# Dropdown value meaning "no filter"
ALL_SENTINEL = "all"


def normalize_selection(value: str | None) -> str | None:
    """Map the dropdown sentinel and empty values to "not set"."""
    if value is None or value == "" or value == ALL_SENTINEL:
        return None
    return value


@dataclass
class FilterCriteria:
    """Active filters of a product grid.

    Attributes:
        search: Free-text search term, case-insensitive.
        tag: Selected tag, exact match.
        vendor: Selected vendor, exact match.
    """

    search: str = ""
    tag: str | None = None
    vendor: str | None = None

    def __post_init__(self) -> None:
        self.search = self.search or ""
        self.tag = normalize_selection(self.tag)
        self.vendor = normalize_selection(self.vendor)

    def set_search(self, term: str | None) -> None:
        """Replace the search term."""
        self.search = term or ""

    def select_tag(self, tag: str | None) -> None:
        """Select a tag; the sentinel clears the selection."""
        self.tag = normalize_selection(tag)

    def select_vendor(self, vendor: str | None) -> None:
        """Select a vendor; the sentinel clears the selection."""
        self.vendor = normalize_selection(vendor)

    def clear(self) -> None:
        """Reset all filters."""
        self.search = ""
        self.tag = None
        self.vendor = None

    @property
    def search_term(self) -> str:
        """Lower-cased search term, empty when only whitespace."""
        if not self.search.strip():
            return ""
        return self.search.lower()

    @property
    def is_empty(self) -> bool:
        """True when no filter is active."""
        return (
            not self.search_term
            and normalize_selection(self.tag) is None
            and normalize_selection(self.vendor) is None
        )

    def snapshot(self) -> tuple[str, str | None, str | None]:
        """Hashable view of the effective criteria."""
        return (
            self.search_term,
            normalize_selection(self.tag),
            normalize_selection(self.vendor),
        )


@dataclass(frozen=True)
class FacetValueSet:
    """Distinct tags and vendors available for filtering.

    Derived once from the initially fetched slice. Values present only
    beyond the page-size cutoff are not included.
    """

    tags: tuple[str, ...] = ()
    vendors: tuple[str, ...] = ()

    @classmethod
    def from_products(cls, products: Iterable[Product]) -> "FacetValueSet":
        """Collect sorted distinct tags and vendors."""
        tags: set[str] = set()
        vendors: set[str] = set()
        for product in products:
            tags.update(tag for tag in product.tags if tag)
            if product.vendor:
                vendors.add(product.vendor)
        return cls(tags=tuple(sorted(tags)), vendors=tuple(sorted(vendors)))


def matches_search(product: Product, term: str) -> bool:
    """Substring match of a lower-cased term against title, tags and vendor."""
    if term in product.title.lower():
        return True
    if any(term in tag.lower() for tag in product.tags):
        return True
    return bool(product.vendor) and term in product.vendor.lower()


def filter_products(
    products: Sequence[Product], criteria: FilterCriteria
) -> list[Product]:
    """Apply search, tag and vendor filters in sequence.

    Each stage narrows the previous one; inactive stages are skipped.
    Relative order of the input is preserved.

    Args:
        products: Full fetched slice.
        criteria: Active filters.

    Returns:
        Matching products in original order.
    """
    term, tag, vendor = criteria.snapshot()
    filtered = list(products)

    if term:
        filtered = [p for p in filtered if matches_search(p, term)]

    if tag is not None:
        filtered = [p for p in filtered if tag in p.tags]

    if vendor is not None:
        filtered = [p for p in filtered if p.vendor == vendor]

    return filtered


class FilterEngine:
    """Filter state holder for one page view.

    Owns the fetched slice and its facets, and memoizes results per
    criteria snapshot. The slice must not be mutated while the engine
    is in use.
    """

    def __init__(self, products: Sequence[Product]) -> None:
        """Initialize the engine.

        Args:
            products: Full fetched slice.
        """
        self.products = products
        self.facets = FacetValueSet.from_products(products)
        self._memo: dict[tuple[str, str | None, str | None], list[Product]] = {}

    def apply(self, criteria: FilterCriteria) -> list[Product]:
        """Return the visible products for the given criteria."""
        key = criteria.snapshot()
        if key not in self._memo:
            self._memo[key] = filter_products(self.products, criteria)
        return list(self._memo[key])
