"""Price formatting helpers."""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from babel.numbers import UnknownCurrencyError, format_currency

from storefront.shopify.models import Money, PriceRange

PRICE_UNAVAILABLE = "Price unavailable"
DISPLAY_LOCALE = "en_US"


def format_price(money: Money | Mapping[str, Any] | None) -> str:
    """Format money in its own currency with en-US conventions.

    Accepts a Money model or the raw `{amount, currencyCode}` mapping.
    Returns a placeholder when the amount or currency is missing.

    Examples:
        >>> format_price(Money(amount="10.5", currency_code="USD"))
        '$10.50'
        >>> format_price(None)
        'Price unavailable'
    """
    if money is None:
        return PRICE_UNAVAILABLE

    if isinstance(money, Money):
        amount, currency = money.amount, money.currency_code
    else:
        amount = money.get("amount")
        currency = money.get("currencyCode", money.get("currency_code"))

    if amount is None or not currency:
        return PRICE_UNAVAILABLE

    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return PRICE_UNAVAILABLE

    try:
        return format_currency(value, str(currency).upper(), locale=DISPLAY_LOCALE)
    except UnknownCurrencyError:
        return PRICE_UNAVAILABLE


def format_price_range(price_range: PriceRange | None) -> str:
    """Format a price range as 'min' or 'min - max' when amounts differ."""
    if price_range is None:
        return PRICE_UNAVAILABLE

    low = format_price(price_range.min_variant_price)
    if price_range.is_range:
        return f"{low} - {format_price(price_range.max_variant_price)}"
    return low
