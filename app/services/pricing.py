"""
WooCommerce price fields: parsed as Decimal, sent as fixed 2-decimal strings.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from app.schemas import Price

_CENT = Decimal("0.01")


def parse_price(value: Price) -> Optional[Decimal]:
    """
    Decimal for a WC price field; None when missing, blank, not a number,
    or too large to be written with two decimals.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        price = Decimal(text)
        if not price.is_finite():
            return None
        price.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    return price


def format_price(value: Decimal) -> str:
    """Raises InvalidOperation when `value` has more digits than the context allows."""
    return str(value.quantize(_CENT, rounding=ROUND_HALF_UP))


def wire_price(value: Price) -> Price:
    """
    Price as sent to the target store.  Missing stays missing and blank stays
    "" (blank regular/sale price means "not set" to WooCommerce); anything
    parseable becomes a 2-decimal string; anything else is sent as given.
    """
    if value is None:
        return None
    price = parse_price(value)
    if price is None:
        return str(value).strip()
    return format_price(price)


def cents(amount: int) -> Decimal:
    return Decimal(amount) / 100
