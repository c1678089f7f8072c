"""
Size variations: one purchasable variation per option of the product's
"Size" attribute, each with its own regular/sale price pair.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional

from app.config import Settings
from app.schemas import ProductAttribute, VariationAttribute, VariationRequest, WebhookProduct
from app.services.pricing import cents, format_price, parse_price

logger = logging.getLogger(__name__)


@dataclass
class VariationPrices:
    regular_price: Decimal
    sale_price: Decimal


def find_size_attribute(attributes: List[ProductAttribute]) -> Optional[ProductAttribute]:
    for attr in attributes:
        if attr.name.lower() == "size" and attr.options:
            return attr
    return None


def custom_size_predicate(settings: Settings) -> Callable[[str], bool]:
    if settings.custom_size_match == "exact":
        labels = frozenset(settings.custom_size_labels)
        return lambda option: option in labels
    return lambda option: "custom" in option.lower()


def compute_prices(
    price: Decimal,
    regular_price: Optional[Decimal],
    is_custom: bool,
    settings: Settings,
) -> VariationPrices:
    sale = price
    regular = regular_price if regular_price is not None else price + cents(settings.regular_price_markup_cents)
    if is_custom:
        if settings.custom_size_shifts_sale_price:
            sale = regular
        regular = regular + cents(settings.custom_size_markup_cents)
    return VariationPrices(regular_price=regular, sale_price=sale)


def build_variation_requests(
    product: WebhookProduct, settings: Settings
) -> List[VariationRequest]:
    """
    Variation documents in option order.  Empty when the product has no
    usable Size attribute or no parseable price.
    """
    size = find_size_attribute(product.attributes)
    if size is None:
        return []

    price = parse_price(product.price)
    if price is None:
        logger.error(
            "Product %r has Size options but no usable price (%r); not creating variations",
            product.name, product.price,
        )
        return []
    regular = parse_price(product.regular_price)
    is_custom = custom_size_predicate(settings)

    requests: List[VariationRequest] = []
    try:
        for option in size.options:
            prices = compute_prices(price, regular, is_custom(option), settings)
            requests.append(
                VariationRequest(
                    regular_price=format_price(prices.regular_price),
                    sale_price=format_price(prices.sale_price),
                    attributes=[VariationAttribute(id=size.id, option=option)],
                )
            )
    except InvalidOperation:
        logger.error(
            "Product %r prices (%r / %r) cannot be written with two decimals; not creating variations",
            product.name, product.price, product.regular_price,
        )
        return []
    return requests
