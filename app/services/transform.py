"""
Source product -> target ReplicationPayload.  Pure: no I/O.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.config import Settings
from app.schemas import (
    AttributePayload,
    MetaData,
    ProductAttribute,
    ProductImage,
    ReplicationPayload,
    WebhookProduct,
)
from app.services.pricing import wire_price


def find_origin_id(product: WebhookProduct, key: str) -> Optional[str]:
    """Value of the first meta_data entry named `key`, or None if absent/blank."""
    for meta in product.meta_data:
        if meta.key == key:
            if meta.value is None or str(meta.value).strip() == "":
                return None
            return str(meta.value)
    return None


def normalize_attribute(attr: ProductAttribute) -> AttributePayload:
    return AttributePayload(
        id=attr.id,
        name=attr.name,
        slug=attr.slug,
        position=attr.position if attr.position is not None else 0,
        visible=attr.visible if attr.visible is not None else True,
        variation=attr.variation if attr.variation is not None else True,
        options=list(attr.options),
    )


def _meta_entry(meta: MetaData) -> Dict[str, Any]:
    # WC rejects foreign meta ids, so only key/value cross over
    return {"key": meta.key, "value": meta.value}


def _images(images: List[ProductImage], media_ids: Optional[List[Any]]) -> List[Dict[str, Any]]:
    if media_ids is not None:
        return [{"id": media_id} for media_id in media_ids]
    return [{"src": image.src} for image in images if image.src]


def build_payload(
    product: WebhookProduct,
    settings: Settings,
    origin_id: Optional[str] = None,
    media_ids: Optional[List[Any]] = None,
) -> ReplicationPayload:
    """
    `origin_id` is appended to meta_data as provenance when given.
    `media_ids` (re-hosted images) replaces the src passthrough when given.
    """
    meta_data = [_meta_entry(m) for m in product.meta_data]
    if origin_id is not None:
        meta_data.append({"key": settings.origin_meta_key, "value": origin_id})

    return ReplicationPayload(
        name=product.name,
        type="variable" if settings.force_variable_type else product.type,
        status=settings.draft_status if settings.force_draft_status else product.status,
        description=product.description,
        short_description=product.short_description,
        price=wire_price(product.price),
        regular_price=wire_price(product.regular_price),
        sale_price=wire_price(product.sale_price),
        categories=product.categories,
        images=_images(product.images, media_ids),
        attributes=[normalize_attribute(a) for a in product.attributes],
        meta_data=meta_data,
    )
