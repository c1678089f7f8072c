"""
Product replication: source-store `product.created` webhook -> target store.

Sequence for one delivery:
  ping check -> signature -> JSON parse -> idempotency check -> image
  re-hosting -> transform -> create product -> create size variations.

Everything up to and including product creation is fatal on failure and
raises a ReplicationError.  Image re-hosting and variation creation degrade
per item: failures are logged and left out, the request still succeeds.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.errors import AuthenticationFailure, DownstreamUnavailable, MalformedInput
from app.schemas import PingResponse, ReplicationResult, VariationRequest, WebhookProduct
from app.services import wc_client
from app.services.outcomes import Outcome, attempt_each, failed, succeeded
from app.services.rehost import rehost_images
from app.services.signature import SIGNATURE_HEADER, verify_signature
from app.services.transform import build_payload, find_origin_id
from app.services.variations import build_variation_requests

logger = logging.getLogger(__name__)

_DELIVERY_HEADERS = (
    "x-wc-webhook-id",
    "x-wc-webhook-topic",
    "x-wc-webhook-event",
    "x-wc-webhook-delivery-id",
)


def _upstream_detail(exc: Exception) -> tuple[str, Any]:
    if isinstance(exc, wc_client.WooCommerceError):
        return str(exc), exc.body
    return f"{type(exc).__name__}: {exc}", None


def _product_id(match: Any) -> Any:
    # A match without an id still counts as "already replicated"
    return match.get("id") if isinstance(match, dict) else match


class ReplicationHandler:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    # ── Entry point ───────────────────────────────────────────────────────────

    async def handle(
        self, body: bytes, headers: Mapping[str, str]
    ) -> Union[ReplicationResult, PingResponse]:
        headers = httpx.Headers(headers)
        delivery = {h: headers[h] for h in _DELIVERY_HEADERS if h in headers}
        logger.info("Webhook received len=%d %s", len(body), delivery)

        # Pings are answered before the signature check: WooCommerce does not sign them
        if self.settings.accept_ping_requests and self.is_ping(body, headers):
            logger.info("Webhook ping acknowledged")
            return PingResponse()

        self.verify(body, headers.get(SIGNATURE_HEADER))
        product = self.parse(body)

        origin_id: Optional[str] = None
        if self.settings.enable_idempotency_check:
            origin_id = self.require_origin_id(product)
            matches = await self.find_existing(origin_id)
            if matches:
                existing = _product_id(matches[0])
                logger.info(
                    "Origin %s already replicated as product id=%s; skipping",
                    origin_id, existing,
                )
                return ReplicationResult(
                    product_id=existing,
                    message="Product already exists; replication skipped",
                )

        media_ids: Optional[List[Any]] = None
        if self.settings.enable_image_rehosting:
            media_ids = await rehost_images(self.settings, product.images)

        payload = build_payload(product, self.settings, origin_id=origin_id, media_ids=media_ids)
        product_id = await self.create_product(payload.model_dump(exclude_none=True))

        outcomes: List[Outcome[VariationRequest]] = []
        if self.settings.create_size_variations:
            outcomes = await self.create_variations(
                product_id, build_variation_requests(product, self.settings)
            )

        result = ReplicationResult(product_id=product_id, message="Product created successfully")
        if media_ids is not None:
            result.images_processed = len(media_ids)
        if outcomes:
            result.variations_created = len(succeeded(outcomes))
            result.variations_failed = [o.item.attributes[0].option for o in failed(outcomes)]
        return result

    # ── Steps ─────────────────────────────────────────────────────────────────

    @staticmethod
    def is_ping(body: bytes, headers: httpx.Headers) -> bool:
        """WooCommerce posts a tiny form body (`webhook_id=N`) when a webhook is saved."""
        content_type = headers.get("content-type", "").split(";")[0].strip().lower()
        return content_type == "application/x-www-form-urlencoded" and len(body) < 100

    def verify(self, body: bytes, signature: Optional[str]) -> None:
        if not signature:
            logger.error("No %s header on delivery", SIGNATURE_HEADER)
            raise AuthenticationFailure(
                "Missing webhook signature header",
                f"The {SIGNATURE_HEADER} header was not received.",
            )
        if not verify_signature(body, self.settings.webhook_secret, signature):
            logger.error("Webhook signature mismatch len=%d", len(body))
            raise AuthenticationFailure(
                "Invalid webhook signature",
                "The webhook signature does not match the configured secret.",
            )

    @staticmethod
    def parse(body: bytes) -> WebhookProduct:
        try:
            data = json.loads(body)
        except ValueError as exc:
            logger.error("Failed to parse webhook JSON: %s", exc)
            raise MalformedInput("Invalid JSON body", str(exc))
        if not isinstance(data, dict):
            raise MalformedInput("Invalid product payload", "Expected a JSON object")
        try:
            return WebhookProduct.model_validate(data)
        except ValidationError as exc:
            logger.error("Webhook body is not a product: %s", exc)
            raise MalformedInput(
                "Invalid product payload",
                "; ".join(
                    f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()
                ),
            )

    def require_origin_id(self, product: WebhookProduct) -> str:
        origin_id = find_origin_id(product, self.settings.origin_meta_key)
        if origin_id is None:
            raise MalformedInput(
                "Missing origin identifier",
                f"meta_data has no {self.settings.origin_meta_key!r} entry",
            )
        return origin_id

    async def find_existing(self, origin_id: str) -> List[Any]:
        """Target products already carrying this origin id."""
        try:
            found = await wc_client.find_products_by_meta(
                self.settings, self.settings.origin_meta_key, origin_id
            )
        except (wc_client.WooCommerceError, httpx.HTTPError) as exc:
            details, body = _upstream_detail(exc)
            logger.error("Existence check failed for origin %s: %s", origin_id, details)
            raise DownstreamUnavailable("Failed to check for existing product", details, body)
        return found

    async def create_product(self, payload: Dict[str, Any]) -> Any:
        logger.info("Creating product %r on %s", payload.get("name"), self.settings.wc2_api_url)
        try:
            created = await wc_client.create_product(self.settings, payload)
        except (wc_client.WooCommerceError, httpx.HTTPError) as exc:
            details, body = _upstream_detail(exc)
            logger.error("Product creation failed: %s", details)
            raise DownstreamUnavailable("Failed to replicate product", details, body)
        if not isinstance(created, dict) or created.get("id") is None:
            raise DownstreamUnavailable(
                "Failed to replicate product", "Response did not include a product id", created
            )
        logger.info("Created product id=%s", created["id"])
        return created["id"]

    async def create_variations(
        self, product_id: Any, requests: List[VariationRequest]
    ) -> List[Outcome[VariationRequest]]:
        if not requests:
            return []

        async def _create(request: VariationRequest) -> Any:
            created = await wc_client.create_variation(
                self.settings, product_id, request.model_dump(exclude_none=True)
            )
            logger.info(
                "Created variation %r for product id=%s",
                request.attributes[0].option, product_id,
            )
            return created.get("id") if isinstance(created, dict) else None

        outcomes = await attempt_each(requests, _create, label="variation")
        if failed(outcomes):
            logger.error(
                "Product id=%s: %d of %d variations failed",
                product_id, len(failed(outcomes)), len(outcomes),
            )
        return outcomes
