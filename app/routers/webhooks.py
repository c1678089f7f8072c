"""
WooCommerce webhook receivers.

POST /webhooks/woocommerce/product_created
POST /api/replicate-product               (same handler, legacy path)
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.deps import get_replication_handler
from app.services.replication import ReplicationHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/webhooks/woocommerce/product_created")
@router.post("/api/replicate-product")
async def product_created(
    request: Request,
    handler: ReplicationHandler = Depends(get_replication_handler),
) -> JSONResponse:
    """
    Replicate a newly created source-store product into the target store.
    Signature is checked against the raw body before anything else happens.
    """
    body = await request.body()
    result = await handler.handle(body, request.headers)
    return JSONResponse(content=result.model_dump(by_alias=True, exclude_none=True))
