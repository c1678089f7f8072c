"""
WooCommerce Product Replicator – FastAPI entry point.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import ReplicationError
from app.routers import admin, webhooks
from app.schemas import ErrorEnvelope

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s – %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="WC Product Replicator",
    version="1.0.0",
    description="Replicates products created on one WooCommerce store into another.",
)

# ── Exception handlers ────────────────────────────────────────────────────────

@app.exception_handler(ReplicationError)
async def _replication_error(request: Request, exc: ReplicationError):
    envelope = ErrorEnvelope(error=exc.error, details=exc.details, response=exc.response)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.model_dump(exclude_none=True),
    )

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(webhooks.router)
app.include_router(admin.router)


# ── Startup ───────────────────────────────────────────────────────────────────

@app.on_event("startup")
async def _startup() -> None:
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(
        "Replicating to %s (idempotency=%s rehosting=%s variations=%s draft=%s)",
        settings.wc2_api_url,
        settings.enable_idempotency_check,
        settings.enable_image_rehosting,
        settings.create_size_variations,
        settings.force_draft_status,
    )
