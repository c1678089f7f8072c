"""
Operational endpoints.

GET  /admin/health
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    try:
        key, secret = settings.wc2_credentials
        catalog = "configured" if key and secret else "error"
    except Exception as exc:
        logger.error("Target credentials unusable: %s", exc)
        catalog = "error"
    return HealthResponse(status="ok", catalog=catalog)
