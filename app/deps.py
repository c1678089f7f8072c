"""
FastAPI dependency utilities: configured replication handler.
"""
from __future__ import annotations

from fastapi import Depends

from app.config import Settings, get_settings
from app.services.replication import ReplicationHandler


def get_replication_handler(
    settings: Settings = Depends(get_settings),
) -> ReplicationHandler:
    return ReplicationHandler(settings)
