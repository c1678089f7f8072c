"""
Central configuration – loaded once at startup from environment / .env file.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Literal, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Webhook security ─────────────────────────────────────────────────────
    webhook_secret: str = Field(min_length=1)
    # WooCommerce sends a tiny form-encoded ping when a webhook is saved
    accept_ping_requests: bool = True

    # ── Target store ─────────────────────────────────────────────────────────
    # e.g. https://store2.example.com/wp-json/wc/v3/products
    wc2_api_url: str = Field(min_length=1)
    wc2_consumer_key: str = Field(min_length=1)
    wc2_consumer_secret: str = Field(min_length=1)
    # If true, the consumer key/secret above are Fernet tokens
    wc2_credentials_encrypted: bool = False
    config_encryption_key: str = ""
    http_timeout_seconds: float = 30.0

    # ── Capabilities ─────────────────────────────────────────────────────────
    enable_idempotency_check: bool = False
    enable_image_rehosting: bool = False
    origin_meta_key: str = "_origin_product_id"

    force_variable_type: bool = True
    force_draft_status: bool = False
    draft_status: str = "draft"

    # ── Size variations ──────────────────────────────────────────────────────
    create_size_variations: bool = True
    # Added to `price` when the source has no regular_price
    regular_price_markup_cents: int = 0
    custom_size_markup_cents: int = 4000
    custom_size_match: Literal["substring", "exact"] = "substring"
    # JSON list, only consulted when custom_size_match == "exact"
    custom_size_labels: List[str] = ["Custom Size (+40)", "Custom Size (+$40)"]
    custom_size_shifts_sale_price: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )

    @property
    def wc2_credentials(self) -> Tuple[str, str]:
        """Plaintext (key, secret) for the target store's REST API."""
        if not self.wc2_credentials_encrypted:
            return self.wc2_consumer_key, self.wc2_consumer_secret
        from app.crypto import decrypt

        return (
            decrypt(self.wc2_consumer_key, self.config_encryption_key),
            decrypt(self.wc2_consumer_secret, self.config_encryption_key),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
