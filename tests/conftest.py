"""
Shared pytest fixtures – explicit Settings and a sample source-store product.
"""
from __future__ import annotations

import json
import os
from typing import Any, Callable, Dict

import pytest

from app.services.signature import compute_signature

TEST_SECRET = "testsecret"
API_URL = "https://store2.test/wp-json/wc/v3/products"

# Settings read from the environment (app.main startup, get_settings)
os.environ.setdefault("WEBHOOK_SECRET", TEST_SECRET)
os.environ.setdefault("WC2_API_URL", API_URL)
os.environ.setdefault("WC2_CONSUMER_KEY", "ck_test")
os.environ.setdefault("WC2_CONSUMER_SECRET", "cs_test")

from app.config import Settings  # noqa: E402


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: Dict[str, Any] = dict(
            webhook_secret=TEST_SECRET,
            wc2_api_url=API_URL,
            wc2_consumer_key="ck_test",
            wc2_consumer_secret="cs_test",
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def signed_headers() -> Callable[..., Dict[str, str]]:
    def _headers(body: bytes, secret: str = TEST_SECRET) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-WC-Webhook-Signature": compute_signature(body, secret),
            "X-WC-Webhook-Topic": "product.created",
        }

    return _headers


@pytest.fixture
def product() -> Dict[str, Any]:
    return {
        "id": 77,
        "name": "Linen Dress",
        "type": "simple",
        "status": "publish",
        "description": "<p>Soft linen.</p>",
        "short_description": "Linen",
        "price": "10.00",
        "regular_price": "",
        "sale_price": "",
        "categories": [{"id": 9, "name": "Dresses", "slug": "dresses"}],
        "images": [
            {"id": 301, "src": "https://store1.test/uploads/dress-front.jpg"},
            {"id": 302, "src": "https://store1.test/uploads/dress-back.jpg"},
        ],
        "attributes": [
            {"id": 3, "name": "Color", "slug": "pa_color", "position": 1,
             "visible": True, "variation": False, "options": ["Sand"]},
            {"id": 4, "name": "Size", "slug": "pa_size",
             "options": ["S", "M", "Custom Size (+40)"]},
        ],
        "meta_data": [
            {"id": 1, "key": "_origin_product_id", "value": "store1-77"},
            {"id": 2, "key": "_fabric", "value": "linen"},
        ],
    }


@pytest.fixture
def product_body(product) -> bytes:
    return json.dumps(product).encode()
