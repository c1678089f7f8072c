"""
Thin WooCommerce / WordPress REST API client for the target store (no SDK dependency).
Uses HTTP Basic auth with consumer key/secret.
"""
from __future__ import annotations

import logging
import posixpath
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)


class WooCommerceError(Exception):
    """Non-2xx response from the target store."""

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__(f"WooCommerce API returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


def _auth(settings: Settings) -> httpx.BasicAuth:
    key, secret = settings.wc2_credentials
    return httpx.BasicAuth(key, secret)


def _timeout(settings: Settings) -> httpx.Timeout:
    return httpx.Timeout(settings.http_timeout_seconds)


def _products_url(settings: Settings) -> str:
    return settings.wc2_api_url.rstrip("/")


def media_url(api_url: str) -> str:
    """
    Derive the WordPress media endpoint from the catalog endpoint:
    https://shop/wp-json/wc/v3/products -> https://shop/wp-json/wp/v2/media
    """
    head, sep, _ = api_url.partition("/wp-json/")
    if sep:
        return f"{head}/wp-json/wp/v2/media"
    parts = urlsplit(api_url)
    return f"{parts.scheme}://{parts.netloc}/wp-json/wp/v2/media"


def _body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _check(resp: httpx.Response, what: str) -> Any:
    if resp.is_success:
        return _body(resp)
    logger.error(
        "WC API error during %s status=%d body=%s",
        what, resp.status_code, resp.text[:300],
    )
    raise WooCommerceError(resp.status_code, _body(resp))


async def find_products_by_meta(
    settings: Settings, key: str, value: str
) -> List[Dict[str, Any]]:
    """Products on the target store carrying meta `key` == `value`."""
    async with httpx.AsyncClient(auth=_auth(settings), timeout=_timeout(settings)) as client:
        resp = await client.get(
            _products_url(settings), params={"meta_key": key, "meta_value": value}
        )
        found = _check(resp, "existence check")
    if not isinstance(found, list):
        raise WooCommerceError(resp.status_code, found)
    return found


async def create_product(settings: Settings, payload: Dict[str, Any]) -> Dict[str, Any]:
    async with httpx.AsyncClient(auth=_auth(settings), timeout=_timeout(settings)) as client:
        resp = await client.post(_products_url(settings), json=payload)
        return _check(resp, "product creation")


async def create_variation(
    settings: Settings, product_id: int, payload: Dict[str, Any]
) -> Dict[str, Any]:
    url = f"{_products_url(settings)}/{product_id}/variations"
    async with httpx.AsyncClient(auth=_auth(settings), timeout=_timeout(settings)) as client:
        resp = await client.post(url, json=payload)
        return _check(resp, f"variation creation product={product_id}")


async def fetch_image(settings: Settings, src: str) -> Tuple[bytes, str]:
    """Download image bytes from the source store (unauthenticated)."""
    async with httpx.AsyncClient(timeout=_timeout(settings), follow_redirects=True) as client:
        resp = await client.get(src)
        resp.raise_for_status()
        content_type = resp.headers.get("content-type", "application/octet-stream")
        return resp.content, content_type.split(";")[0].strip()


async def upload_media(
    settings: Settings,
    filename: str,
    content: bytes,
    content_type: str,
) -> Dict[str, Any]:
    url = media_url(settings.wc2_api_url)
    async with httpx.AsyncClient(auth=_auth(settings), timeout=_timeout(settings)) as client:
        resp = await client.post(
            url,
            files={"file": (filename, content, content_type)},
        )
        return _check(resp, "media upload")


def filename_from_src(src: str, fallback: Optional[str] = None) -> str:
    name = posixpath.basename(urlsplit(src).path)
    return name or fallback or "image"
