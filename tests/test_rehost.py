"""
Image re-hosting and the per-item outcome loop.
"""
from __future__ import annotations

import httpx
import pytest
import respx

from app.schemas import ProductImage
from app.services.outcomes import attempt_each, failed, succeeded
from app.services.rehost import rehost_images
from app.services.wc_client import filename_from_src, media_url

MEDIA_URL = "https://store2.test/wp-json/wp/v2/media"


def test_media_url_derived_from_catalog_url():
    assert media_url("https://store2.test/wp-json/wc/v3/products") == MEDIA_URL
    assert media_url("https://store2.test/shop/wp-json/wc/v3/products/") == (
        "https://store2.test/shop/wp-json/wp/v2/media"
    )
    assert media_url("https://store2.test/api/products") == MEDIA_URL


def test_filename_from_src():
    assert filename_from_src("https://s.test/uploads/2024/dress.jpg?v=2") == "dress.jpg"
    assert filename_from_src("https://s.test/", fallback="front") == "front"


@pytest.mark.asyncio
async def test_attempt_each_keeps_order_and_continues():
    async def _half(n: int) -> int:
        if n == 2:
            raise ValueError("odd one out")
        return n * 10

    outcomes = await attempt_each([1, 2, 3], _half)
    assert [o.item for o in outcomes] == [1, 2, 3]
    assert [o.value for o in succeeded(outcomes)] == [10, 30]
    assert [str(o.error) for o in failed(outcomes)] == ["odd one out"]


@pytest.mark.asyncio
async def test_rehost_uploads_bytes_with_auth(settings):
    images = [ProductImage(src="https://store1.test/uploads/a.png")]
    async with respx.mock() as router:
        router.get("https://store1.test/uploads/a.png").mock(
            return_value=httpx.Response(200, content=b"\x89PNG", headers={"Content-Type": "image/png"})
        )
        upload = router.post(MEDIA_URL).mock(return_value=httpx.Response(201, json={"id": 77}))

        ids = await rehost_images(settings, images)

    assert ids == [77]
    request = upload.calls.last.request
    assert request.headers["authorization"].startswith("Basic ")
    assert b'filename="a.png"' in request.content
    assert b"\x89PNG" in request.content


@pytest.mark.asyncio
async def test_rehost_skips_failures(settings):
    images = [
        ProductImage(src="https://store1.test/uploads/a.png"),
        ProductImage(src=None),
        ProductImage(src="https://store1.test/uploads/b.png"),
        ProductImage(src="https://store1.test/uploads/c.png"),
    ]
    uploads = iter([
        httpx.Response(500, json={"code": "rest_upload_error"}),
        httpx.Response(201, json={"id": 3}),
    ])
    async with respx.mock() as router:
        router.get("https://store1.test/uploads/a.png").mock(side_effect=httpx.ConnectError)
        router.get("https://store1.test/uploads/b.png").mock(return_value=httpx.Response(200, content=b"b"))
        router.get("https://store1.test/uploads/c.png").mock(return_value=httpx.Response(200, content=b"c"))
        router.post(MEDIA_URL).mock(side_effect=lambda request: next(uploads))

        ids = await rehost_images(settings, images)

    assert ids == [3]
