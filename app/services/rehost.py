"""
Image re-hosting: copy each source image into the target store's media
library so the replicated product does not hotlink the source store.
"""
from __future__ import annotations

import logging
from typing import Any, List

from app.config import Settings
from app.schemas import ProductImage
from app.services import wc_client
from app.services.outcomes import Outcome, attempt_each, succeeded

logger = logging.getLogger(__name__)


async def rehost_images(settings: Settings, images: List[ProductImage]) -> List[Any]:
    """
    Returns the target-side media ids of the images that made it across,
    in source order.  Failed images are logged and left out.
    """

    async def _rehost(image: ProductImage) -> Any:
        if not image.src:
            raise ValueError("image has no src")
        content, content_type = await wc_client.fetch_image(settings, image.src)
        filename = wc_client.filename_from_src(image.src, fallback=image.name)
        media = await wc_client.upload_media(settings, filename, content, content_type)
        if not isinstance(media, dict) or media.get("id") is None:
            raise ValueError(f"media upload returned no id: {str(media)[:300]}")
        logger.info("Rehosted image %s as media id=%s", image.src, media["id"])
        return media["id"]

    outcomes: List[Outcome[ProductImage]] = await attempt_each(images, _rehost, label="image")
    media_ids = [o.value for o in succeeded(outcomes)]
    if len(media_ids) < len(images):
        logger.warning(
            "Rehosted %d of %d images; the rest are omitted from the product",
            len(media_ids), len(images),
        )
    return media_ids
