from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from src.application.errors import ValidationError
from src.application.herd_store import HerdStore
from src.application.interfaces.image_store import ImageStore
from src.domain.models.animal import Animal
from src.utils.datetime_tz import utc_now

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}
MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass(slots=True)
class AttachImageInput:
    data: bytes
    content_type: str
    filename: str | None = None


async def execute(
    store: HerdStore, images: ImageStore, animal_id: str, payload: AttachImageInput
) -> Animal:
    animal = store.get(animal_id)
    if payload.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(f"Unsupported image type {payload.content_type}")
    if not payload.data:
        raise ValidationError("Image file is empty")
    if len(payload.data) > MAX_IMAGE_BYTES:
        raise ValidationError("Image exceeds the 5 MB limit")

    url = await images.store(
        payload.data, content_type=payload.content_type, filename=payload.filename
    )
    updated = replace(
        animal,
        image=animal.image or url,
        images=(*animal.images, url),
        last_updated=utc_now(),
    )
    await store.commit([updated])
    logger.info("Stored image for animal %s", animal.id)
    return updated
