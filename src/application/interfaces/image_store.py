from __future__ import annotations

from typing import Protocol


class ImageStore(Protocol):
    async def store(self, data: bytes, *, content_type: str, filename: str | None = None) -> str:
        """Persist the image bytes and return the URL the animal record keeps."""
        ...
