from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass, field
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.application.errors import InfrastructureError
from src.application.interfaces.image_store import ImageStore
from src.utils.ids import new_id

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class S3ImageStore(ImageStore):
    bucket: str
    region: str
    prefix: str = ""
    public_url_base: str | None = None
    _s3: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._s3 = boto3.client("s3", region_name=self.region)

    def _key_for(self, content_type: str, filename: str | None) -> str:
        extension = mimetypes.guess_extension(content_type) or ""
        stem = new_id()
        if filename and "." in filename:
            extension = "." + filename.rsplit(".", 1)[1].lower()
        return f"{self.prefix}animals/{stem}{extension}"

    def public_url(self, key: str) -> str:
        if self.public_url_base:
            return f"{self.public_url_base.rstrip('/')}/{key}"
        if self.region == "us-east-1":
            return f"https://{self.bucket}.s3.amazonaws.com/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def store(self, data: bytes, *, content_type: str, filename: str | None = None) -> str:
        key = self._key_for(content_type, filename)

        def _put() -> None:
            self._s3.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)

        try:
            await asyncio.to_thread(_put)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Image upload to s3://%s/%s failed: %s", self.bucket, key, exc)
            raise InfrastructureError("Image upload failed") from exc
        return self.public_url(key)
