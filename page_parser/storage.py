"""S3-backed storage for re-hosted images."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import UploadFailure

logger = logging.getLogger("page_parser")

IMAGE_ACL = "public-read"


def build_image_key(website_id: str, extension: str) -> str:
    """Object key for a new image: ``uploads/<website>/images/<uuid>.<ext>``."""
    return f"uploads/{website_id}/images/{uuid.uuid4()}.{extension}"


class S3ImageStore:
    """Uploads image bytes to a bucket as publicly readable objects."""

    def __init__(self, bucket: str, client: Any) -> None:
        self.bucket = bucket
        self.client = client

    @classmethod
    def from_region(cls, bucket: str, region: Optional[str] = None) -> "S3ImageStore":
        return cls(bucket, boto3.client("s3", region_name=region))

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ACL=IMAGE_ACL,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise UploadFailure(f"s3://{self.bucket}/{key}", exc) from exc
        logger.debug("Stored s3://%s/%s (%s)", self.bucket, key, content_type)
