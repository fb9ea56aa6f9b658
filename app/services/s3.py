import logging
from functools import lru_cache
from typing import BinaryIO, Optional

import boto3

from ..config import (
    AWS_ACCESS_KEY, AWS_SECRET_KEY, S3_REGION, S3_BUCKET_NAME, S3_ENDPOINT_URL, validate_config
)

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class StorageService:
    """Thin wrapper over an S3 bucket that stores uploads under caller-chosen keys."""

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload_file(self, fileobj: BinaryIO, key: str, content_type: Optional[str] = None) -> str:
        """Stream ``fileobj`` to ``key`` and return the stored key."""
        self.client.upload_fileobj(
            fileobj,
            self.bucket,
            key,
            ExtraArgs={'ContentType': content_type or DEFAULT_CONTENT_TYPE}
        )
        return key


@lru_cache
def get_storage() -> StorageService:
    validate_config()
    s3_client = boto3.client("s3",
        aws_access_key_id=AWS_ACCESS_KEY,
        aws_secret_access_key=AWS_SECRET_KEY,
        region_name=S3_REGION,
        endpoint_url=S3_ENDPOINT_URL
    )
    logger.info("Using bucket %s for uploads", S3_BUCKET_NAME)
    return StorageService(s3_client, S3_BUCKET_NAME)
