"""S3 Object Storage — uploads pin images and returns their public URLs.

Invariants:
    - upload() either returns a resolvable URL or raises StorageError
    - Every botocore failure is mapped to StorageError (core/errors.py)
    - Public URL = s3_public_base_url + path when configured, else the bucket's
      virtual-hosted S3 URL

Design Decisions:
    - boto3 is blocking: calls run in a worker thread via asyncio.to_thread so
      concurrent uploads don't stall the event loop
    - Client injected for tests (botocore Stubber); built from settings otherwise
"""

import asyncio
import logging
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from pinboard.config import Settings
from pinboard.core.errors import StorageError

logger = logging.getLogger(__name__)


def build_s3_client(settings: Settings):
    session = boto3.session.Session(region_name=settings.aws_region)
    return session.client(
        "s3",
        endpoint_url=settings.s3_endpoint_url,
        config=Config(signature_version="s3v4"),
    )


class S3ObjectStorage:
    """ObjectStorage implementation backed by a single S3 bucket."""

    def __init__(
        self,
        client,
        bucket: str,
        region: str = "us-east-1",
        public_base_url: str | None = None,
    ):
        self.client = client
        self.bucket = bucket
        self.region = region
        self.public_base_url = public_base_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStorage":
        return cls(
            build_s3_client(settings),
            bucket=settings.s3_bucket,
            region=settings.aws_region,
            public_base_url=settings.s3_public_base_url,
        )

    def public_url(self, path: str) -> str:
        key = quote(path.lstrip("/"))
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def _put(self, path: str, blob: bytes, content_type: str | None) -> None:
        params = {"Bucket": self.bucket, "Key": path, "Body": blob}
        if content_type:
            params["ContentType"] = content_type
        self.client.put_object(**params)

    async def upload(
        self, path: str, blob: bytes, content_type: str | None = None,
    ) -> str:
        try:
            await asyncio.to_thread(self._put, path, blob, content_type)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "unknown")
            raise StorageError(f"S3 rejected upload ({code})", path) from e
        except BotoCoreError as e:
            raise StorageError(str(e), path) from e
        logger.debug(f"Uploaded {len(blob)} bytes to s3://{self.bucket}/{path}")
        return self.public_url(path)
