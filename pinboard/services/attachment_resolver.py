"""Attachment Resolver — uploads selected images and returns their public URLs.

Invariants:
    - Best-effort: a failed upload is logged and omitted, never raised
    - Successful URLs come back in input order (stable for any successful subset)
    - Every call re-uploads; there is no dedup by content
    - Object paths never reuse the client filename beyond its extension

Design Decisions:
    - Uploads run concurrently via asyncio.gather(return_exceptions=True):
      completion order is irrelevant, gather keeps result slots aligned to input
"""

import asyncio
import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime

from pinboard.core.errors import StorageError
from pinboard.core.pin_types import LocalFile
from pinboard.core.repository_protocols import ObjectStorage
from pinboard.services.pin_repository import utc_now

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_PREFIX = "pin-images/"


def _extension(filename: str) -> str:
    _, dot, ext = filename.rpartition(".")
    ext = "".join(ch for ch in ext.lower() if ch.isalnum())[:10]
    return f".{ext}" if dot and ext else ""


def build_object_path(
    filename: str, now: datetime, prefix: str = DEFAULT_UPLOAD_PREFIX,
) -> str:
    # pin-images/YYYY/MM/<uuid>.<ext>
    prefix = prefix.strip().lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return f"{prefix}{now:%Y}/{now:%m}/{uuid.uuid4().hex}{_extension(filename)}"


class AttachmentResolver:
    """Turns local files into durable URLs via an ObjectStorage collaborator."""

    def __init__(
        self,
        storage: ObjectStorage,
        prefix: str = DEFAULT_UPLOAD_PREFIX,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.storage = storage
        self.prefix = prefix
        self.clock = clock

    async def _upload(self, file: LocalFile) -> str:
        path = build_object_path(file.filename, self.clock(), self.prefix)
        return await self.storage.upload(path, file.content, file.content_type)

    async def resolve(self, files: Sequence[LocalFile]) -> list[str]:
        """Upload every file; return URLs of the ones that made it."""
        if not files:
            return []
        results = await asyncio.gather(
            *(self._upload(f) for f in files), return_exceptions=True,
        )

        urls: list[str] = []
        for file, result in zip(files, results):
            if isinstance(result, StorageError):
                logger.warning(
                    f"Skipping attachment: {result.message}",
                    extra={"upload_name": file.filename, "error_code": result.code},
                )
            elif isinstance(result, Exception):
                logger.error(
                    f"Skipping attachment after unexpected upload error: {result}",
                    extra={"upload_name": file.filename},
                    exc_info=result,
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                urls.append(result)

        if len(urls) < len(files):
            logger.info(f"Resolved {len(urls)}/{len(files)} attachments")
        return urls
