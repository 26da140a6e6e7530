"""Pin Composer — the "new pin" workflow: attachments, validation, insert.

Invariants:
    - Sequence is fixed: resolve attachments -> validate -> PinRepository.create
    - owner_id comes from the SessionContext, never from the payload
    - A validation failure persists nothing; blobs already uploaded stay orphaned
    - Either one fully formed Pin is created or nothing is

Design Decisions:
    - Attachments resolve before validation: the upload is the slow step and the
      composer form already blocks blank text, so the orphan case is rare
    - The palette is injected (None = accept any non-empty sticker/color)
"""

import logging
from collections.abc import Collection, Sequence

from pinboard.core.errors import PinValidationError
from pinboard.core.pin_types import LocalFile, RawPinPayload, SessionContext
from pinboard.core.repository_protocols import PinLike, PinStore
from pinboard.core.validate_pin import validate_pin
from pinboard.services.attachment_resolver import AttachmentResolver

logger = logging.getLogger(__name__)


class PinComposer:
    """Orchestrates AttachmentResolver, validate_pin and PinStore.create."""

    def __init__(
        self,
        attachments: AttachmentResolver,
        pins: PinStore,
        palette: Collection[str] | None = None,
    ):
        self.attachments = attachments
        self.pins = pins
        self.palette = palette

    async def submit(
        self,
        session: SessionContext,
        payload: RawPinPayload,
        files: Sequence[LocalFile] = (),
    ) -> PinLike:
        """Create a pin for the signed-in user."""
        image_urls = await self.attachments.resolve(files)
        try:
            validated = validate_pin(payload, self.palette)
        except PinValidationError as e:
            if image_urls:
                logger.info(
                    f"Pin rejected ({e.code}); {len(image_urls)} uploaded "
                    f"attachment(s) left orphaned",
                    extra={"user_id": session.user_id, "error_code": e.code},
                )
            raise
        return await self.pins.create(session.user_id, validated, image_urls)
