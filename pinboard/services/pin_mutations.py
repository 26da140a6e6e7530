"""Pin Mutations — owner-initiated edit, delete and archive of an existing pin.

Invariants:
    - Check order: exists (404) -> owned by session user (403) -> inside edit window (403)
      -> for edits, non-blank text (400)
    - Edit and delete share the EditWindowPolicy rule; archive is owner-only, not windowed
    - Edited text is validated with the same rule as creation (non-blank, trimmed)
    - Each operation returns the affected entity (delete returns it detached)

Design Decisions:
    - Window check lives here, ownership is checked here AND in PinRepository:
      the repository re-checks so no caller can skip it
"""

import logging
from collections.abc import Callable
from datetime import datetime

from pinboard.core.domain_types import PinId
from pinboard.core.edit_window import can_mutate
from pinboard.core.errors import (
    EditWindowExpiredError, ErrorContext, ForbiddenError,
)
from pinboard.core.pin_types import SessionContext
from pinboard.core.repository_protocols import PinLike, PinStore
from pinboard.core.validate_pin import validate_text
from pinboard.services.pin_repository import utc_now

logger = logging.getLogger(__name__)


class PinMutations:
    """Edit-window gated writes on behalf of the signed-in user."""

    def __init__(
        self, pins: PinStore, clock: Callable[[], datetime] = utc_now,
    ):
        self.pins = pins
        self.clock = clock

    async def _get_mutable(
        self, session: SessionContext, pin_id: PinId, as_of: datetime | None,
    ) -> PinLike:
        pin = await self.pins.get_by_id(pin_id)
        if pin.owner_id != session.user_id:
            raise ForbiddenError(context=ErrorContext(
                pin_id=pin_id, user_id=str(session.user_id),
            ))
        if not can_mutate(pin, as_of or self.clock()):
            logger.info(
                "Edit window closed",
                extra={"pin_id": pin_id, "user_id": session.user_id},
            )
            raise EditWindowExpiredError(pin_id)
        return pin

    async def edit_text(
        self,
        session: SessionContext,
        pin_id: PinId,
        new_text: str,
        as_of: datetime | None = None,
    ) -> PinLike:
        """Replace a pin's text while the edit window is open."""
        await self._get_mutable(session, pin_id, as_of)
        text = validate_text(new_text)
        return await self.pins.update_text(pin_id, session.user_id, text)

    async def delete(
        self,
        session: SessionContext,
        pin_id: PinId,
        as_of: datetime | None = None,
    ) -> PinLike:
        """Delete a pin while the edit window is open."""
        pin = await self._get_mutable(session, pin_id, as_of)
        await self.pins.delete(pin_id, session.user_id)
        return pin

    async def set_archived(
        self, session: SessionContext, pin_id: PinId, archived: bool,
    ) -> PinLike:
        return await self.pins.set_archived(pin_id, session.user_id, archived)
