"""Pin Repository — create/read/update/delete pins against the relational store.

Invariants:
    - id and created_at are assigned here, never taken from the caller's payload
    - update_text / delete / set_archived re-check ownership (NotFound before Forbidden)
    - Every list is ordered created_at DESC, id ASC (deterministic tie-break)
    - Storage-layer failures surface as PersistenceError; nothing is retried
    - No author attribution here: FeedAssembler joins usernames

Design Decisions:
    - Clock injected as a callable: tests pin "now" without patching datetime
    - Returns ORM entities (expire_on_commit=False) so write callers can update
      their views without a re-query
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.core.domain_types import DISCOVERY_FEED_LIMIT, PinId, UserId
from pinboard.core.errors import (
    ErrorContext, ForbiddenError, PersistenceError, ResourceNotFoundError,
)
from pinboard.core.pin_types import ValidatedPin
from pinboard.models.pin import Pin

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ordered(query):
    return query.order_by(Pin.created_at.desc(), Pin.id.asc())


class PinRepository:
    """Pin persistence over an AsyncSession."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.clock = clock

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Pin {operation} rejected by database: {e}")
            raise PersistenceError(type(e).__name__, operation) from e

    async def create(
        self, owner_id: UserId, pin: ValidatedPin, image_urls: Sequence[str] = (),
    ) -> Pin:
        """Persist a validated pin for owner_id. Assigns id and created_at."""
        entity = Pin(
            owner_id=owner_id,
            text_content=pin.text_content,
            image_urls=list(image_urls),
            music_link=pin.music_link,
            gif_url=pin.gif_url,
            sticker=pin.sticker,
            background_color=pin.background_color,
            created_at=self.clock(),
            is_archived=False,
        )
        self.db.add(entity)
        await self._commit("insert")
        logger.info(
            "Pin created", extra={"pin_id": entity.id, "user_id": owner_id},
        )
        return entity

    async def get_by_id(self, pin_id: PinId) -> Pin:
        try:
            entity = await self.db.get(Pin, pin_id)
        except SQLAlchemyError as e:
            raise PersistenceError(type(e).__name__, "select") from e
        if entity is None:
            raise ResourceNotFoundError(
                "Pin", str(pin_id), ErrorContext(pin_id=pin_id),
            )
        return entity

    async def _get_owned(self, pin_id: PinId, owner_id: UserId) -> Pin:
        entity = await self.get_by_id(pin_id)
        if entity.owner_id != owner_id:
            logger.warning(
                "Mutation by non-owner refused",
                extra={"pin_id": pin_id, "user_id": owner_id},
            )
            raise ForbiddenError(context=ErrorContext(
                pin_id=pin_id, user_id=str(owner_id),
            ))
        return entity

    async def update_text(
        self, pin_id: PinId, owner_id: UserId, new_text: str,
    ) -> Pin:
        """Replace text_content. Only the owner may do this."""
        entity = await self._get_owned(pin_id, owner_id)
        entity.text_content = new_text
        await self._commit("update")
        return entity

    async def set_archived(
        self, pin_id: PinId, owner_id: UserId, archived: bool,
    ) -> Pin:
        entity = await self._get_owned(pin_id, owner_id)
        entity.is_archived = archived
        await self._commit("update")
        return entity

    async def delete(self, pin_id: PinId, owner_id: UserId) -> None:
        entity = await self._get_owned(pin_id, owner_id)
        await self.db.delete(entity)
        await self._commit("delete")
        logger.info("Pin deleted", extra={"pin_id": pin_id, "user_id": owner_id})

    async def _list(self, query) -> list[Pin]:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise PersistenceError(type(e).__name__, "select") from e
        return list(result.scalars().all())

    async def list_by_owner(
        self, owner_id: UserId, include_archived: bool,
    ) -> list[Pin]:
        """Pins of one owner, newest first."""
        query = select(Pin).where(Pin.owner_id == owner_id)
        if not include_archived:
            query = query.where(Pin.is_archived.is_(False))
        return await self._list(_ordered(query))

    async def list_all(self, limit: int = DISCOVERY_FEED_LIMIT) -> list[Pin]:
        """Pins of every owner, newest first, capped at limit."""
        return await self._list(_ordered(select(Pin)).limit(limit))
