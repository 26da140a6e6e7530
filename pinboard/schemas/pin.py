"""Pin Schemas — Pydantic models for pin and feed responses and edit requests.

Invariants:
    - PinResponse mirrors the Pin entity; owner_id is exposed, usernames are not
    - FeedEntryResponse pairs a pin with its author and the viewer's editable flag
    - edit_window_closes_at is always created_at + 24h

Design Decisions:
    - from_attributes: responses built straight from ORM entities
    - PinTextUpdate does not trim, reject blanks or cap length itself: the core
      rule (validate_text) is shared with create and surfaces EMPTY_CONTENT or
      CONTENT_TOO_LONG
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pinboard.core.edit_window import as_utc, edit_window_closes_at
from pinboard.core.feed_attribution import FeedEntry
from pinboard.core.repository_protocols import PinLike


class PinResponse(BaseModel):
    """Public-facing pin data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: UUID
    text_content: str
    image_urls: list[str] = Field(default_factory=list)
    music_link: str | None = None
    gif_url: str | None = None
    sticker: str | None = None
    background_color: str | None = None
    created_at: datetime
    is_archived: bool = False
    edit_window_closes_at: datetime

    @classmethod
    def from_pin(cls, pin: PinLike) -> "PinResponse":
        return cls(
            id=pin.id,
            owner_id=pin.owner_id,
            text_content=pin.text_content,
            image_urls=list(pin.image_urls or []),
            music_link=pin.music_link,
            gif_url=pin.gif_url,
            sticker=pin.sticker,
            background_color=pin.background_color,
            created_at=as_utc(pin.created_at),
            is_archived=pin.is_archived,
            edit_window_closes_at=edit_window_closes_at(pin),
        )


class FeedEntryResponse(BaseModel):
    """A pin with its author's display name."""
    pin: PinResponse
    author_username: str
    editable: bool

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> "FeedEntryResponse":
        return cls(
            pin=PinResponse.from_pin(entry.pin),
            author_username=entry.author_username,
            editable=entry.editable,
        )


class FeedResponse(BaseModel):
    """Ordered feed, newest first."""
    entries: list[FeedEntryResponse]
    count: int

    @classmethod
    def from_entries(cls, entries: list[FeedEntry]) -> "FeedResponse":
        return cls(
            entries=[FeedEntryResponse.from_entry(e) for e in entries],
            count=len(entries),
        )


class PinTextUpdate(BaseModel):
    """Edit request — replaces text_content only."""
    text_content: str
