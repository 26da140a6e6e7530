"""Pin Types — explicit value objects crossing the core/shell boundary.

Invariants:
    - SessionContext is the only source of an owner id (never the payload)
    - RawPinPayload fields are untrusted until validate_pin returns a ValidatedPin
    - ValidatedPin has at most one of sticker / background_color populated
    - All types are frozen: passing them around never aliases mutable state

Design Decisions:
    - Frozen dataclasses over dicts: the loose payload shape of the web form is
      pinned down once at the boundary
    - LocalFile carries bytes, not a stream: uploads may run concurrently
"""

from dataclasses import dataclass

from pinboard.core.domain_types import UserId


@dataclass(frozen=True)
class SessionContext:
    """The signed-in user, as reported by the identity provider."""
    user_id: UserId
    username: str


@dataclass(frozen=True)
class RawPinPayload:
    """Pin fields as submitted by the composer, before validation."""
    text_content: str
    music_link: str | None = None
    gif_url: str | None = None
    sticker_or_color: str | None = None


@dataclass(frozen=True)
class ValidatedPin:
    """Normalized pin fields, safe to persist."""
    text_content: str
    music_link: str | None = None
    gif_url: str | None = None
    sticker: str | None = None
    background_color: str | None = None


@dataclass(frozen=True)
class LocalFile:
    """An image selected for upload."""
    filename: str
    content: bytes
    content_type: str | None = None
