"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, the ORM models satisfy PinLike and
      ProfileLike without inheriting from anything in core
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from pinboard.core.domain_types import PinId, UserId
from pinboard.core.pin_types import ValidatedPin


class PinLike(Protocol):
    """Structural contract for Pin objects read by the policy and feed code."""
    id: int
    owner_id: UserId
    text_content: str
    image_urls: list[str]
    music_link: str | None
    gif_url: str | None
    sticker: str | None
    background_color: str | None
    created_at: datetime
    is_archived: bool


class ProfileLike(Protocol):
    """Structural contract for Profile objects used in attribution."""
    id: UserId
    username: str


class ObjectStorage(Protocol):
    """Contract for blob storage — upload returns a publicly resolvable URL."""
    async def upload(
        self, path: str, blob: bytes, content_type: str | None = None,
    ) -> str: ...


class PinStore(Protocol):
    """Contract for pin persistence — implemented by shell."""
    async def create(
        self, owner_id: UserId, pin: ValidatedPin, image_urls: Sequence[str],
    ) -> PinLike: ...
    async def get_by_id(self, pin_id: PinId) -> PinLike: ...
    async def update_text(
        self, pin_id: PinId, owner_id: UserId, new_text: str,
    ) -> PinLike: ...
    async def delete(self, pin_id: PinId, owner_id: UserId) -> None: ...
    async def set_archived(
        self, pin_id: PinId, owner_id: UserId, archived: bool,
    ) -> PinLike: ...
    async def list_by_owner(
        self, owner_id: UserId, include_archived: bool,
    ) -> list[PinLike]: ...
    async def list_all(self, limit: int = 50) -> list[PinLike]: ...


class ProfileStore(Protocol):
    """Contract for profile lookups — implemented by shell."""
    async def get_by_id(self, user_id: UserId) -> ProfileLike | None: ...
    async def get_by_username(self, username: str) -> ProfileLike | None: ...
    async def usernames_for(
        self, user_ids: Sequence[UserId],
    ) -> dict[UserId, str]: ...
