"""Feed Assembler — own, discovery and profile feeds with author attribution.

Invariants:
    - own_feed hides archived pins; profile_feed and discovery_feed do not
    - discovery_feed returns at most DISCOVERY_FEED_LIMIT pins
    - Unresolvable authors are attributed "Anonymous", never dropped
    - Order comes from PinRepository (created_at DESC, id ASC) and is preserved
    - profile_feed raises ResourceNotFoundError before touching pins

Design Decisions:
    - Attribution is a pure core function; this class only sequences the IO
    - Viewer and as_of are explicit arguments (no ambient session, no hidden clock)
"""

import logging
from collections.abc import Callable
from datetime import datetime

from pinboard.core.domain_types import DISCOVERY_FEED_LIMIT
from pinboard.core.errors import ResourceNotFoundError
from pinboard.core.feed_attribution import FeedEntry, attribute_pins
from pinboard.core.pin_types import SessionContext
from pinboard.core.repository_protocols import PinStore, ProfileStore
from pinboard.services.pin_repository import utc_now

logger = logging.getLogger(__name__)


class FeedAssembler:
    """Builds the three feed views."""

    def __init__(
        self,
        pins: PinStore,
        profiles: ProfileStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.pins = pins
        self.profiles = profiles
        self.clock = clock

    async def own_feed(
        self, session: SessionContext, as_of: datetime | None = None,
    ) -> list[FeedEntry]:
        """The signed-in user's non-archived pins."""
        pins = await self.pins.list_by_owner(
            session.user_id, include_archived=False,
        )
        profile = await self.profiles.get_by_id(session.user_id)
        usernames = {profile.id: profile.username} if profile else {}
        return attribute_pins(pins, usernames, session, as_of or self.clock())

    async def discovery_feed(
        self, viewer: SessionContext | None = None, as_of: datetime | None = None,
    ) -> list[FeedEntry]:
        """Most recent pins across all users, capped."""
        pins = await self.pins.list_all(DISCOVERY_FEED_LIMIT)
        usernames = await self.profiles.usernames_for(
            [p.owner_id for p in pins],
        )
        return attribute_pins(pins, usernames, viewer, as_of or self.clock())

    async def profile_feed(
        self,
        username: str,
        viewer: SessionContext | None = None,
        as_of: datetime | None = None,
    ) -> list[FeedEntry]:
        """All pins of the profile named username, archived included."""
        profile = await self.profiles.get_by_username(username)
        if profile is None:
            logger.info(f"Profile feed requested for unknown user '{username}'")
            raise ResourceNotFoundError("Profile", username)
        pins = await self.pins.list_by_owner(profile.id, include_archived=True)
        return attribute_pins(
            pins, {profile.id: profile.username}, viewer, as_of or self.clock(),
        )
