"""Feed Routes — own feed, discovery feed and profile feeds.

Invariants:
    - Every feed requires a signed-in viewer (the app has no anonymous browsing)
    - Response order is the assembler's order: newest first, id ascending on ties
"""

from fastapi import APIRouter, Depends

from pinboard.api.dependencies import get_feed_assembler, require_session
from pinboard.core.pin_types import SessionContext
from pinboard.schemas.pin import FeedResponse
from pinboard.services.feed_assembler import FeedAssembler

router = APIRouter(prefix="/api/v1", tags=["feeds"])


@router.get("/feed", response_model=FeedResponse)
async def own_feed(
    session: SessionContext = Depends(require_session),
    feeds: FeedAssembler = Depends(get_feed_assembler),
):
    """The signed-in user's own non-archived pins."""
    return FeedResponse.from_entries(await feeds.own_feed(session))


@router.get("/discover", response_model=FeedResponse)
async def discovery_feed(
    session: SessionContext = Depends(require_session),
    feeds: FeedAssembler = Depends(get_feed_assembler),
):
    """The 50 most recent pins across all users."""
    return FeedResponse.from_entries(await feeds.discovery_feed(session))


@router.get("/profiles/{username}/pins", response_model=FeedResponse)
async def profile_feed(
    username: str,
    session: SessionContext = Depends(require_session),
    feeds: FeedAssembler = Depends(get_feed_assembler),
):
    """All pins posted by username."""
    return FeedResponse.from_entries(await feeds.profile_feed(username, session))
