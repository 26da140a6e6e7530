"""Feed Attribution — pure join of pins to author usernames.

Invariants:
    - Input order is preserved: ordering is the repository query's job
    - A pin whose author cannot be resolved is attributed ANONYMOUS_AUTHOR, never dropped
    - editable is True only for the viewer's own pins inside the edit window

Design Decisions:
    - Usernames arrive as a dict, not per-pin lookups: the shell fetches them in
      one query and this module stays IO-free
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from pinboard.core.domain_types import ANONYMOUS_AUTHOR, UserId
from pinboard.core.edit_window import can_mutate
from pinboard.core.repository_protocols import PinLike
from pinboard.core.pin_types import SessionContext


@dataclass(frozen=True)
class FeedEntry:
    """A pin paired with its author's display name."""
    pin: PinLike
    author_username: str
    editable: bool = False


def is_editable_by(
    pin: PinLike, viewer: SessionContext | None, as_of: datetime,
) -> bool:
    if viewer is None or pin.owner_id != viewer.user_id:
        return False
    return can_mutate(pin, as_of)


def attribute_pins(
    pins: Iterable[PinLike],
    usernames: Mapping[UserId, str],
    viewer: SessionContext | None,
    as_of: datetime,
) -> list[FeedEntry]:
    """Pair each pin with its author's username, keeping order."""
    return [
        FeedEntry(
            pin=pin,
            author_username=usernames.get(pin.owner_id, ANONYMOUS_AUTHOR),
            editable=is_editable_by(pin, viewer, as_of),
        )
        for pin in pins
    ]
