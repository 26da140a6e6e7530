"""Edit Window Policy — the single time-based rule gating edit and delete.

Invariants:
    - can_mutate is PURE and total: the caller supplies as_of, no clock is read
    - Strict inequality: as_of - created_at == EDIT_WINDOW is already expired
    - Edit and delete share the same window (no separate grace periods)
    - Naive datetimes are interpreted as UTC (SQLite drops tzinfo on read)

Design Decisions:
    - EDIT_WINDOW is a module constant, not a setting: the 24h promise is part of
      the product, not a deployment knob
"""

from datetime import datetime, timedelta, timezone

from pinboard.core.repository_protocols import PinLike


EDIT_WINDOW: timedelta = timedelta(hours=24)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def can_mutate(pin: PinLike, as_of: datetime) -> bool:
    """True while as_of is less than 24h after the pin was created."""
    return as_utc(as_of) - as_utc(pin.created_at) < EDIT_WINDOW


def edit_window_closes_at(pin: PinLike) -> datetime:
    """First instant at which the pin can no longer be edited or deleted."""
    return as_utc(pin.created_at) + EDIT_WINDOW
