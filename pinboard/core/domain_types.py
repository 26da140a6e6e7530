"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the identity provider's UUID; PinId wraps the integer row id
    - PinId ascending equals insertion order (feed tie-break relies on it)
    - MAX_*_LENGTH constants bound user input; validation rejects anything longer
      and the ORM columns and migrations are sized from the same values
    - Palette values are single source of truth for stickers and colors

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
PinId = NewType("PinId", int)


# ─── Constants ───────────────────────────────────────────────────

ANONYMOUS_AUTHOR = "Anonymous"
DISCOVERY_FEED_LIMIT = 50

# Field limits shared by validation, ORM columns and migrations
MAX_TEXT_LENGTH = 10_000
MAX_LINK_LENGTH = 2048
MAX_STICKER_LENGTH = 64
MAX_COLOR_LENGTH = 32


# ─── Enums ───────────────────────────────────────────────────────

class Sticker(str, Enum):
    """Stickers offered by the composer."""
    BLOSSOM = "🌸"
    TWO_HEARTS = "💕"
    SMILE = "😊"
    PURPLE_HEART = "💜"
    ROSE = "🌹"
    FIRE = "🔥"
    MOON = "🌙"
    BUTTERFLY = "🦋"
    STAR = "⭐"
    SPARKLES = "✨"
    HIBISCUS = "🌺"
    SPARKLING_HEART = "💖"
    GROWING_HEART = "💗"
    UNICORN = "🦄"
    RIBBON = "🎀"
    DAISY = "🌼"


class BackgroundColor(str, Enum):
    """Pin background colors offered by the composer."""
    CREAM = "#FFF9E6"
    BLUSH_PINK = "#FFB6C1"
    SOFT_PINK = "#FFC0CB"
    WARM_BEIGE = "#F5F5DC"
    LAVENDER = "#E6E6FA"


DECORATION_PALETTE: frozenset[str] = frozenset(
    [s.value for s in Sticker] + [c.value for c in BackgroundColor],
)
