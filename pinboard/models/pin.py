"""Pin ORM — persists a single memory post.

Invariants:
    - id is an autoincrement integer: ascending id equals insertion order
    - owner_id and created_at are written once, at creation
    - text_content is non-nullable and never blank (checked in core before insert)
    - at most one of sticker / background_color is set

Design Decisions:
    - JSON column for image_urls: ordered list stored as-is, empty list rather than NULL
    - Composite index (owner_id, created_at): serves both owner-scoped feed queries
    - ON DELETE CASCADE on owner_id: removing a profile removes its pins
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, JSON, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pinboard.core.domain_types import (
    MAX_COLOR_LENGTH, MAX_LINK_LENGTH, MAX_STICKER_LENGTH,
)
from pinboard.db.base import Base


class Pin(Base):
    """Memory pin entity — text plus optional media, links and decoration."""
    __tablename__ = "pins"
    __table_args__ = (
        Index("ix_pins_owner_created", "owner_id", "created_at"),
        CheckConstraint(
            "length(trim(text_content)) > 0", name="ck_pins_text_not_blank",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    text_content: Mapped[str] = mapped_column(Text, nullable=False)
    image_urls: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    music_link: Mapped[str | None] = mapped_column(String(MAX_LINK_LENGTH), nullable=True)
    gif_url: Mapped[str | None] = mapped_column(String(MAX_LINK_LENGTH), nullable=True)
    sticker: Mapped[str | None] = mapped_column(String(MAX_STICKER_LENGTH), nullable=True)
    background_color: Mapped[str | None] = mapped_column(
        String(MAX_COLOR_LENGTH), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
