"""Profile ORM — one row per registered user, keyed by the identity provider's id.

Invariants:
    - id equals the owning user's identifier (not generated here)
    - username is unique and immutable after registration
    - Pins reference profiles via owner_id; the username is never copied onto a Pin

Design Decisions:
    - No ORM relationship to Pin: feeds resolve authors with an explicit batch
      lookup (services/profile_repository.py), keeping PinRepository storage-agnostic
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pinboard.db.base import Base


class Profile(Base):
    """Public identity of a pin author."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    username: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
