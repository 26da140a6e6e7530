"""Initial schema — profiles and pins.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

from pinboard.core.domain_types import (
    MAX_COLOR_LENGTH, MAX_LINK_LENGTH, MAX_STICKER_LENGTH,
)

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
    )
    op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)

    op.create_table(
        "pins",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "owner_id", UUID(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text_content", sa.Text, nullable=False),
        sa.Column("image_urls", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("music_link", sa.String(MAX_LINK_LENGTH), nullable=True),
        sa.Column("gif_url", sa.String(MAX_LINK_LENGTH), nullable=True),
        sa.Column("sticker", sa.String(MAX_STICKER_LENGTH), nullable=True),
        sa.Column("background_color", sa.String(MAX_COLOR_LENGTH), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("is_archived", sa.Boolean, nullable=False, server_default="false"),
        sa.CheckConstraint("length(trim(text_content)) > 0", name="ck_pins_text_not_blank"),
    )
    op.create_index("ix_pins_created_at", "pins", ["created_at"])
    op.create_index("ix_pins_owner_created", "pins", ["owner_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_pins_owner_created", table_name="pins")
    op.drop_index("ix_pins_created_at", table_name="pins")
    op.drop_table("pins")
    op.drop_index("ix_profiles_username", table_name="profiles")
    op.drop_table("profiles")
