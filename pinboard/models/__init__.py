"""ORM Models — SQLAlchemy declarative models for profiles and pins.

Invariants:
    - All models inherit from Base (db/base.py)
    - Profile owns zero or more Pins via pins.owner_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from pinboard.models.profile import Profile  # noqa: F401
from pinboard.models.pin import Pin  # noqa: F401
