"""Profile Repository — read-side lookups used for author attribution.

Invariants:
    - Read-only: profiles are bootstrapped at registration, outside this service
    - usernames_for issues one query for any number of ids; missing ids are absent
      from the result (the caller decides the fallback)
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.core.domain_types import UserId
from pinboard.core.errors import PersistenceError
from pinboard.models.profile import Profile


class ProfileRepository:
    """Profile lookups over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _first(self, query) -> Profile | None:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise PersistenceError(type(e).__name__, "select") from e
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UserId) -> Profile | None:
        return await self._first(select(Profile).where(Profile.id == user_id))

    async def get_by_username(self, username: str) -> Profile | None:
        return await self._first(
            select(Profile).where(Profile.username == username),
        )

    async def usernames_for(
        self, user_ids: Sequence[UserId],
    ) -> dict[UserId, str]:
        ids = set(user_ids)
        if not ids:
            return {}
        try:
            result = await self.db.execute(
                select(Profile.id, Profile.username).where(
                    Profile.id.in_(list(ids)),
                ),
            )
        except SQLAlchemyError as e:
            raise PersistenceError(type(e).__name__, "select") from e
        return {row.id: row.username for row in result.all()}
