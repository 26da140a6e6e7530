"""API Dependencies — FastAPI providers for sessions, storage and services.

Invariants:
    - require_session raises UnauthenticatedError (401) when no valid token is sent
    - Services are built per request around the request's AsyncSession
    - Storage client and session codec are process-wide (cached)

Design Decisions:
    - Every collaborator is a Depends() provider: tests swap them through
      app.dependency_overrides, never by patching module globals
"""

from collections.abc import Callable
from datetime import datetime
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.config import get_settings
from pinboard.core.domain_types import DECORATION_PALETTE
from pinboard.core.errors import UnauthenticatedError
from pinboard.core.pin_types import SessionContext
from pinboard.core.repository_protocols import ObjectStorage
from pinboard.infrastructure.database import get_db
from pinboard.infrastructure.identity import COOKIE_NAME, SessionCodec
from pinboard.infrastructure.object_storage import S3ObjectStorage
from pinboard.services.attachment_resolver import AttachmentResolver
from pinboard.services.feed_assembler import FeedAssembler
from pinboard.services.pin_composer import PinComposer
from pinboard.services.pin_mutations import PinMutations
from pinboard.services.pin_repository import PinRepository, utc_now
from pinboard.services.profile_repository import ProfileRepository


@lru_cache
def get_session_codec() -> SessionCodec:
    settings = get_settings()
    return SessionCodec(
        settings.session_secret_key, settings.session_ttl_seconds,
    )


@lru_cache
def get_object_storage() -> ObjectStorage:
    return S3ObjectStorage.from_settings(get_settings())


def get_clock() -> Callable[[], datetime]:
    return utc_now


def _token_from(request: Request) -> str | None:
    auth = request.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return request.cookies.get(COOKIE_NAME)


def optional_session(
    request: Request, codec: SessionCodec = Depends(get_session_codec),
) -> SessionContext | None:
    return codec.read(_token_from(request))


def require_session(
    session: SessionContext | None = Depends(optional_session),
) -> SessionContext:
    if session is None:
        raise UnauthenticatedError()
    return session


def get_pin_repository(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PinRepository:
    return PinRepository(db, clock)


def get_feed_assembler(
    db: AsyncSession = Depends(get_db),
    pins: PinRepository = Depends(get_pin_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> FeedAssembler:
    return FeedAssembler(pins, ProfileRepository(db), clock)


def get_pin_composer(
    pins: PinRepository = Depends(get_pin_repository),
    storage: ObjectStorage = Depends(get_object_storage),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PinComposer:
    settings = get_settings()
    palette = DECORATION_PALETTE if settings.enforce_sticker_palette else None
    resolver = AttachmentResolver(storage, settings.upload_prefix, clock)
    return PinComposer(resolver, pins, palette)


def get_pin_mutations(
    pins: PinRepository = Depends(get_pin_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PinMutations:
    return PinMutations(pins, clock)
