"""Pin Routes — create, read, edit, delete and archive individual pins.

Invariants:
    - Owner always comes from the session, never from the request body
    - Writes return the affected pin so clients can update without refetching
    - Domain errors propagate to the global PinboardError handler

Design Decisions:
    - Create is multipart/form-data: text fields plus zero or more image files,
      mirroring the composer form
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from pinboard.api.dependencies import (
    get_pin_composer, get_pin_mutations, get_pin_repository, require_session,
)
from pinboard.core.domain_types import PinId
from pinboard.core.pin_types import LocalFile, RawPinPayload, SessionContext
from pinboard.schemas.pin import PinResponse, PinTextUpdate
from pinboard.services.pin_composer import PinComposer
from pinboard.services.pin_mutations import PinMutations
from pinboard.services.pin_repository import PinRepository

router = APIRouter(prefix="/api/v1/pins", tags=["pins"])


async def _read_files(images: list[UploadFile] | None) -> list[LocalFile]:
    files = []
    for upload in images or []:
        if not upload.filename:
            continue
        files.append(LocalFile(
            filename=upload.filename,
            content=await upload.read(),
            content_type=upload.content_type,
        ))
    return files


@router.post(
    "", response_model=PinResponse, status_code=status.HTTP_201_CREATED,
)
async def create_pin(
    text_content: str = Form(""),
    music_link: str | None = Form(None),
    gif_url: str | None = Form(None),
    sticker_or_color: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    session: SessionContext = Depends(require_session),
    composer: PinComposer = Depends(get_pin_composer),
):
    """Create a memory pin with optional images, links and decoration."""
    payload = RawPinPayload(
        text_content=text_content,
        music_link=music_link,
        gif_url=gif_url,
        sticker_or_color=sticker_or_color,
    )
    pin = await composer.submit(session, payload, await _read_files(images))
    return PinResponse.from_pin(pin)


@router.get("/{pin_id}", response_model=PinResponse)
async def get_pin(
    pin_id: int,
    _: SessionContext = Depends(require_session),
    pins: PinRepository = Depends(get_pin_repository),
):
    return PinResponse.from_pin(await pins.get_by_id(PinId(pin_id)))


@router.patch("/{pin_id}", response_model=PinResponse)
async def edit_pin(
    pin_id: int,
    body: PinTextUpdate,
    session: SessionContext = Depends(require_session),
    mutations: PinMutations = Depends(get_pin_mutations),
):
    """Replace the pin's text (owner only, within 24h of posting)."""
    pin = await mutations.edit_text(session, PinId(pin_id), body.text_content)
    return PinResponse.from_pin(pin)


@router.delete("/{pin_id}", response_model=PinResponse)
async def delete_pin(
    pin_id: int,
    session: SessionContext = Depends(require_session),
    mutations: PinMutations = Depends(get_pin_mutations),
):
    """Delete the pin (owner only, within 24h of posting)."""
    pin = await mutations.delete(session, PinId(pin_id))
    return PinResponse.from_pin(pin)


@router.post("/{pin_id}/archive", response_model=PinResponse)
async def archive_pin(
    pin_id: int,
    session: SessionContext = Depends(require_session),
    mutations: PinMutations = Depends(get_pin_mutations),
):
    pin = await mutations.set_archived(session, PinId(pin_id), True)
    return PinResponse.from_pin(pin)


@router.post("/{pin_id}/unarchive", response_model=PinResponse)
async def unarchive_pin(
    pin_id: int,
    session: SessionContext = Depends(require_session),
    mutations: PinMutations = Depends(get_pin_mutations),
):
    pin = await mutations.set_archived(session, PinId(pin_id), False)
    return PinResponse.from_pin(pin)
