"""Pin Mutations — edit-window gated edit and delete, owner-only archive.

Invariants:
    - Check order: 404 -> 403 (owner) -> 403 (window) -> 400 (blank text)
    - Window is strictly less than 24h after created_at
    - Archive ignores the window
"""

from datetime import timedelta

import pytest

from pinboard.core.errors import (
    EditWindowExpiredError, EmptyContentError, ForbiddenError,
    ResourceNotFoundError,
)
from pinboard.core.pin_types import ValidatedPin
from pinboard.services.pin_mutations import PinMutations


@pytest.fixture
def mutations(pin_repo, clock):
    return PinMutations(pin_repo, clock)


@pytest.fixture
async def alice_pin(pin_repo, alice):
    return await pin_repo.create(alice.user_id, ValidatedPin(
        text_content="picnic", music_link=None, gif_url=None,
        sticker=None, background_color=None,
    ))


async def test_edit_then_late_delete_scenario(
    mutations, pin_repo, alice, alice_pin, clock,
):
    clock.advance(timedelta(hours=1))
    edited = await mutations.edit_text(alice, alice_pin.id, "picnic at noon")
    assert edited.text_content == "picnic at noon"

    clock.advance(timedelta(hours=24))
    with pytest.raises(EditWindowExpiredError) as exc_info:
        await mutations.delete(alice, alice_pin.id)
    assert exc_info.value.code == "EDIT_WINDOW_EXPIRED"
    assert exc_info.value.http_status == 403

    stored = await pin_repo.get_by_id(alice_pin.id)
    assert stored.text_content == "picnic at noon"


async def test_edit_just_inside_window(mutations, alice, alice_pin, clock):
    clock.advance(timedelta(hours=23, minutes=59, seconds=59))
    edited = await mutations.edit_text(alice, alice_pin.id, "still in time")
    assert edited.text_content == "still in time"


async def test_edit_at_exactly_24h_is_refused(mutations, alice, alice_pin, clock):
    clock.advance(timedelta(hours=24))
    with pytest.raises(EditWindowExpiredError):
        await mutations.edit_text(alice, alice_pin.id, "too late")


async def test_explicit_as_of_overrides_clock(mutations, alice, alice_pin):
    later = alice_pin.created_at + timedelta(days=2)
    with pytest.raises(EditWindowExpiredError):
        await mutations.edit_text(alice, alice_pin.id, "x", as_of=later)


async def test_edit_by_non_owner_is_forbidden(mutations, bob, alice_pin):
    with pytest.raises(ForbiddenError) as exc_info:
        await mutations.edit_text(bob, alice_pin.id, "hijacked")
    assert not isinstance(exc_info.value, EditWindowExpiredError)


async def test_non_owner_reported_before_expired_window(
    mutations, bob, alice_pin, clock,
):
    clock.advance(timedelta(days=3))
    with pytest.raises(ForbiddenError) as exc_info:
        await mutations.delete(bob, alice_pin.id)
    assert exc_info.value.code == "FORBIDDEN"


async def test_unknown_pin_is_not_found(mutations, alice):
    with pytest.raises(ResourceNotFoundError):
        await mutations.edit_text(alice, 424242, "anything")


async def test_blank_edit_is_rejected(mutations, pin_repo, alice, alice_pin):
    with pytest.raises(EmptyContentError):
        await mutations.edit_text(alice, alice_pin.id, "   ")
    assert (await pin_repo.get_by_id(alice_pin.id)).text_content == "picnic"


async def test_expired_window_reported_before_blank_text(
    mutations, alice, alice_pin, clock,
):
    clock.advance(timedelta(hours=30))
    with pytest.raises(EditWindowExpiredError):
        await mutations.edit_text(alice, alice_pin.id, "")


async def test_delete_inside_window(mutations, pin_repo, alice, alice_pin, clock):
    clock.advance(timedelta(hours=2))
    deleted = await mutations.delete(alice, alice_pin.id)
    assert deleted.id == alice_pin.id
    with pytest.raises(ResourceNotFoundError):
        await pin_repo.get_by_id(alice_pin.id)


async def test_archive_ignores_edit_window(mutations, alice, alice_pin, clock):
    clock.advance(timedelta(days=30))
    archived = await mutations.set_archived(alice, alice_pin.id, True)
    assert archived.is_archived is True
    restored = await mutations.set_archived(alice, alice_pin.id, False)
    assert restored.is_archived is False


async def test_archive_by_non_owner_is_forbidden(mutations, bob, alice_pin):
    with pytest.raises(ForbiddenError):
        await mutations.set_archived(bob, alice_pin.id, True)
