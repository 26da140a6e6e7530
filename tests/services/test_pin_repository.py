"""Pin Repository — persistence, ownership re-checks and feed ordering.

Invariants:
    - created_at comes from the injected clock, id from the database
    - Non-owner writes raise ForbiddenError; unknown ids raise ResourceNotFoundError
    - Lists are created_at DESC, id ASC
    - Check-constraint violations surface as PersistenceError
"""

from datetime import timedelta

import pytest

from pinboard.core.errors import (
    ForbiddenError, PersistenceError, ResourceNotFoundError,
)
from pinboard.core.pin_types import ValidatedPin
from tests.services.fakes import T0


def _pin(text: str = "remember the lake", **kwargs) -> ValidatedPin:
    fields = dict(
        text_content=text, music_link=None, gif_url=None,
        sticker=None, background_color=None,
    )
    fields.update(kwargs)
    return ValidatedPin(**fields)


async def test_create_assigns_id_and_clock_timestamp(pin_repo, alice):
    pin = await pin_repo.create(
        alice.user_id, _pin(sticker="🌸"), ["https://cdn.test/a.jpg"],
    )
    assert pin.id is not None
    assert pin.owner_id == alice.user_id
    assert pin.created_at == T0
    assert pin.image_urls == ["https://cdn.test/a.jpg"]
    assert pin.sticker == "🌸"
    assert pin.is_archived is False


async def test_get_by_id_unknown_raises_not_found(pin_repo):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await pin_repo.get_by_id(999)
    assert exc_info.value.http_status == 404


async def test_update_text_by_owner(pin_repo, alice):
    pin = await pin_repo.create(alice.user_id, _pin())
    updated = await pin_repo.update_text(pin.id, alice.user_id, "second thoughts")
    assert updated.text_content == "second thoughts"
    assert (await pin_repo.get_by_id(pin.id)).text_content == "second thoughts"


async def test_update_text_by_non_owner_is_forbidden(pin_repo, alice, bob):
    pin = await pin_repo.create(alice.user_id, _pin("original"))
    with pytest.raises(ForbiddenError):
        await pin_repo.update_text(pin.id, bob.user_id, "hijacked")
    assert (await pin_repo.get_by_id(pin.id)).text_content == "original"


async def test_not_found_is_checked_before_ownership(pin_repo, bob):
    with pytest.raises(ResourceNotFoundError):
        await pin_repo.delete(12345, bob.user_id)


async def test_delete_removes_pin(pin_repo, alice):
    pin = await pin_repo.create(alice.user_id, _pin())
    await pin_repo.delete(pin.id, alice.user_id)
    with pytest.raises(ResourceNotFoundError):
        await pin_repo.get_by_id(pin.id)


async def test_delete_by_non_owner_is_forbidden(pin_repo, alice, bob):
    pin = await pin_repo.create(alice.user_id, _pin())
    with pytest.raises(ForbiddenError):
        await pin_repo.delete(pin.id, bob.user_id)
    assert await pin_repo.get_by_id(pin.id)


async def test_list_by_owner_orders_newest_first(pin_repo, alice, clock):
    first = await pin_repo.create(alice.user_id, _pin("one"))
    clock.advance(timedelta(minutes=5))
    second = await pin_repo.create(alice.user_id, _pin("two"))
    pins = await pin_repo.list_by_owner(alice.user_id, include_archived=True)
    assert [p.id for p in pins] == [second.id, first.id]


async def test_equal_timestamps_break_ties_by_ascending_id(pin_repo, alice):
    a = await pin_repo.create(alice.user_id, _pin("a"))
    b = await pin_repo.create(alice.user_id, _pin("b"))
    pins = await pin_repo.list_by_owner(alice.user_id, include_archived=True)
    assert [p.id for p in pins] == sorted([a.id, b.id])


async def test_list_by_owner_can_exclude_archived(pin_repo, alice):
    kept = await pin_repo.create(alice.user_id, _pin("kept"))
    hidden = await pin_repo.create(alice.user_id, _pin("hidden"))
    await pin_repo.set_archived(hidden.id, alice.user_id, True)

    visible = await pin_repo.list_by_owner(alice.user_id, include_archived=False)
    everything = await pin_repo.list_by_owner(alice.user_id, include_archived=True)

    assert [p.id for p in visible] == [kept.id]
    assert {p.id for p in everything} == {kept.id, hidden.id}


async def test_list_by_owner_only_returns_that_owner(pin_repo, alice, bob):
    await pin_repo.create(alice.user_id, _pin("alice's"))
    await pin_repo.create(bob.user_id, _pin("bob's"))
    pins = await pin_repo.list_by_owner(bob.user_id, include_archived=True)
    assert [p.text_content for p in pins] == ["bob's"]


async def test_list_all_is_capped_and_newest_first(pin_repo, alice, bob, clock):
    for i in range(55):
        owner = alice if i % 2 else bob
        await pin_repo.create(owner.user_id, _pin(f"pin {i}"))
        clock.advance(timedelta(seconds=1))

    pins = await pin_repo.list_all()

    assert len(pins) == 50
    stamps = [p.created_at for p in pins]
    assert stamps == sorted(stamps, reverse=True)
    assert pins[0].text_content == "pin 54"


async def test_list_all_honours_explicit_limit(pin_repo, alice):
    for i in range(3):
        await pin_repo.create(alice.user_id, _pin(f"pin {i}"))
    assert len(await pin_repo.list_all(limit=2)) == 2


async def test_blank_text_rejected_by_check_constraint(pin_repo, alice):
    """Bypassing core validation still cannot store a blank pin."""
    with pytest.raises(PersistenceError) as exc_info:
        await pin_repo.create(alice.user_id, _pin("   "))
    assert exc_info.value.http_status == 503
    assert await pin_repo.list_by_owner(alice.user_id, include_archived=True) == []
