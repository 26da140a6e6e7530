"""Attachment Resolver — best-effort uploads with stable ordering.

Invariants:
    - Failed uploads are omitted, never raised
    - URLs follow input order
    - Object paths are prefix/YYYY/MM/<uuid>.<ext>, unique per upload
"""

import re

from pinboard.core.pin_types import LocalFile
from pinboard.services.attachment_resolver import (
    AttachmentResolver, build_object_path,
)
from tests.services.fakes import T0


def _file(name: str, content: bytes) -> LocalFile:
    return LocalFile(filename=name, content=content, content_type="image/jpeg")


async def test_empty_input_uploads_nothing(storage, clock):
    resolver = AttachmentResolver(storage, clock=clock)
    assert await resolver.resolve([]) == []
    assert storage.attempts == []


async def test_all_uploads_succeed_in_input_order(storage, clock):
    resolver = AttachmentResolver(storage, clock=clock)
    files = [_file("a.jpg", b"A"), _file("b.png", b"B"), _file("c.gif", b"C")]

    urls = await resolver.resolve(files)

    assert len(urls) == 3
    assert [storage.stored[u.removeprefix("https://cdn.test/")] for u in urls] == [
        b"A", b"B", b"C",
    ]


async def test_failed_upload_is_skipped(storage, clock):
    storage.fail_blobs.add(b"B")
    resolver = AttachmentResolver(storage, clock=clock)

    urls = await resolver.resolve([_file("a.jpg", b"A"), _file("b.jpg", b"B")])

    assert len(urls) == 1
    assert storage.stored[urls[0].removeprefix("https://cdn.test/")] == b"A"
    assert len(storage.attempts) == 2


async def test_all_uploads_failing_returns_empty(storage, clock):
    storage.fail_blobs.update({b"A", b"B"})
    resolver = AttachmentResolver(storage, clock=clock)
    assert await resolver.resolve([_file("a.jpg", b"A"), _file("b.jpg", b"B")]) == []


async def test_unexpected_error_is_skipped_too(clock):
    class BrokenStorage:
        async def upload(self, path, blob, content_type=None):
            if blob == b"boom":
                raise RuntimeError("connection reset")
            return f"https://cdn.test/{path}"

    resolver = AttachmentResolver(BrokenStorage(), clock=clock)
    urls = await resolver.resolve([_file("x.jpg", b"boom"), _file("y.jpg", b"ok")])
    assert len(urls) == 1


async def test_same_file_twice_is_uploaded_twice(storage, clock):
    resolver = AttachmentResolver(storage, clock=clock)
    file = _file("same.jpg", b"S")

    urls = await resolver.resolve([file, file])

    assert len(urls) == 2
    assert urls[0] != urls[1]


def test_object_path_layout():
    path = build_object_path("Beach Day.JPG", T0)
    assert re.fullmatch(r"pin-images/2026/03/[0-9a-f]{32}\.jpg", path)


def test_object_path_custom_prefix_and_no_extension():
    path = build_object_path("README", T0, prefix="/uploads")
    assert re.fullmatch(r"uploads/2026/03/[0-9a-f]{32}", path)


def test_object_path_drops_client_name():
    assert "../../etc" not in build_object_path("../../etc/passwd.png", T0)
