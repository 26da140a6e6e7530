"""Session Tokens — signed round trip, tampering and expiry."""

from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer

from pinboard.core.pin_types import SessionContext
from pinboard.infrastructure.identity import SessionCodec


def _session() -> SessionContext:
    return SessionContext(user_id=uuid4(), username="alice")


def test_issue_then_read_returns_same_session():
    codec = SessionCodec("secret")
    session = _session()
    assert codec.read(codec.issue(session)) == session


def test_missing_token_reads_as_none():
    assert SessionCodec("secret").read(None) is None
    assert SessionCodec("secret").read("") is None


def test_tampered_token_reads_as_none():
    codec = SessionCodec("secret")
    token = codec.issue(_session())
    assert codec.read(token[:-2] + "xx") is None


def test_token_from_other_secret_reads_as_none():
    token = SessionCodec("other-secret").issue(_session())
    assert SessionCodec("secret").read(token) is None


def test_expired_token_reads_as_none():
    codec = SessionCodec("secret", max_age_seconds=-1)
    assert codec.read(codec.issue(_session())) is None


def test_malformed_payload_reads_as_none():
    codec = SessionCodec("secret")
    token = URLSafeTimedSerializer("secret", salt="pinboard-session").dumps(
        {"uid": "not-a-uuid", "u": "alice"},
    )
    assert codec.read(token) is None
