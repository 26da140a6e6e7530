"""Session Tokens — verifies identity-provider sessions as SessionContext values.

Invariants:
    - A token carries the user id and username, signed and timestamped
    - read() returns None for anything unsigned, expired or malformed (never raises)
    - Sign-out is stateless: the client's token is discarded (cookie deleted)

Design Decisions:
    - itsdangerous URLSafeTimedSerializer: shared secret with the identity provider,
      no session table to query on every request
    - Token accepted from the session cookie or an Authorization: Bearer header
"""

import logging
from uuid import UUID

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from pinboard.core.domain_types import UserId
from pinboard.core.pin_types import SessionContext

logger = logging.getLogger(__name__)

COOKIE_NAME = "pinboard_session"
_SALT = "pinboard-session"


class SessionCodec:
    """Issues and reads signed session tokens."""

    def __init__(self, secret_key: str, max_age_seconds: int = 86400):
        self.serializer = URLSafeTimedSerializer(secret_key, salt=_SALT)
        self.max_age_seconds = max_age_seconds

    def issue(self, session: SessionContext) -> str:
        return self.serializer.dumps(
            {"uid": str(session.user_id), "u": session.username},
        )

    def read(self, token: str | None) -> SessionContext | None:
        if not token:
            return None
        try:
            data = self.serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired:
            logger.info("Expired session token presented")
            return None
        except BadSignature:
            logger.warning("Session token with bad signature presented")
            return None
        try:
            return SessionContext(
                user_id=UserId(UUID(data["uid"])), username=data["u"],
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Malformed session token payload")
            return None
