"""Session Routes — who am I, and sign-out.

Invariants:
    - Sign-out always succeeds and clears the session cookie (idempotent)
    - Tokens themselves are issued by the identity provider, not here
"""

from fastapi import APIRouter, Depends, Response, status

from pinboard.api.dependencies import require_session
from pinboard.core.pin_types import SessionContext
from pinboard.infrastructure.identity import COOKIE_NAME

router = APIRouter(prefix="/api/v1/session", tags=["session"])


@router.get("")
async def current_session(session: SessionContext = Depends(require_session)):
    return {"user_id": str(session.user_id), "username": session.username}


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(response: Response):
    response.delete_cookie(COOKIE_NAME)
