"""Pin Validation — pure normalization of a RawPinPayload into a ValidatedPin.

Invariants:
    - validate_pin is PURE: no IO, no clock, no side effects
    - Text is required and stored trimmed; blank optional fields become None
    - Every field is bounded by its MAX_*_LENGTH, so a valid pin always fits its columns
    - sticker_or_color is trimmed once, before routing and palette checks
    - Links must be absolute URLs (scheme + host, no whitespace)
    - Any non-empty sticker/color is accepted unless a palette is passed in
    - Checks run in field order; the first failure wins

Design Decisions:
    - Raise typed PinValidationError subclasses (not return dicts): the composer
      has no tool-result channel, and the API handler maps them to 400
    - Hex color tokens are routed to background_color, everything else to sticker
"""

import re
from collections.abc import Collection
from urllib.parse import urlsplit

from pinboard.core.domain_types import (
    MAX_LINK_LENGTH, MAX_STICKER_LENGTH, MAX_TEXT_LENGTH,
)
from pinboard.core.errors import (
    ContentTooLongError, EmptyContentError, MalformedUrlError,
    InvalidDecorationError,
)
from pinboard.core.pin_types import RawPinPayload, ValidatedPin


_COLOR_TOKEN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_text(text: str | None) -> str:
    """Trimmed text, or EmptyContentError / ContentTooLongError. Shared by create and edit."""
    cleaned = _blank_to_none(text)
    if cleaned is None:
        raise EmptyContentError()
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise ContentTooLongError(MAX_TEXT_LENGTH)
    return cleaned


def is_absolute_url(value: str) -> bool:
    """Syntactic check only: scheme://host with no embedded whitespace."""
    if any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(_SCHEME.match(parts.scheme)) and bool(parts.netloc) and bool(parts.hostname)


def _validate_link(field_name: str, value: str | None) -> str | None:
    cleaned = _blank_to_none(value)
    if cleaned is None:
        return None
    if len(cleaned) > MAX_LINK_LENGTH:
        raise MalformedUrlError(
            field_name, cleaned, f"cannot be longer than {MAX_LINK_LENGTH} characters",
        )
    if not is_absolute_url(cleaned):
        raise MalformedUrlError(field_name, cleaned)
    return cleaned


def is_color_token(value: str) -> bool:
    return bool(_COLOR_TOKEN.match(value))


def split_decoration(
    value: str | None, palette: Collection[str] | None = None,
) -> tuple[str | None, str | None]:
    """Route a trimmed sticker_or_color value to (sticker, background_color)."""
    value = _blank_to_none(value)
    if value is None:
        return None, None

    is_color = is_color_token(value)
    if not is_color and len(value) > MAX_STICKER_LENGTH:
        raise InvalidDecorationError(
            value, f"is longer than {MAX_STICKER_LENGTH} characters",
        )
    if palette is not None:
        candidate = value.upper() if is_color else value
        if candidate not in palette:
            raise InvalidDecorationError(value)
    if is_color:
        return None, value
    return value, None


def validate_pin(
    payload: RawPinPayload, palette: Collection[str] | None = None,
) -> ValidatedPin:
    """Validate and normalize a composer payload. Pure — raises on first violation."""
    text = validate_text(payload.text_content)
    music_link = _validate_link("music_link", payload.music_link)
    gif_url = _validate_link("gif_url", payload.gif_url)
    sticker, background_color = split_decoration(payload.sticker_or_color, palette)
    return ValidatedPin(
        text_content=text,
        music_link=music_link,
        gif_url=gif_url,
        sticker=sticker,
        background_color=background_color,
    )
