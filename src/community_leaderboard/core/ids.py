"""Canonical identifiers shared by every persisted entity.

Identifiers are 12 random bytes rendered as 24 lowercase hex characters,
the same shape as a document-store object id. Path parameters, ORM keys and
client payloads all pass through :func:`normalize_id` before comparison so a
single representation is used everywhere.
"""

from __future__ import annotations

import re
import secrets

ID_BYTES = 12
ID_HEX_LENGTH = ID_BYTES * 2

_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class InvalidIdentifierError(ValueError):
    """Raised when a value cannot be interpreted as an entity identifier."""


def new_id() -> str:
    """Return a fresh random identifier."""
    return secrets.token_hex(ID_BYTES)


def normalize_id(value: str | bytes) -> str:
    """Return the canonical lowercase hex form of ``value``.

    Accepts the hex string itself (any case, surrounding whitespace ignored)
    or the raw 12-byte form.

    Raises:
        InvalidIdentifierError: If ``value`` is not a valid identifier.
    """
    if isinstance(value, bytes):
        if len(value) != ID_BYTES:
            raise InvalidIdentifierError(f"Expected {ID_BYTES} bytes, got {len(value)}")
        return value.hex()

    if not isinstance(value, str):
        raise InvalidIdentifierError(f"Unsupported identifier type: {type(value).__name__}")

    candidate = value.strip().lower()
    if not _ID_PATTERN.match(candidate):
        raise InvalidIdentifierError(f"Malformed identifier: {value!r}")
    return candidate


def same_id(left: str | bytes | None, right: str | bytes | None) -> bool:
    """Compare two identifiers after normalization; ``None`` never matches."""
    if left is None or right is None:
        return False
    try:
        return normalize_id(left) == normalize_id(right)
    except InvalidIdentifierError:
        return False
