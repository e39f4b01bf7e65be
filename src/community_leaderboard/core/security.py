"""Password hashing helpers used when provisioning users."""
from __future__ import annotations

import hashlib
import secrets

_ITERATIONS = 260_000


def hash_password(password: str, *, salt: str | None = None) -> str:
    """Return a salted PBKDF2-SHA256 hash in ``salt$hexdigest`` form."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _ITERATIONS)
    return f"{salt}${digest.hex()}"
