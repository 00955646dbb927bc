"""Password hashing helpers (Argon2)."""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    """Create an Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def is_hashed(stored: str | None) -> bool:
    return bool(stored) and stored.startswith(_PREFIX)


def verify_password(password: str, stored: str | None) -> bool:
    """Check ``password`` against a stored value.

    Values without the Argon2 prefix are cleartext records kept for
    interchange with older stores and are compared as-is.
    """
    stored = stored or ""
    if is_hashed(stored):
        try:
            return _ph.verify(stored[len(_PREFIX):], password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False
    return bool(stored) and secrets.compare_digest(stored.encode(), password.encode())
