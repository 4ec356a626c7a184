"""Password hashing utilities built on bcrypt."""
from __future__ import annotations

import bcrypt

from postboard.core.settings import settings

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plaintext password, at most 72 bytes once UTF-8 encoded.
        rounds: Cost factor; defaults to ``settings.bcrypt_rounds`` (12).

    Returns:
        The encoded hash, suitable for storing in the users table.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if ``password`` matches ``hashed``; False otherwise."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError:
        return False
