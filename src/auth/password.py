"""Password hashing and verification using bcrypt.

bcrypt only reads the first 72 bytes of its input, and passwords of up to 100
characters pass validation. Input is therefore cut to 72 UTF-8 bytes before
hashing and verifying: two passwords sharing that prefix verify against each
other's hash. Distinct passwords within 72 bytes never do.
"""

from typing import Any, Optional

import bcrypt

# bcrypt only looks at the first 72 bytes of the secret
_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: Any, rounds: Optional[int] = None) -> str:
    """Hash a plain password with a fresh salt. Returns the bcrypt hash string."""
    if not plain or not isinstance(plain, str):
        raise ValueError("Password must be a non-empty string")
    if rounds is None:
        from config.settings import settings
        rounds = settings.auth.bcrypt_rounds
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: Any, hashed: Any) -> bool:
    """Verify plain password against stored hash. Never raises."""
    if not plain or not hashed or not isinstance(plain, str) or not isinstance(hashed, str):
        return False
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        # malformed / non-bcrypt hash
        return False
