# Auth: password hashing, token issuance/verification
from src.auth.password import hash_password, verify_password
from src.auth.session import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
    create_token,
    verify_token,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_token",
    "verify_token",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenMissingError",
]
