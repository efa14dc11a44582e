"""JWT-based token issuance and verification.

Tokens are stateless HS256-signed JWTs carrying ``{"user": {"id", "username"}}``.
Nothing is stored server-side: a token is valid exactly when its signature
checks out against the server secret and its ``exp`` claim is in the future.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenError(Exception):
    """Base class for every token verification failure."""


class TokenMissingError(TokenError):
    """Raised when no token was supplied."""


class TokenExpiredError(TokenError):
    """Raised when the token's ``exp`` claim has passed."""


class TokenInvalidError(TokenError):
    """Raised when the token is malformed, tampered with or lacks the user claim."""


def _secret(secret: Optional[str]) -> str:
    if secret:
        return secret
    from config.settings import settings
    if not settings.auth.secret_key:
        raise RuntimeError("JWT secret is not configured (set JWT_SECRET)")
    return settings.auth.secret_key


def create_token(
    user_id: int,
    username: str,
    secret: Optional[str] = None,
    expire_hours: Optional[float] = None,
) -> str:
    """Sign and return a new JWT for the given user.

    Args:
        user_id: The user's primary key.
        username: The user's login name.
        secret: Signing key; defaults to ``settings.auth.secret_key``.
        expire_hours: Lifetime in hours; defaults to ``settings.auth.token_expire_hours`` (24).

    Returns:
        A compact HS256 JWT string.
    """
    if expire_hours is None:
        from config.settings import settings
        expire_hours = settings.auth.token_expire_hours

    now = datetime.now(tz=timezone.utc)
    payload = {
        "user": {"id": user_id, "username": username},
        "iat": now,
        "exp": now + timedelta(hours=expire_hours),
    }
    return jwt.encode(payload, _secret(secret), algorithm=ALGORITHM)


def verify_token(token: Optional[str], secret: Optional[str] = None) -> Dict[str, Any]:
    """Validate *token* and return its ``user`` claim (``{"id", "username"}``).

    Raises:
        TokenMissingError: token is empty or ``None``.
        TokenExpiredError: signature is fine but ``exp`` has passed.
        TokenInvalidError: any other decode failure, or a missing/garbled user claim.
    """
    if not token:
        raise TokenMissingError("Token is missing")
    try:
        payload = jwt.decode(token, _secret(secret), algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        logger.info("Token expired: %s", e)
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.info("Invalid token: %s", e)
        raise TokenInvalidError("Token is invalid") from e

    user = payload.get("user")
    if not isinstance(user, dict) or user.get("id") is None or not user.get("username"):
        raise TokenInvalidError("Token has no user claim")
    return {"id": user["id"], "username": user["username"]}
