"""Staff credentials: bcrypt password hashes and signed bearer tokens.

A token carries the user id as ``sub`` and the role the user held when it
was issued. ``billgenie.core.rbac`` re-checks that the account is still
active on every request.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from jwt.exceptions import PyJWTError

from billgenie.core.config import settings

logger = logging.getLogger(__name__)


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login password against the stored hash. A malformed hash never matches."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Stored password hash could not be checked: {e}")
        return False


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` with issue and expiry times added.

    Tokens live for ``access_token_expire_minutes`` (7 days by default)
    unless ``expires_delta`` says otherwise.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def create_user_token(user_id: int, role: str) -> str:
    return create_access_token({"sub": str(user_id), "role": role})


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Return the claims of a valid token, or None if it is forged, malformed or expired."""
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["exp", "sub"]},
        )
    except PyJWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None
    return claims
