"""
Bearer access tokens.

Tokens are issued by the external authentication service; this module
decodes them into the ``UserAccess`` the core operates on. ``create_access_token``
is the same codec in the other direction.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from core.domain.value_objects import UserAccess, UserRole
from core.settings.sections.auth import AuthSettings


logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Token is missing, expired, malformed or carries unknown claims."""
    pass


def create_access_token(
    user_id: str,
    role: UserRole,
    settings: AuthSettings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token carrying the user's id (``sub``) and role."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"sub": user_id, "role": role.value, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: AuthSettings) -> UserAccess:
    """
    Verify a token and extract the caller's identity.

    Raises:
        InvalidTokenError: Signature, expiry or claims are not acceptable
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise InvalidTokenError(str(e)) from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("token has no subject")

    try:
        role = UserRole(payload.get("role", UserRole.CUSTOMER.value))
    except ValueError as e:
        raise InvalidTokenError(f"unknown role: {payload.get('role')}") from e

    return UserAccess(id=user_id, role=role)
