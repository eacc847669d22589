"""
Authentication utilities - JWT bearer tokens.

Identity is issued elsewhere; this module only verifies that the bearer
token's subject matches the ``userId`` a request acts for. Verification is
skipped entirely unless ``AUTH_ENABLED`` is set.

``create_access_token`` is not used by the API; it mints tokens for local
development and tests against the same secret.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import settings
from ..errors import UnauthorizedError

# Bearer token security; missing headers are handled below
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode; ``sub`` must be the user id
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[str]:
    """
    Decode and verify a JWT access token.

    Returns:
        Optional[str]: The token subject (user id), or None if invalid
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    return payload.get("sub")


async def get_token_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    Dependency returning the authenticated user id.

    Returns:
        Optional[str]: User id from the token, or None when auth is disabled

    Raises:
        HTTPException: 401 if auth is enabled and the token is missing or invalid
    """
    if not settings.auth_enabled:
        return None

    user_id = decode_access_token(credentials.credentials) if credentials else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def authorize_user(user_id: str, token_user_id: Optional[str]) -> None:
    """
    Check that the caller acts for itself.

    Raises:
        UnauthorizedError: If a verified token belongs to another user
    """
    if token_user_id is not None and token_user_id != user_id:
        raise UnauthorizedError("Not found")
