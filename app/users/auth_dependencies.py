# app/users/auth_dependencies.py
# Centralized Authentication Dependencies
#
# Sign-in is handled by the external identity provider. This service only
# verifies the session token it issues and reads the user id from `sub`.

import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.helpers import messages
from config.appconfig import settings

logger = logging.getLogger(__name__)

# Security schemes
security_scheme = HTTPBearer(auto_error=False)  # Don't auto-raise for cookie fallback


def decode_session_token(token: str) -> Optional[dict]:
    """Verify signature and expiry of an identity-provider session token."""
    if not settings.AUTH_JWT_PUBLIC_KEY:
        logger.error("❌ AUTH_JWT_PUBLIC_KEY is not configured - every request is rejected")
        return None
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_PUBLIC_KEY,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.warning(f"⚠️  Rejected session token: {e}")
        return None


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    session_cookie: Optional[str] = Cookie(None, alias=settings.AUTH_SESSION_COOKIE),
) -> str:
    """
    Get the authenticated user id.

    Accepts token from EITHER:
    - Authorization: Bearer header (API clients)
    - the identity provider's session cookie (web browsers)

    Raises 401 if the token is missing, invalid or has no subject.
    """
    token_string = credentials.credentials if credentials else session_cookie
    if not token_string:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=messages.UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_session_token(token_string)
    user_id = payload.get("sub") if payload else None
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=messages.UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


async def get_current_admin_id(user_id: str = Depends(get_current_user_id)) -> str:
    """
    Require one of the configured admin ids.
    Raises 403 otherwise.
    """
    if user_id not in settings.admin_user_ids:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=messages.ADMIN_REQUIRED)
    return user_id
