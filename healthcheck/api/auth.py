"""
Health Check API Authentication
===============================

JWT bearer authentication for user-scoped endpoints.

Tokens are HS256-signed with `sub` carrying an opaque user id. Scoring
endpoints are public; saving, history and sharing require a token.

Usage:
    from healthcheck.api.auth import get_current_user

    @router.get("/protected")
    async def protected(user: CurrentUser = Depends(get_current_user)):
        return {"user_id": user.user_id}

Author: Health Check Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from healthcheck.config import settings
from healthcheck.logging import set_request_user

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================


@dataclass
class CurrentUser:
    """Authenticated user context from a validated JWT."""
    user_id: str
    email: Optional[str] = None
    company_name: Optional[str] = None


# =============================================================================
# Token Utilities
# =============================================================================


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    company_name: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        user_id: Opaque user identifier
        email: Optional email
        company_name: Optional company name used for share links
        expires_minutes: Token TTL in minutes (defaults to config)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    ttl = expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes

    payload: Dict[str, Any] = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
    }
    if email:
        payload["email"] = email
    if company_name:
        payload["company_name"] = company_name

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT token.

    Args:
        token: Encoded JWT

    Returns:
        Decoded payload dict

    Raises:
        HTTPException 401 if token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


# =============================================================================
# FastAPI Dependencies
# =============================================================================

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> CurrentUser:
    """
    FastAPI dependency that extracts and validates the current user from JWT.

    Usage:
        @router.get("/me")
        async def me(user: CurrentUser = Depends(get_current_user)):
            ...
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)
    set_request_user(payload["sub"])

    return CurrentUser(
        user_id=payload["sub"],
        email=payload.get("email"),
        company_name=payload.get("company_name"),
    )
