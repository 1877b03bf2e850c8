"""JWT authentication and security dependencies."""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from api.dependencies import get_user_repo
from api.models import UserResponse
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXPIRATION_HOURS = 24

security = HTTPBearer(auto_error=False)


def _secret_key() -> str:
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return secret


def _expiration() -> timedelta:
    return timedelta(hours=int(os.getenv("JWT_EXPIRATION_HOURS", DEFAULT_JWT_EXPIRATION_HOURS)))


def create_access_token(user_id: str) -> str:
    """Create JWT access token for user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + _expiration(),
        "iat": now,
    }
    return jwt.encode(payload, _secret_key(), algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """Verify JWT token and extract user_id."""
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug("JWT verification failed", extra={"error": str(e)})
        return None
    return payload.get("sub")


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = verify_token(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = user_repo.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return UserResponse.from_domain(user.to_info())
