"""Signed access tokens for the HTTP layer.

The token subject is the user id. The user record itself is looked up
on every request, so a deleted or changed user takes effect at once.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from medshop.core.config import settings

logger = logging.getLogger(__name__)


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload = {"sub": subject, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Subject of a valid token, or None if it is malformed, forged or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info(f"Rejected access token: {type(e).__name__}")
        return None
    return payload.get("sub")
