# /app/core/security.py

"""
Token verification for the hosted identity provider.

The identity provider issues RS256 session tokens. This service never mints
tokens itself; it only verifies them and extracts the external user id from
the `sub` claim.
"""

import logging
from typing import Optional

import jwt

from .config import get_settings

logger = logging.getLogger(__name__)


def verify_session_token(token: str, public_key: Optional[str] = None) -> Optional[str]:
    """
    Returns the verified external user id for a session token, or None when
    the token is missing, expired, malformed or signed by someone else.
    """
    key = public_key or get_settings().clerk_jwt_public_key
    if not token or not key:
        return None
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=["RS256"],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as e:
        logger.info("Rejected session token: %s", e)
        return None
    return claims.get("sub")
