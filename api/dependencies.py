"""
Shared FastAPI dependencies.

Authenticated routes declare `user: User = Depends(get_current_user)`; the bearer
token is taken from the `Authorization: Bearer <token>` header and resolved through
kitchen.auth.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from kitchen.auth import get_user_for_token
from kitchen.errors import AuthError
from kitchen.models import User

logger = logging.getLogger(__name__)


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Extract the access token from the Authorization header.

    Returns:
        The token, or None if the header is missing or not a Bearer header
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(token: Optional[str] = Depends(get_bearer_token)) -> User:
    """
    Resolve the bearer token to the calling user.

    Raises:
        HTTPException 401: If the token is missing, unknown or expired
    """
    try:
        return get_user_for_token(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
