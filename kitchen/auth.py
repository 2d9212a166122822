"""
Auth provider: sign-up, password login, bearer sessions and logout.

Passwords are stored as bcrypt hashes. Login issues an opaque random access token
stored in auth_sessions with an expiry; every authenticated request resolves its
token back to a user through get_user_for_token().

Session lifetime comes from SESSION_TTL_SECONDS (default: 3600 seconds).
"""

import json
import logging
import os
import secrets
from datetime import timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from sqlalchemy.exc import IntegrityError

from .db import AuthSessionRow, UserRow, get_db_session, utcnow
from .errors import AuthError, ValidationError
from .models import AuthSession, User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
DEFAULT_SESSION_TTL_SECONDS = 3600


def _session_ttl_seconds() -> int:
    raw = os.getenv("SESSION_TTL_SECONDS")
    return int(raw) if raw else DEFAULT_SESSION_TTL_SECONDS


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def _password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _user_to_model(row: UserRow) -> User:
    metadata: Dict[str, Any] = {}
    if row.user_metadata:
        try:
            metadata = json.loads(row.user_metadata)
        except ValueError:
            logger.warning("Stored metadata for user %s is not valid JSON", row.id)
    return User(
        id=row.id,
        email=row.email,
        user_metadata=metadata,
        created_at=row.created_at,
    )


def sign_up(email: Optional[str], password: Optional[str], metadata: Optional[Dict[str, Any]] = None) -> User:
    """
    Create a new auth identity.

    Args:
        email: Login email (case-insensitive)
        password: Plain text password (6 characters to 72 bytes)
        metadata: Free-form profile data (e.g. {"name": "Ada"})

    Returns:
        The created User

    Raises:
        ValidationError: Missing email/password, password too short or too long, or email already registered
    """
    email_norm = _normalize_email(email)
    if not email_norm or not password:
        raise ValidationError("Email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
    if _password_too_long(password):
        raise ValidationError(f"Password should be at most {MAX_PASSWORD_BYTES} bytes")

    db = get_db_session()
    try:
        if db.query(UserRow).filter(UserRow.email == email_norm).first():
            raise ValidationError("User already registered")

        row = UserRow(
            email=email_norm,
            password_hash=hash_password(password),
            user_metadata=json.dumps(metadata) if metadata else None,
        )
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("User already registered")
        db.refresh(row)

        logger.info("User signed up: id=%s", row.id)
        return _user_to_model(row)
    finally:
        db.close()


def sign_in(email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """
    Authenticate with email and password and open a bearer session.

    Returns:
        Dictionary with:
        - session: AuthSession (access_token, token_type, expires_in, expires_at)
        - user: User

    Raises:
        ValidationError: Missing email or password
        AuthError: Unknown email or wrong password
    """
    email_norm = _normalize_email(email)
    if not email_norm or not password:
        raise ValidationError("Email and password are required")

    db = get_db_session()
    try:
        user_row = db.query(UserRow).filter(UserRow.email == email_norm).first()
        if user_row is None or _password_too_long(password) or not verify_password(password, user_row.password_hash):
            logger.info("Failed login attempt for %r", email_norm)
            raise AuthError("Invalid login credentials")

        ttl = _session_ttl_seconds()
        now = utcnow()
        expires_at = now + timedelta(seconds=ttl)
        session_row = AuthSessionRow(
            access_token=secrets.token_urlsafe(32),
            user_id=user_row.id,
            created_at=now,
            expires_at=expires_at,
        )
        db.add(session_row)
        db.commit()

        session = AuthSession(
            access_token=session_row.access_token,
            expires_in=ttl,
            expires_at=int(expires_at.replace(tzinfo=timezone.utc).timestamp()),
        )
        return {"session": session, "user": _user_to_model(user_row)}
    finally:
        db.close()


def sign_out(access_token: Optional[str]) -> None:
    """
    Invalidate a bearer session. Unknown tokens are ignored.
    """
    if not access_token:
        return

    db = get_db_session()
    try:
        deleted = db.query(AuthSessionRow).filter(AuthSessionRow.access_token == access_token).delete()
        db.commit()
        logger.debug("Signed out session (rows deleted: %d)", deleted)
    except Exception as e:
        db.rollback()
        logger.error("Error deleting auth session: %s", e)
        raise
    finally:
        db.close()


def get_user_for_token(access_token: Optional[str]) -> User:
    """
    Resolve a bearer token to its user.

    Expired sessions are deleted when presented.

    Raises:
        AuthError: Missing, unknown or expired token
    """
    if not access_token:
        raise AuthError("Missing access token")

    db = get_db_session()
    try:
        session_row = db.query(AuthSessionRow).filter(AuthSessionRow.access_token == access_token).first()
        if session_row is None:
            raise AuthError("Invalid or expired token")

        if session_row.expires_at <= utcnow():
            db.delete(session_row)
            db.commit()
            raise AuthError("Invalid or expired token")

        user_row = db.get(UserRow, session_row.user_id)
        if user_row is None:
            raise AuthError("Invalid or expired token")

        return _user_to_model(user_row)
    finally:
        db.close()
