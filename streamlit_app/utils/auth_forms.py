"""
Client-side checks for the login and registration forms.

Each function returns an error message for the first problem found, or None.
The backend repeats the email/password checks.
"""

from typing import Optional

MIN_PASSWORD_LENGTH = 6


def validate_login(email: Optional[str], password: Optional[str]) -> Optional[str]:
    if not (email or "").strip() or not password:
        return "Please enter your email and password"
    return None


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
) -> Optional[str]:
    """
    Examples:
        >>> validate_registration("Ada", "ada@example.com", "secret1", "secret1") is None
        True
        >>> validate_registration("Ada", "ada@example.com", "short", "short")
        'Password must be at least 6 characters'
    """
    if not (name or "").strip() or not (email or "").strip() or not password or not confirm_password:
        return "Please fill in all fields"
    if password != confirm_password:
        return "Passwords do not match"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None
