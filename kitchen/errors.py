"""
Domain errors raised by the kitchen services.

The API layer maps each error type to an HTTP status:
- ValidationError -> 400
- AuthError -> 401
- NotFoundError -> 404
- SuggestionError -> 500
"""


class KitchenError(Exception):
    """Base class for all domain errors."""


class ValidationError(KitchenError):
    """A required field is missing or malformed."""


class AuthError(KitchenError):
    """Credentials or access token are missing, invalid or expired."""


class NotFoundError(KitchenError):
    """The requested row does not exist or is not owned by the caller."""


class SuggestionError(KitchenError):
    """The generative model failed or returned an unusable response."""
