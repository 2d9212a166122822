"""
Credential store for the signed-in user.

Holds the bearer token and user id in a key-value mapping. The app passes
st.session_state; tests pass a plain dict.
"""

from typing import MutableMapping, Optional

AUTH_TOKEN_KEY = "auth_token"
USER_ID_KEY = "user_id"


class CredentialStore:
    """Bearer token and user id of the current user."""

    def __init__(self, storage: MutableMapping) -> None:
        self._storage = storage

    def save(self, access_token: str, user_id: str) -> None:
        self._storage[AUTH_TOKEN_KEY] = access_token
        self._storage[USER_ID_KEY] = user_id

    def get_token(self) -> Optional[str]:
        return self._storage.get(AUTH_TOKEN_KEY) or None

    def get_user_id(self) -> Optional[str]:
        return self._storage.get(USER_ID_KEY) or None

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def clear(self) -> None:
        for key in (AUTH_TOKEN_KEY, USER_ID_KEY):
            if key in self._storage:
                del self._storage[key]
