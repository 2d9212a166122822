"""
Streamlit session-state glue.

Pages never build controllers or state objects themselves; they call the getters
here, which keep one HomeState and one BackendClient per browser session in
st.session_state.

# NOTE: Everything stored here lives only for the current Streamlit session. A page
    refresh signs the user out.
"""

from typing import Any, Callable, Dict, Optional

import streamlit as st

from .api_client import BackendClient
from .credentials import CredentialStore
from .favorites_sync import FavoritesController
from .search_session import HomeState

HOME_STATE_KEY = "home_state"
BACKEND_CLIENT_KEY = "backend_client"
SELECTED_RECIPE_KEY = "selected_recipe"
FAVORITES_LOADED_KEY = "favorites_loaded"
CURRENT_PAGE_KEY = "current_page"


def get_credentials() -> CredentialStore:
    return CredentialStore(st.session_state)


def get_backend_client() -> BackendClient:
    if BACKEND_CLIENT_KEY not in st.session_state:
        st.session_state[BACKEND_CLIENT_KEY] = BackendClient()
    return st.session_state[BACKEND_CLIENT_KEY]


def get_home_state() -> HomeState:
    if HOME_STATE_KEY not in st.session_state:
        st.session_state[HOME_STATE_KEY] = HomeState()
    return st.session_state[HOME_STATE_KEY]


def get_controller(on_sign_out: Optional[Callable[[], None]] = None) -> FavoritesController:
    """Controller bound to this session's client, credentials and home state."""
    return FavoritesController(
        api=get_backend_client(),
        credentials=get_credentials(),
        state=get_home_state(),
        on_sign_out=on_sign_out,
    )


def favorites_loaded() -> bool:
    return bool(st.session_state.get(FAVORITES_LOADED_KEY))


def mark_favorites_loaded() -> None:
    st.session_state[FAVORITES_LOADED_KEY] = True


def set_selected_recipe(recipe: Dict[str, Any]) -> None:
    """Remember the recipe the detail page should show."""
    st.session_state[SELECTED_RECIPE_KEY] = dict(recipe)


def get_selected_recipe() -> Optional[Dict[str, Any]]:
    return st.session_state.get(SELECTED_RECIPE_KEY)


def reset_session() -> None:
    """Drop every per-user value (called on sign-out)."""
    for key in (HOME_STATE_KEY, SELECTED_RECIPE_KEY, FAVORITES_LOADED_KEY, CURRENT_PAGE_KEY):
        if key in st.session_state:
            del st.session_state[key]


def arrived_on_page(page_name: str) -> bool:
    """
    True on the first run of page_name after another page (or none) was shown.

    Streamlit reruns a page on every interaction; this distinguishes navigating to a
    page from interacting with it.
    """
    previous = st.session_state.get(CURRENT_PAGE_KEY)
    st.session_state[CURRENT_PAGE_KEY] = page_name
    return previous != page_name
