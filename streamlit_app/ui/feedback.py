"""
Error, empty-list and in-progress messages for the recipe screens.

Every page reports backend failures through show_error so the sign-in screen, Home
and Recipe Details look the same when something goes wrong.
"""

from contextlib import contextmanager
from typing import Iterator

import streamlit as st

from utils.api_client import NETWORK_ERROR_MESSAGE

OFFLINE_HINT = "Check that the backend is running and reachable, then try again."


def show_error(message: str) -> None:
    """Show a failed action; network failures also get a connectivity hint."""
    st.error(f"⚠️ {message}")
    if message == NETWORK_ERROR_MESSAGE:
        st.caption(OFFLINE_HINT)


def show_empty_state(title: str, subtitle: str = "", icon: str = "🍽") -> None:
    """Placeholder for an empty favorites list, an empty search or a missing selection."""
    st.info(f"{icon} **{title}**")
    if subtitle:
        st.caption(subtitle)


@contextmanager
def working_spinner(label: str) -> Iterator[None]:
    # Backend calls are synchronous; the spinner covers the whole rerun step
    with st.spinner(label):
        yield
