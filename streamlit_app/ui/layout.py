"""
Layout primitives for consistent page structure.

Provides the page header and the recipe row used by both the favorites list and the
suggested recipes list.
"""

from typing import Any, Callable, Dict, Optional

import streamlit as st

from utils.formatting import format_cooking_time

HEART_FILLED = "❤️"
HEART_EMPTY = "🤍"


def page_header(title: str, subtitle: Optional[str] = None, right: Optional[callable] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
        right: Optional callable that renders right-side content (e.g., a sign-out button)
    """
    if right is not None:
        col_title, col_right = st.columns([3, 1])
        with col_title:
            st.markdown(f"# {title}")
            if subtitle:
                st.markdown(f'<div class="rf-subtitle">{subtitle}</div>', unsafe_allow_html=True)
        with col_right:
            right()
    else:
        st.markdown(f"# {title}")
        if subtitle:
            st.markdown(f'<div class="rf-subtitle">{subtitle}</div>', unsafe_allow_html=True)


def recipe_row(
    recipe: Dict[str, Any],
    key: str,
    on_open: Callable[[Dict[str, Any]], None],
    on_toggle: Callable[[Dict[str, Any]], None],
    disabled: bool = False,
) -> None:
    """
    Render one recipe: thumbnail, name, cooking time, open button and heart toggle.

    Args:
        recipe: Client recipe dict (name, cooking_time, image_url, favoriteId, ...)
        key: Unique widget key prefix
        on_open: Called with the recipe when "View" is clicked
        on_toggle: Called with the recipe when the heart is clicked
        disabled: Disable both buttons (e.g. while a search is running)
    """
    with st.container(border=True):
        col_img, col_text, col_actions = st.columns([1, 3, 1])
        with col_img:
            if recipe.get("image_url"):
                st.image(recipe["image_url"], use_container_width=True)
            else:
                st.markdown("### 🍽")
        with col_text:
            st.markdown(f'<div class="rf-recipe-name">{recipe.get("name", "")}</div>', unsafe_allow_html=True)
            st.markdown(
                f'<div class="rf-recipe-time">⏱ {format_cooking_time(recipe.get("cooking_time"))}</div>',
                unsafe_allow_html=True,
            )
        with col_actions:
            heart = HEART_FILLED if recipe.get("favoriteId") else HEART_EMPTY
            if st.button(heart, key=f"{key}_fav", disabled=disabled, help="Toggle favorite"):
                on_toggle(recipe)
            if st.button("View", key=f"{key}_open", disabled=disabled):
                on_open(recipe)
