"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the Recipe Finder Streamlit app.
"""

from ui.styles import load_global_styles
from ui.layout import page_header, recipe_row
from ui.feedback import show_error, show_empty_state, working_spinner

__all__ = [
    "load_global_styles",
    "page_header",
    "recipe_row",
    "show_error",
    "show_empty_state",
    "working_spinner",
]
