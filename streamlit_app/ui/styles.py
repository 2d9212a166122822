"""
Global CSS Styling for Recipe Finder.

This module provides load_global_styles() to inject consistent styling across all
pages: typography, the teal accent color and the recipe list rows.
"""

import streamlit as st

ACCENT_COLOR = "#76ABAE"


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Finder app.

    This function:
    - Imports Google Fonts (Nunito) for friendly typography
    - Narrows the content column (the app is designed for phone-sized screens)
    - Styles recipe rows as rounded, borderless cards
    """
    css = f"""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {{
            font-family: 'Nunito', 'sans serif' !important;
        }}

        h1, h2, h3 {{
            font-weight: 700 !important;
            letter-spacing: 0.01em !important;
        }}

        .block-container {{
            max-width: 760px;
            padding-top: 2rem;
        }}

        .rf-subtitle {{
            color: #6b7280;
            margin-top: -0.75rem;
            margin-bottom: 1rem;
        }}

        .rf-recipe-name {{
            font-size: 1.1rem;
            font-weight: 700;
            margin-bottom: 0.1rem;
        }}

        .rf-recipe-time {{
            color: {ACCENT_COLOR};
            font-size: 0.9rem;
        }}

        .stButton > button[kind="primary"] {{
            background-color: {ACCENT_COLOR};
            border-color: {ACCENT_COLOR};
        }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
