"""
Recipe Finder - Streamlit Frontend Main Entry Point.

This is the main Streamlit application entry point and the sign-in screen. It offers
login and registration; once authenticated the user is sent to the Home page.

Note: Multi-page routing is handled automatically by Streamlit via the `pages/` folder.
Files in `pages/` starting with numbered prefixes (e.g., `01_🍽_Home.py`) will appear
as pages in the sidebar navigation.

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import streamlit as st

from utils.api_client import ApiError
from utils.auth_forms import validate_login, validate_registration
from utils.state import get_backend_client, get_credentials, reset_session
from ui.feedback import show_error
from ui.layout import page_header
from ui.styles import load_global_styles

HOME_PAGE = "pages/01_🍽_Home.py"

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Recipe Finder",
    page_icon="🍳",
    layout="centered",
    initial_sidebar_state="collapsed",
)

load_global_styles()

credentials = get_credentials()
if credentials.is_authenticated():
    st.switch_page(HOME_PAGE)

page_header("🍳 Recipe Finder", "Tell us what you feel like eating. We'll suggest five recipes.")

client = get_backend_client()
login_tab, register_tab = st.tabs(["Log in", "Create account"])

with login_tab:
    with st.form("login_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Log in", type="primary", use_container_width=True)

    if submitted:
        error = validate_login(email, password)
        if error:
            show_error(error)
        else:
            try:
                with st.spinner("Logging in…"):
                    result = client.login(email.strip(), password)
            except ApiError as e:
                show_error(e.message)
            else:
                reset_session()
                credentials.save(result["session"]["access_token"], result["user"]["id"])
                st.switch_page(HOME_PAGE)

with register_tab:
    with st.form("register_form"):
        name = st.text_input("Name", key="register_name")
        reg_email = st.text_input("Email", key="register_email")
        reg_password = st.text_input("Password", type="password", key="register_password")
        confirm = st.text_input("Confirm password", type="password", key="register_confirm")
        registered = st.form_submit_button("Create account", type="primary", use_container_width=True)

    if registered:
        error = validate_registration(name, reg_email, reg_password, confirm)
        if error:
            show_error(error)
        else:
            try:
                with st.spinner("Creating your account…"):
                    client.signup(reg_email.strip(), reg_password, name.strip())
            except ApiError as e:
                show_error(e.message)
            else:
                st.success("Account created! You can log in now.")
