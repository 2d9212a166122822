"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication (BackendClient and its errors)
- credentials: Bearer token / user id store
- auth_forms: Login and registration form checks
- search_session: Home screen and AI search state
- optimistic: Snapshot/rollback for optimistic updates
- favorites_sync: Favorites reconciliation and optimistic toggling
- formatting: Cooking-time parsing and display
- state: st.session_state glue used by the pages
"""
