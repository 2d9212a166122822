"""
Configuration management for Recipe Finder.

This module centralizes environment variable loading from .env file at project root.
It should be imported early in both backend (api/main.py) and frontend (streamlit_app/app.py)
to ensure .env is loaded before any other code accesses environment variables.

In production, .env will not exist; load_dotenv() is safe to call and will no-op.
Environment variables from the deployment platform will be used instead.

Environment Variables:
- DATABASE_URL: Optional, SQLAlchemy URL (defaults to sqlite:///./recipes.db)
- SESSION_TTL_SECONDS: Optional, lifetime of login sessions (defaults to 3600)
- GEMINI_API_KEY: Required for the AI recipe suggestion endpoints
- GEMINI_MODEL: Optional, defaults to "gemini-2.0-flash"
- PEXELS_API_KEY: Optional, recipe photos are omitted when missing
- IMAGE_LOOKUP_TIMEOUT_SECONDS: Optional, defaults to 10
- CORS_ALLOW_ORIGINS: Optional, comma-separated origins (defaults to "*")
- BACKEND_URL: Optional, backend URL for the Streamlit client (defaults to http://localhost:8000)
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    This function locates the project root by going up from this file's location
    (api/config.py -> project root) and loads .env if it exists.

    Safe to call multiple times. Existing environment variables take precedence.
    """
    this_file = Path(__file__).resolve()
    project_root = this_file.parent.parent
    env_path = project_root / ".env"

    load_dotenv(env_path, override=False)


# Load .env file on module import
load_env_file()


class GeminiConfig:
    """Configuration for the Gemini recipe generator."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get Gemini API key from environment.

        Returns:
            API key string or None if not set

        Note:
            This does not raise an error - the generator validates its own configuration.
        """
        return os.getenv("GEMINI_API_KEY")

    @staticmethod
    def get_model() -> str:
        """
        Get the Gemini model name.

        Returns:
            Model name (default: "gemini-2.0-flash")
        """
        return os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


class PexelsConfig:
    """Configuration for the Pexels image lookup."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get Pexels API key from environment.

        Returns:
            API key string or None if not set
        """
        return os.getenv("PEXELS_API_KEY")


class CorsConfig:
    """Configuration for cross-origin requests from the mobile/web client."""

    @staticmethod
    def get_allow_origins() -> List[str]:
        raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_required_env_vars() -> dict:
    """
    Get a dictionary of required environment variables and their status.

    Returns:
        Dictionary with keys:
        - gemini_api_key: bool (True if set)
        - pexels_api_key: bool (True if set)
    """
    return {
        "gemini_api_key": GeminiConfig.get_api_key() is not None,
        "pexels_api_key": PexelsConfig.get_api_key() is not None,
    }


def validate_required_config() -> None:
    """
    Validate that all required environment variables are set.

    Raises:
        RuntimeError: If any required configuration is missing

    Note:
        PEXELS_API_KEY is not required: suggestions are returned without photos.
    """
    missing = []

    if not GeminiConfig.get_api_key():
        missing.append("GEMINI_API_KEY (required for /api/ai/generate and /api/ai/regenerate)")

    if missing:
        raise RuntimeError(
            f"Missing required environment variables:\n" +
            "\n".join(f"  - {var}" for var in missing) +
            "\n\nPlease create a .env file at the project root with these variables."
        )
