"""
Backend API Client Module.

This module is the **single source of truth** for all backend API communication.
All HTTP calls to the FastAPI backend go through BackendClient.

Key principles:
- One method per backend route, returning the unwrapped payload
- Every call carries a timeout (AI calls get a longer one)
- Failures are raised as typed exceptions so callers decide what the user sees:
    - AuthExpiredError: 401, the caller must sign the user out
    - ApiError: any other non-2xx response, with the backend's {"error"} message
    - NetworkError: timeout or connection failure
- No automatic retries

# NOTE: The backend wraps payloads differently per route ({"data": ...} for auth,
    favorites and recipes; {"recipes": [...]} for AI suggestions). The methods here
    unwrap them so pages never touch the envelopes.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15
# Generation plus five image lookups
AI_TIMEOUT = 90
NETWORK_ERROR_MESSAGE = "Network error. Please try again."


class ApiError(Exception):
    """Non-2xx response from the backend."""

    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthExpiredError(ApiError):
    """401: token missing, invalid or expired."""


class NetworkError(ApiError):
    """The backend could not be reached (timeout, DNS, refused connection)."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE) -> None:
        super().__init__(None, message)


def get_backend_url() -> str:
    """
    Get the backend API base URL from environment variable or use default.

    Returns:
        Backend URL string with trailing slash removed. Defaults to http://localhost:8000
        for local development.
    """
    url = os.getenv("BACKEND_URL", "http://localhost:8000")
    return url.rstrip("/")


class BackendClient:
    """
    Thin wrapper over the Recipe Finder REST API.

    Authenticated methods take the bearer token explicitly so the client itself is
    stateless and can be shared across reruns.
    """

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = (base_url or get_backend_url()).rstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, headers=headers, json=json, timeout=timeout)
        except requests.exceptions.Timeout as e:
            logger.warning("%s %s timed out: %s", method, path, e)
            raise NetworkError() from e
        except requests.exceptions.ConnectionError as e:
            logger.warning("Could not connect to backend for %s %s: %s", method, path, e)
            raise NetworkError() from e
        except requests.exceptions.RequestException as e:
            logger.error("Request error for %s %s: %s", method, path, e)
            raise NetworkError() from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code == 401:
            raise AuthExpiredError(401, body.get("error") or "Unauthorized")
        if not response.ok:
            message = body.get("error") or f"Request failed ({response.status_code})"
            logger.info("%s %s failed: %s %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return body

    # ------------------------------------------------------------------ auth

    def signup(self, email: str, password: str, name: str) -> Dict[str, Any]:
        """Register and return the created user."""
        body = self._request(
            "POST",
            "/api/auth/signup",
            json={"email": email, "password": password, "metadata": {"name": name}},
        )
        return body["data"]["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in.

        Returns:
            Dictionary with "session" (access_token, expires_at, ...) and "user"
        """
        body = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return body["data"]

    def logout(self, token: str) -> None:
        self._request("POST", "/api/auth/logout", token=token)

    def get_profile(self, token: str) -> Dict[str, Any]:
        return self._request("GET", "/api/profile", token=token)["user"]

    def health(self) -> Optional[Dict[str, Any]]:
        """Backend /health payload, or None if the backend is unreachable or unhealthy."""
        try:
            body = self._request("GET", "/health", timeout=5)
        except ApiError:
            return None
        return body if body.get("status") == "ok" else None

    # ------------------------------------------------------------- favorites

    def list_favorites(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/favorites", token=token).get("data") or []

    def add_favorite(self, token: str, recipe: Dict[str, Any]) -> Dict[str, Any]:
        """
        Favorite a recipe.

        Args:
            recipe: Dict with name, cooking_time, image_url, ingredients, instructions

        Returns:
            Dictionary with "favoriteId" and "recipeId"
        """
        payload = {
            "name": recipe.get("name"),
            "cooking_time": recipe.get("cooking_time"),
            "image_url": recipe.get("image_url"),
            "ingredients": recipe.get("ingredients") or [],
            "instructions": recipe.get("instructions") or [],
        }
        return self._request("POST", "/api/favorites", token=token, json=payload)["data"]

    def remove_favorite(self, token: str, favorite_id: str) -> None:
        self._request("DELETE", f"/api/favorites/{favorite_id}", token=token)

    # --------------------------------------------------------------- recipes

    def list_recipes(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/recipes", token=token).get("data") or []

    def get_recipe(self, token: str, recipe_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/recipes/{recipe_id}", token=token)["data"]

    def create_recipe(self, token: str, recipe: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/recipes", token=token, json=recipe)["data"]

    def update_recipe(self, token: str, recipe_id: str, recipe: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/recipes/{recipe_id}", token=token, json=recipe)["data"]

    def delete_recipe(self, token: str, recipe_id: str) -> None:
        self._request("DELETE", f"/api/recipes/{recipe_id}", token=token)

    # -------------------------------------------------------------------- ai

    def generate(self, token: str, prompt: str) -> List[Dict[str, Any]]:
        """Five suggested recipes ({title, time, ingredients, instructions, imageQuery, imageUrl})."""
        body = self._request("POST", "/api/ai/generate", token=token, json={"prompt": prompt}, timeout=AI_TIMEOUT)
        return body.get("recipes") or []

    def regenerate(self, token: str, prompt: str, excluded: List[str]) -> List[Dict[str, Any]]:
        body = self._request(
            "POST",
            "/api/ai/regenerate",
            token=token,
            json={"prompt": prompt, "excludedRecipes": list(excluded)},
            timeout=AI_TIMEOUT,
        )
        return body.get("recipes") or []
