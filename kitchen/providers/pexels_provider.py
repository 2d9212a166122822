"""
Pexels stock-photo lookup.

Searches the Pexels API for a single landscape photo matching a phrase and returns
its URL. Requires PEXELS_API_KEY in .env file; the per-request timeout comes from
IMAGE_LOOKUP_TIMEOUT_SECONDS (default: 10 seconds).
"""

import logging
import os
from typing import Optional

import requests

from .base import BaseImageProvider

logger = logging.getLogger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"
DEFAULT_TIMEOUT_SECONDS = 10
# Size variant taken from photo["src"]
PHOTO_SIZE = "large"


class PexelsImageProvider(BaseImageProvider):
    """Image provider backed by the Pexels search API."""
    provider = "pexels"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None) -> None:
        """
        Args:
            api_key: Pexels API key (optional, reads from PEXELS_API_KEY env var if not provided)
            timeout: Request timeout in seconds (optional, reads from IMAGE_LOOKUP_TIMEOUT_SECONDS)

        Raises:
            RuntimeError: If PEXELS_API_KEY is not set
        """
        key = api_key or os.getenv("PEXELS_API_KEY")
        if not key:
            raise RuntimeError("PEXELS_API_KEY is not set; recipe images are disabled")

        self.api_key = key
        if timeout is None:
            raw = os.getenv("IMAGE_LOOKUP_TIMEOUT_SECONDS")
            timeout = float(raw) if raw else DEFAULT_TIMEOUT_SECONDS
        self.timeout = timeout

    def find_image(self, query: str) -> Optional[str]:
        """
        Raises:
            requests.HTTPError: Non-2xx response from Pexels
            requests.RequestException: Timeout or connection failure
        """
        response = requests.get(
            PEXELS_SEARCH_URL,
            headers={"Authorization": self.api_key},
            params={"query": query, "per_page": 1, "orientation": "landscape"},
            timeout=self.timeout,
        )
        response.raise_for_status()

        photos = (response.json() or {}).get("photos") or []
        if not photos:
            logger.debug("No Pexels photos for query=%r", query)
            return None

        src = photos[0].get("src") or {}
        return src.get(PHOTO_SIZE) or src.get("original")
