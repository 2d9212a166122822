"""
Base classes for the external collaborators of the suggestion service.

Two kinds of provider are plugged into kitchen.suggestions:
- a recipe generator that turns a free-text request into structured recipes
- an image provider that finds a stock photo for a short search phrase

Implementations read their credentials from the environment (loaded from .env by
api.config) and raise RuntimeError from __init__ when they are not configured.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseRecipeGenerator(ABC):
    """
    Abstract base class for generative recipe backends.

    Attributes:
        provider: Short identifier of the backend (e.g., "gemini")
    """
    provider: str

    @abstractmethod
    def generate(self, prompt: str, count: int) -> List[Dict[str, Any]]:
        """
        Generate recipes for a free-text request.

        Args:
            prompt: The full prompt, including any exclusion constraint
            count: Number of distinct recipes requested

        Returns:
            List of raw recipe dicts with keys title, time, ingredients,
            instructions and image_query. The length is whatever the backend
            returned; callers validate it.
        """
        pass


class BaseImageProvider(ABC):
    """
    Abstract base class for stock-photo lookups.

    Attributes:
        provider: Short identifier of the backend (e.g., "pexels")
    """
    provider: str

    @abstractmethod
    def find_image(self, query: str) -> Optional[str]:
        """
        Find one photo for a search phrase.

        Args:
            query: Short descriptive phrase (e.g., "tofu scramble with spinach")

        Returns:
            Photo URL, or None if the search returned no photos
        """
        pass
