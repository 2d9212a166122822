"""
Gemini recipe generator using the google-genai SDK.

The model runs in JSON mode with a response schema (GeneratedRecipeBatch), so the
response text is a JSON object of the form {"recipes": [...]} with no surrounding
prose.

Requires GEMINI_API_KEY in .env file. Model defaults to gemini-2.0-flash but can be
overridden via GEMINI_MODEL environment variable.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types

from kitchen.models import GeneratedRecipeBatch

from .base import BaseRecipeGenerator

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"


def system_instruction(count: int) -> str:
    return (
        "You are a helpful culinary assistant that must generate exactly "
        f"{count} distinct cooking recipes based on the user's request. "
        "Do not include any introductory text, closing remarks, or explanations. "
        "Respond ONLY with the JSON object that follows the provided schema. "
        "For each recipe, image_query is a short phrase describing the finished "
        "dish, suitable for a stock photo search."
    )


class GeminiRecipeGenerator(BaseRecipeGenerator):
    """
    Recipe generator backed by a Gemini model.

    The client is created once per generator; generate() makes a single
    generate_content call and parses the JSON body.
    """
    provider = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key (optional, reads from GEMINI_API_KEY env var if not provided)
            model: Model name (optional, reads from GEMINI_MODEL env var or defaults to gemini-2.0-flash)

        Raises:
            RuntimeError: If GEMINI_API_KEY is not set
        """
        key = api_key or os.getenv("GEMINI_API_KEY")
        if not key:
            raise RuntimeError(
                "GEMINI_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "GEMINI_API_KEY=your_gemini_api_key_here"
            )

        self.model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self.client = genai.Client(api_key=key)

    def generate(self, prompt: str, count: int) -> List[Dict[str, Any]]:
        logger.debug("Calling Gemini model=%s prompt=%r", self.model, prompt[:200])

        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction(count),
                response_mime_type="application/json",
                response_schema=GeneratedRecipeBatch,
            ),
        )

        if not response.text:
            raise ValueError("Gemini returned an empty response")

        data = json.loads(response.text)
        if not isinstance(data, dict) or not isinstance(data.get("recipes"), list):
            raise ValueError("Gemini response is missing the 'recipes' list")

        logger.info("Gemini returned %d recipes", len(data["recipes"]))
        return data["recipes"]
