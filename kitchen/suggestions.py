"""
AI recipe suggestions with stock photos.

This module provides the suggestion workflow behind /api/ai/generate and
/api/ai/regenerate:
- Builds the prompt, appending a negative constraint when recipes were rejected
- Asks the recipe generator for exactly RECIPE_COUNT recipes
- Validates the batch (count and non-empty fields)
- Looks up one photo per recipe concurrently and joins before returning

Image lookups never fail a request: a missing credential, an HTTP error or a timeout
yields imageUrl None for that recipe only.

Flow: client -> POST /api/ai/generate -> suggest_recipes() -> generator.generate()
    -> lookup_images() -> image_provider.find_image() x RECIPE_COUNT -> SuggestedRecipe
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from .errors import SuggestionError, ValidationError
from .models import GeneratedRecipe, SuggestedRecipe
from .providers.gemini_provider import GeminiRecipeGenerator
from .providers.pexels_provider import PexelsImageProvider

logger = logging.getLogger(__name__)

RECIPE_COUNT = 5
MAX_IMAGE_WORKERS = RECIPE_COUNT


# Using a function to get the classes dynamically so that patches in tests work correctly
def _get_provider_classes():
    """Get the provider classes, accessing them dynamically for test compatibility."""
    return {
        "generator": GeminiRecipeGenerator,
        "images": PexelsImageProvider,
    }


def build_prompt(prompt: str, excluded: Optional[Sequence[str]] = None) -> str:
    """
    Build the generator prompt.

    Args:
        prompt: The user's free-text request (e.g., "quick vegan dinner")
        excluded: Recipe names the user rejected in this search session

    Returns:
        The prompt unchanged when nothing is excluded, otherwise the prompt followed
        by an explicit instruction not to return the excluded recipes

    Examples:
        >>> build_prompt("pasta")
        'pasta'
        >>> build_prompt("pasta", ["Carbonara"])
        'pasta\\n\\nDo NOT suggest any of these recipes, or close variations of them: Carbonara.'
    """
    names = [name.strip() for name in (excluded or []) if name and name.strip()]
    if not names:
        return prompt
    return (
        f"{prompt}\n\n"
        f"Do NOT suggest any of these recipes, or close variations of them: {', '.join(names)}."
    )


def _validate_batch(raw_recipes: List[Any]) -> List[GeneratedRecipe]:
    if len(raw_recipes) != RECIPE_COUNT:
        raise SuggestionError(
            f"Expected {RECIPE_COUNT} recipes from the generator, got {len(raw_recipes)}"
        )

    recipes: List[GeneratedRecipe] = []
    for index, raw in enumerate(raw_recipes):
        try:
            recipe = GeneratedRecipe.model_validate(raw)
        except PydanticValidationError as e:
            raise SuggestionError(f"Recipe {index} is malformed: {e}")

        ingredients = [i for i in recipe.ingredients if i and i.strip()]
        instructions = [s for s in recipe.instructions if s and s.strip()]
        if not recipe.title.strip() or not recipe.time.strip() or not ingredients or not instructions:
            raise SuggestionError(f"Recipe {index} has empty fields")

        recipes.append(recipe.model_copy(update={
            "ingredients": ingredients,
            "instructions": instructions,
        }))
    return recipes


def _find_image_safe(provider, query: str) -> Optional[str]:
    if not query or not query.strip():
        return None
    try:
        return provider.find_image(query)
    except Exception as e:
        logger.warning("Image lookup failed for query=%r: %s", query, e)
        return None


def lookup_images(queries: Sequence[str]) -> List[Optional[str]]:
    """
    Look up one photo per query concurrently.

    All lookups are started together and joined before returning, so the result is
    available as a whole. Failures are logged and never raised.

    Args:
        queries: Search phrases, one per recipe

    Returns:
        List of photo URLs (or None), in the same order as queries
    """
    if not queries:
        return []

    try:
        provider = _get_provider_classes()["images"]()
    except RuntimeError as e:
        logger.warning("Image provider disabled: %s", e)
        return [None] * len(queries)
    except Exception as e:
        logger.error("Unexpected error initializing image provider: %s", e, exc_info=True)
        return [None] * len(queries)

    workers = min(MAX_IMAGE_WORKERS, len(queries))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        urls = list(executor.map(lambda q: _find_image_safe(provider, q), queries))

    logger.info("Image lookup: %d/%d found", sum(1 for u in urls if u), len(urls))
    return urls


def suggest_recipes(prompt: Optional[str], excluded: Optional[Sequence[str]] = None) -> List[SuggestedRecipe]:
    """
    Generate RECIPE_COUNT recipe suggestions with photos.

    Args:
        prompt: The user's free-text request
        excluded: Names of recipes rejected earlier in the same search session.
            Exclusion is best effort: the model may still return one of them.

    Returns:
        Exactly RECIPE_COUNT SuggestedRecipe objects

    Raises:
        ValidationError: If the prompt is missing or blank
        SuggestionError: If the generator is not configured, fails, or returns an
            unusable batch
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required")

    excluded_list = list(excluded or [])
    logger.info("Suggestion request: prompt=%r excluded=%d", prompt, len(excluded_list))

    try:
        generator = _get_provider_classes()["generator"]()
    except RuntimeError as e:
        logger.error("Recipe generator not configured: %s", e)
        raise SuggestionError(str(e))

    try:
        raw_recipes = generator.generate(build_prompt(prompt, excluded_list), RECIPE_COUNT)
    except Exception as e:
        logger.error("Recipe generator call failed: %s", e, exc_info=True)
        raise SuggestionError(f"Generator call failed: {e}")

    recipes = _validate_batch(raw_recipes)
    image_urls = lookup_images([r.image_query or r.title for r in recipes])

    return [
        SuggestedRecipe(
            title=recipe.title,
            time=recipe.time,
            ingredients=recipe.ingredients,
            instructions=recipe.instructions,
            image_query=recipe.image_query,
            image_url=image_url,
        )
        for recipe, image_url in zip(recipes, image_urls)
    ]
