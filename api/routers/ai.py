"""
AI router: recipe suggestions.

- POST /api/ai/generate: five recipes for a free-text request
- POST /api/ai/regenerate: five new recipes, excluding every name rejected so far

Both responses have the shape {"recipes": [{title, time, ingredients, instructions,
imageQuery, imageUrl}]}; imageUrl is null when no photo could be found.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_current_user
from api.schemas import GenerateRequest, RegenerateRequest, SuggestionResponse, error_responses
from kitchen.errors import SuggestionError, ValidationError
from kitchen.models import User
from kitchen.suggestions import suggest_recipes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"], responses=error_responses(400, 401, 500))

GENERATION_FAILED = "Failed to generate response from AI"


def _suggest(prompt, excluded, user: User) -> SuggestionResponse:
    try:
        recipes = suggest_recipes(prompt, excluded)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except SuggestionError as e:
        logger.error("Suggestion failed for user %s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERATION_FAILED,
        ) from e

    return SuggestionResponse(recipes=recipes)


@router.post(
    "/generate",
    response_model=SuggestionResponse,
    summary="Generate 5 recipe suggestions",
)
def generate(body: GenerateRequest, user: User = Depends(get_current_user)) -> SuggestionResponse:
    """
    Example:
        ```bash
        POST /api/ai/generate
        Header: Authorization: Bearer <token>
        Body: {"prompt": "quick vegan dinner"}
        ```
    """
    return _suggest(body.prompt, None, user)


@router.post(
    "/regenerate",
    response_model=SuggestionResponse,
    summary="Regenerate suggestions excluding rejected recipes",
    description="Exclusion is best effort: the model is told not to repeat the excluded "
                "names but this is not enforced.",
)
def regenerate(body: RegenerateRequest, user: User = Depends(get_current_user)) -> SuggestionResponse:
    return _suggest(body.prompt, body.excluded_recipes, user)
