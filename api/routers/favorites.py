"""
Favorites router.

- GET /api/favorites: the caller's favorites, newest first
- POST /api/favorites: favorite a recipe (creating it by name if needed)
- DELETE /api/favorites/{favorite_id}: remove one of the caller's favorites

POST is idempotent by recipe name: repeating it returns 200 with the same
favoriteId and recipeId instead of 201.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_current_user
from api.schemas import FavoriteCreatedResponse, FavoriteListResponse, MessageResponse, error_responses
from kitchen.errors import NotFoundError, ValidationError
from kitchen.favorites import add_favorite, list_favorites, remove_favorite
from kitchen.models import RecipeInput, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/favorites", tags=["favorites"], responses=error_responses(400, 401, 404, 500))


@router.get("", response_model=FavoriteListResponse, summary="List favorites")
def get_favorites(user: User = Depends(get_current_user)) -> FavoriteListResponse:
    try:
        favorites = list_favorites(user.id)
    except Exception as e:
        logger.error("Failed to fetch favorites for user %s: %s", user.id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch favorites",
        ) from e

    return FavoriteListResponse(data=favorites)


@router.post(
    "",
    response_model=FavoriteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe to favorites",
    description="Creates the recipe when no recipe with the same name exists yet. "
                "Returns 201 for a new favorite and 200 when the recipe was already favorited.",
    responses={200: {"model": FavoriteCreatedResponse, "description": "Already favorited"}},
)
def post_favorite(
    body: RecipeInput,
    response: Response,
    user: User = Depends(get_current_user),
) -> FavoriteCreatedResponse:
    """
    Add a favorite.

    Example:
        ```bash
        POST /api/favorites
        Header: Authorization: Bearer <token>
        Body: {
            "name": "Spinach Tofu Scramble",
            "cooking_time": 20,
            "image_url": null,
            "ingredients": ["200g firm tofu", "2 handfuls spinach"],
            "instructions": ["Crumble the tofu.", "Cook with spinach for 5 minutes."]
        }
        ```
    """
    try:
        ref, created = add_favorite(user.id, body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error("Failed to add favorite for user %s: %s", user.id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add favorite",
        ) from e

    if not created:
        response.status_code = status.HTTP_200_OK
    return FavoriteCreatedResponse(data=ref)


@router.delete("/{favorite_id}", response_model=MessageResponse, summary="Remove a favorite")
def delete_favorite(favorite_id: str, user: User = Depends(get_current_user)) -> MessageResponse:
    try:
        remove_favorite(user.id, favorite_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return MessageResponse(message="Removed from favorites")
