"""
Recipes router: direct CRUD on recipes.

Update and delete only touch recipes owned by the caller; a recipe owned by someone
else is reported as not found.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_current_user
from api.schemas import MessageResponse, RecipeListResponse, RecipeResponse, error_responses
from kitchen.errors import NotFoundError, ValidationError
from kitchen.models import RecipeInput, User
from kitchen.recipes import create_recipe, delete_recipe, get_recipe, list_recipes, update_recipe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"], responses=error_responses(400, 401, 404))


@router.get("", response_model=RecipeListResponse, summary="List all recipes")
def get_recipes(user: User = Depends(get_current_user)) -> RecipeListResponse:
    return RecipeListResponse(data=list_recipes())


@router.get("/{recipe_id}", response_model=RecipeResponse, summary="Get a recipe")
def get_one_recipe(recipe_id: str, user: User = Depends(get_current_user)) -> RecipeResponse:
    try:
        return RecipeResponse(data=get_recipe(recipe_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
)
def post_recipe(body: RecipeInput, user: User = Depends(get_current_user)) -> RecipeResponse:
    try:
        return RecipeResponse(data=create_recipe(user.id, body))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{recipe_id}", response_model=RecipeResponse, summary="Replace a recipe you own")
def put_recipe(recipe_id: str, body: RecipeInput, user: User = Depends(get_current_user)) -> RecipeResponse:
    try:
        return RecipeResponse(data=update_recipe(user.id, recipe_id, body))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{recipe_id}", response_model=MessageResponse, summary="Delete a recipe you own")
def remove_recipe(recipe_id: str, user: User = Depends(get_current_user)) -> MessageResponse:
    try:
        delete_recipe(user.id, recipe_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return MessageResponse(message="Recipe deleted successfully")
