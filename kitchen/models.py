"""
Recipe, favorite and suggestion models for the kitchen services.

This module defines the canonical schemas used throughout the backend. Persistence
functions return these models (never ORM rows) so the API layer can serialize them
directly.

# NOTE: Field names are snake_case internally. Models that cross the wire with the
    client's camelCase keys (favoriteId, recipeId, imageQuery, imageUrl) declare an
    alias and are serialized by alias by the API.

Current field expectations:
- Client favorites list expects: favoriteId, id, name, cooking_time, image_url, ingredients, instructions
- Client suggestion list expects: title, time, ingredients, instructions, imageUrl
- Generative model returns: title, time, ingredients, instructions, image_query
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class RecipeInput(BaseModel):
    """Full recipe record as submitted by a client (create, update or favorite)."""
    name: str = Field(..., description="Recipe name (the de-duplication key for favorites)")
    cooking_time: Optional[int] = Field(None, ge=0, description="Cooking time in minutes")
    image_url: Optional[str] = Field(None, description="URL to recipe image")
    ingredients: List[str] = Field(default_factory=list, description="Ordered ingredient lines")
    instructions: List[str] = Field(default_factory=list, description="Ordered instruction steps")


class Recipe(BaseModel):
    """A persisted recipe with its ordered ingredients and instructions."""
    id: str = Field(..., description="Server-assigned recipe identifier")
    name: str = Field(..., description="Recipe name")
    cooking_time: Optional[int] = Field(None, ge=0, description="Cooking time in minutes")
    image_url: Optional[str] = Field(None, description="URL to recipe image")
    ingredients: List[str] = Field(default_factory=list, description="Ordered ingredient lines")
    instructions: List[str] = Field(default_factory=list, description="Ordered instruction steps")
    user_id: Optional[str] = Field(None, description="Owner; None for recipes created by favoriting")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (UTC)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0d5f7c1e-8a4b-4c53-9d3e-2b1f6f0e9a11",
                "name": "Spinach Tofu Scramble",
                "cooking_time": 20,
                "image_url": "https://images.pexels.com/photos/1/pexels-photo-1.jpeg",
                "ingredients": ["200g firm tofu", "2 handfuls spinach"],
                "instructions": ["Crumble the tofu.", "Cook with spinach for 5 minutes."],
                "user_id": None,
            }
        }
    )


class FavoriteRecipe(BaseModel):
    """
    A favorite flattened with its recipe fields.

    favoriteId identifies the favorite itself; id is the recipe's identifier.
    """
    favorite_id: str = Field(..., alias="favoriteId", description="Favorite identifier")
    id: str = Field(..., description="Recipe identifier")
    name: str = Field(..., description="Recipe name")
    cooking_time: Optional[int] = Field(None, description="Cooking time in minutes")
    image_url: Optional[str] = Field(None, description="URL to recipe image")
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, description="When the recipe was favorited")

    model_config = ConfigDict(populate_by_name=True)


class FavoriteRef(BaseModel):
    """Identifiers returned after favoriting a recipe."""
    favorite_id: str = Field(..., alias="favoriteId")
    recipe_id: str = Field(..., alias="recipeId")

    model_config = ConfigDict(populate_by_name=True)


class GeneratedRecipe(BaseModel):
    """
    One recipe exactly as the generative model emits it.

    This model doubles as the response schema handed to the model, so it carries
    descriptions but no validation constraints.
    """
    title: str = Field(..., description="The name of the recipe.")
    time: str = Field(..., description='Total cooking time (e.g., "45 mins" or "1 hour").')
    ingredients: List[str] = Field(..., description="A list of ingredients with quantities.")
    instructions: List[str] = Field(..., description="A list of step-by-step cooking instructions.")
    image_query: str = Field(
        ...,
        description="A short descriptive phrase to search a stock photo of the finished dish.",
    )


class GeneratedRecipeBatch(BaseModel):
    """Top-level object the generative model must return."""
    recipes: List[GeneratedRecipe] = Field(..., description="A list of cooking recipes.")


class SuggestedRecipe(BaseModel):
    """An ephemeral AI suggestion with its (optional) photo."""
    title: str
    time: str
    ingredients: List[str]
    instructions: List[str]
    image_query: Optional[str] = Field(None, alias="imageQuery")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Spinach Tofu Scramble",
                "time": "20 mins",
                "ingredients": ["200g firm tofu", "2 handfuls spinach"],
                "instructions": ["Crumble the tofu.", "Cook with spinach for 5 minutes."],
                "imageQuery": "tofu scramble with spinach on a plate",
                "imageUrl": "https://images.pexels.com/photos/1/pexels-photo-1.jpeg",
            }
        },
    )


class User(BaseModel):
    """Public view of an auth identity."""
    id: str
    email: str
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


class AuthSession(BaseModel):
    """Bearer session issued at login."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Seconds until the token expires")
    expires_at: int = Field(..., description="Expiry as Unix timestamp")
