"""
Pydantic schemas for FastAPI request and response models.

This module defines the request bodies and response envelopes of the Recipe Finder
API. Domain models (Recipe, FavoriteRecipe, SuggestedRecipe, ...) live in
kitchen.models; the schemas here wrap them in the envelopes the client expects:
- {"data": ...} for auth, favorites and recipes
- {"recipes": [...]} for AI suggestions
- {"message": ...} for deletes and logout
- {"error": ...} for every failure (rendered by the handlers in api.main)

# NOTE: Request fields the service layer validates itself (email, password, prompt)
    are Optional here so a missing value produces the service's error message
    instead of a generic body-validation error.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict

from kitchen.models import AuthSession, FavoriteRecipe, FavoriteRef, Recipe, SuggestedRecipe, User


# ============================================================================
# Auth
# ============================================================================

class SignupRequest(BaseModel):
    """Request body for POST /api/auth/signup."""
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Password (at least 6 characters)")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Profile data, e.g. {\"name\": \"Ada\"}")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ada@example.com",
                "password": "secret123",
                "metadata": {"name": "Ada"},
            }
        }
    )


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""
    email: Optional[str] = None
    password: Optional[str] = None


class SignupData(BaseModel):
    user: User


class SignupResponse(BaseModel):
    data: SignupData


class LoginData(BaseModel):
    session: AuthSession
    user: User


class LoginResponse(BaseModel):
    data: LoginData


class ProfileResponse(BaseModel):
    message: str
    user: User


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable confirmation")


# ============================================================================
# Favorites / Recipes
# ============================================================================

class FavoriteListResponse(BaseModel):
    """Response for GET /api/favorites (newest first)."""
    data: List[FavoriteRecipe]


class FavoriteCreatedResponse(BaseModel):
    """Response for POST /api/favorites."""
    data: FavoriteRef

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "data": {
                    "favoriteId": "5b0c4a63-2f1d-4f4e-9d55-0c7a2b8e1f10",
                    "recipeId": "0d5f7c1e-8a4b-4c53-9d3e-2b1f6f0e9a11",
                }
            }
        }
    )


class RecipeListResponse(BaseModel):
    data: List[Recipe]


class RecipeResponse(BaseModel):
    data: Recipe


# ============================================================================
# AI suggestions
# ============================================================================

class GenerateRequest(BaseModel):
    """Request body for POST /api/ai/generate."""
    prompt: Optional[str] = Field(None, description="Free-text request, e.g. \"quick vegan dinner\"")


class RegenerateRequest(BaseModel):
    """Request body for POST /api/ai/regenerate."""
    prompt: Optional[str] = Field(None, description="The free-text request being regenerated")
    excluded_recipes: List[str] = Field(
        default_factory=list,
        alias="excludedRecipes",
        description="Names of every recipe rejected so far in this search session",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "prompt": "quick vegan dinner",
                "excludedRecipes": ["Spinach Tofu Scramble", "Chickpea Curry"],
            }
        },
    )


class SuggestionResponse(BaseModel):
    """Exactly five suggested recipes."""
    recipes: List[SuggestedRecipe]


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response."""
    error: str


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """OpenAPI `responses=` entries documenting the error envelope for each status code."""
    return {code: {"model": ErrorResponse} for code in status_codes}
