"""
FastAPI application for the Recipe Finder API.

This module assembles the REST API used by the recipe client:
- /api/auth/*, /api/profile: sign-up, login, logout, profile
- /api/favorites: the caller's favorites (idempotent by recipe name)
- /api/recipes: direct recipe CRUD (owner-filtered writes)
- /api/ai/generate, /api/ai/regenerate: five AI recipe suggestions with photos
- /health and /: monitoring and API information

Every error is returned as {"error": "<message>"}: 400 for validation (including
malformed request bodies), 401 for missing or invalid tokens, 404 for missing or
foreign rows, 500 for upstream and unexpected failures.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import CorsConfig, GeminiConfig, get_required_env_vars, validate_required_config
from api.routers import ai, auth, favorites, recipes
from kitchen.db import db_is_reachable, init_db

logger = logging.getLogger(__name__)

API_NAME = "Recipe Finder API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Backend API for AI recipe suggestions, favorites and recipe management"

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title=API_NAME,
    description=API_DESCRIPTION,
    version=API_VERSION,
    tags_metadata=[
        {
            "name": "auth",
            "description": "Sign-up, login and logout. Authenticated routes need `Authorization: Bearer <token>`.",
        },
        {
            "name": "favorites",
            "description": "The caller's favorite recipes. Favoriting creates the recipe by name if needed.",
        },
        {
            "name": "recipes",
            "description": "Direct recipe CRUD. Updates and deletes are limited to the recipe's owner.",
        },
        {
            "name": "ai",
            "description": "Five AI-generated recipe suggestions per request, with stock photos.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CorsConfig.get_allow_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(favorites.router)
app.include_router(recipes.router)
app.include_router(ai.router)

try:
    init_db()
except Exception as e:
    # Log error but don't crash the app; /health reports the database as unreachable
    logger.warning("Database initialization failed: %s", e)

try:
    validate_required_config()
except RuntimeError as e:
    # AI routes answer 500 until the key is configured
    logger.warning("%s", e)


# ============================================================================
# Error envelope
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Something went wrong!"},
    )


# ============================================================================
# Health / info
# ============================================================================

@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime information, database
        reachability and which external providers are configured.
        Always returns 200 OK if the endpoint is reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)
    configured = get_required_env_vars()

    return {
        "status": "ok",
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "uptime_seconds": uptime_seconds,
        "db_reachable": db_is_reachable(),
        "ai_configured": configured["gemini_api_key"],
        "ai_model": GeminiConfig.get_model(),
        "images_configured": configured["pexels_api_key"],
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "message": "Recipe Finder API is running",
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "docs": "/docs",
    }
