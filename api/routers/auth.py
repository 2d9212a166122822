"""
Auth router: sign-up, login, logout and the caller's profile.

- POST /api/auth/signup
- POST /api/auth/login
- POST /api/auth/logout (authenticated)
- GET /api/profile (authenticated)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_bearer_token, get_current_user
from api.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    SignupRequest,
    SignupResponse,
    error_responses,
)
from kitchen.auth import sign_in, sign_out, sign_up
from kitchen.errors import AuthError, ValidationError
from kitchen.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"], responses=error_responses(400, 401))


@router.post(
    "/auth/signup",
    response_model=SignupResponse,
    summary="Register a new user",
)
def signup(body: SignupRequest) -> SignupResponse:
    """
    Create an account.

    Raises:
        HTTPException 400: Missing email/password, password shorter than 6
            characters, or email already registered
    """
    try:
        user = sign_up(body.email, body.password, body.metadata)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return SignupResponse(data={"user": user})


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    summary="Log in with email and password",
    description="Returns a bearer session. Send `Authorization: Bearer <access_token>` on authenticated routes.",
)
def login(body: LoginRequest) -> LoginResponse:
    try:
        result = sign_in(body.email, body.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    logger.info("User logged in: id=%s", result["user"].id)
    return LoginResponse(data=result)


@router.post("/auth/logout", response_model=MessageResponse, summary="Invalidate the current session")
def logout(
    user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_bearer_token),
) -> MessageResponse:
    sign_out(token)
    logger.info("User logged out: id=%s", user.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=ProfileResponse, summary="Get the caller's profile")
def profile(user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse(message="Profile retrieved successfully", user=user)
