"""
Auth endpoints — register, login, logout, the caller's profile and the demo account.
Tokens are returned in the body and also set as an httpOnly cookie.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.config import settings
from app.dependencies import get_db, get_user_service
from app.domain.errors import InvalidCredentialsError, UserExistsError
from app.domain.models import (
    AuthResponse,
    DemoCredentials,
    DemoUserResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
)
from app.ports.database_port import DatabasePort
from app.seed import DEMO_PASSWORD, DEMO_USERNAME, ensure_demo_user
from app.services.auth_service import create_access_token, get_current_user
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _issue_session(response: Response, user: dict[str, Any]) -> str:
    token = create_access_token(user)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=not settings.debug,
        samesite="strict",
        max_age=settings.jwt_expire_hours * 60 * 60,
    )
    return token


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    response: Response,
    svc: UserService = Depends(get_user_service),
):
    """Create an account and start a session for it."""
    try:
        user = await svc.register(req)
    except UserExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this username or email already exists.",
        )

    token = _issue_session(response, user)
    return AuthResponse(
        message="Registration successful",
        user=await svc.to_profile(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    response: Response,
    svc: UserService = Depends(get_user_service),
):
    """Login with username or email plus password."""
    try:
        user = await svc.authenticate(req.username, req.password)
    except InvalidCredentialsError:
        logger.info("Failed login for %s", req.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = _issue_session(response, user)
    return AuthResponse(
        message="Login successful",
        user=await svc.to_profile(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name)
    return MessageResponse(message="Logout successful")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    """Return the authenticated user's profile."""
    return ProfileResponse(user=await svc.to_profile(current_user))


@router.post("/demo-user", response_model=DemoUserResponse)
async def demo_user(
    response: Response,
    db: DatabasePort = Depends(get_db),
):
    """Make sure the shared demo account exists and hand out its credentials."""
    created = await ensure_demo_user(db)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return DemoUserResponse(
        message="Demo user created successfully" if created else "Demo user already exists",
        user=DemoCredentials(username=DEMO_USERNAME, password=DEMO_PASSWORD),
    )
