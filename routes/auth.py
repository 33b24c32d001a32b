"""
Auth API routes: register, login, profile.

Route prefix: /api/auth

Handlers are plain functions so bcrypt work runs in the threadpool.
"""

from fastapi import APIRouter, Depends, status

from dependencies import get_auth_service
from errors import NotFoundError
from middleware.auth import get_current_user_id
from schemas import LoginResponse, UserLogin, UserProfile, UserRegister
from services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def register(
    req: UserRegister,
    service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """Register a new user."""
    return service.register(req.username, req.email, req.password)


@router.post("/login", response_model=LoginResponse)
def login(
    req: UserLogin,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with username + password."""
    return service.login(req.username, req.password)


@router.get("/profile", response_model=UserProfile)
def get_profile(
    user_id: int = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """Profile of the authenticated user."""
    profile = service.get_profile(user_id)

    if profile is None:
        raise NotFoundError("User not found.")

    return profile
