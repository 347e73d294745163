"""API router for registration, login and the current profile."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ....core.dependencies import get_user_service
from ....services.user_service import Identity, UserService
from ...api.dependencies import require_identity
from ...api.schemas.auth import LoginRequest, RegisterRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a new user and log them in."""
    user, token = user_service.register(
        email=payload.email or "",
        password=payload.password or "",
        name=payload.name or "",
    )
    return {
        "message": "User registered successfully",
        "token": token,
        "user": user.public_view(),
    }


@router.post("/login")
def login(
    payload: LoginRequest,
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Login and get access token."""
    user, token = user_service.authenticate(payload.email or "", payload.password or "")
    return {
        "message": "Logged in successfully",
        "token": token,
        "user": user.public_view(),
    }


@router.get("/me")
def get_profile(
    identity: Identity = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Get current user profile."""
    return user_service.get_profile(identity.user_id).public_view()
