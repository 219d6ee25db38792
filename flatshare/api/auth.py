"""Authentication & profile API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from flatshare.api.deps import get_current_user
from flatshare.database import get_session
from flatshare.errors import ErrorCode, NotFound
from flatshare.models.user import User
from flatshare.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
    UserProfileResponse,
)
from flatshare.services import auth_service, user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, session: Session = Depends(get_session)):
    """Exchange e-mail and password for an access token."""
    return auth_service.login(request.email, request.password, session)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, session: Session = Depends(get_session)):
    """Create an account and return a token, same shape as login."""
    return auth_service.register(request.email, request.password, request.name, session)


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    profile = user_service.find_by_id(user.id, session)
    if not profile:
        raise NotFound(ErrorCode.PROFILE_USER_NOT_FOUND)
    return profile


@router.put("/profile", response_model=UserProfileResponse)
def update_profile(
    request: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Update only the profile fields present in the body."""
    return user_service.update_profile(user.id, request.model_dump(exclude_unset=True), session)
