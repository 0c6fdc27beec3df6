"""Authentication endpoints: register, login and the signed-in user's credentials."""

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskflow.api.auth_models import (
    AuthResponse,
    AvailabilityResponse,
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from taskflow.api.task_models import MessageResponse
from taskflow.auth.dependencies import get_current_user
from taskflow.auth.jwt import create_access_token
from taskflow.auth.passwords import hash_password, verify_password
from taskflow.database.database import get_db
from taskflow.database.user_repository import UserRepository
from taskflow.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def apply_profile_update(repo: UserRepository, user: User, request: ProfileUpdateRequest) -> User:
    """Validate uniqueness and persist a profile update (shared with /api/users/profile)."""
    if not request.username and not request.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one field (username or email) is required",
        )
    if repo.find_conflict(email=request.email, username=request.username, exclude_user_id=user.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or username already taken")

    try:
        updated = repo.update(user.id, username=request.username, email=request.email)
    except IntegrityError:
        # Lost a race with a concurrent update claiming the same email/username
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or username already taken")
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return updated


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return an access token for it."""
    repo = UserRepository(db)
    if repo.find_conflict(email=request.email, username=request.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    now = datetime.utcnow()
    try:
        user = repo.create(
            User(
                id=str(uuid.uuid4()),
                username=request.username,
                email=request.email,
                created_at=now,
                updated_at=now,
            ),
            hash_password(request.password),
        )
    except IntegrityError:
        # Unique constraint caught a concurrent registration
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    logger.info(f"Registered user {user.id}")
    return AuthResponse(message="Registration successful", token=create_access_token(user.id), user=user)


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email/password for an access token."""
    repo = UserRepository(db)
    user = repo.get_by_email(request.email)
    stored_hash = repo.get_password_hash(user.id) if user else None
    if not user or not stored_hash or not verify_password(request.password, stored_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return AuthResponse(message="Login successful", token=create_access_token(user.id), user=user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """The signed-in user."""
    return UserResponse(user=current_user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change username and/or email."""
    user = apply_profile_update(UserRepository(db), current_user, request)
    return UserResponse(user=user, message="Profile updated successfully")


@router.put("/password", response_model=MessageResponse)
def change_password(
    request: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change password after checking the current one."""
    repo = UserRepository(db)
    stored_hash = repo.get_password_hash(current_user.id)
    if not stored_hash or not verify_password(request.current_password, stored_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")
    repo.update(current_user.id, password_hash=hash_password(request.new_password))
    return MessageResponse(message="Password changed successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its token."""
    return MessageResponse(message="Logout successful")


@router.get("/check-email", response_model=AvailabilityResponse)
def check_email(email: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return AvailabilityResponse(available=UserRepository(db).get_by_email(email.strip()) is None)


@router.get("/check-username", response_model=AvailabilityResponse)
def check_username(username: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return AvailabilityResponse(available=UserRepository(db).get_by_username(username.strip()) is None)
