"""Request/response models for authentication and profile endpoints."""

import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from taskflow.models.constants import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from taskflow.models.user import User


_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Please provide a valid email address")
    return value


def _check_username(value: Optional[str]) -> Optional[str]:
    if value is not None and not (value.isascii() and value.isalnum()):
        raise ValueError("Username must only contain alphanumeric characters")
    return value


class RegisterRequest(BaseModel):
    """Request model for account registration."""
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str = Field(..., alias="confirmPassword")

    check_username = field_validator("username")(_check_username)
    check_email = field_validator("email")(_check_email)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class LoginRequest(BaseModel):
    """Request model for login."""
    email: str
    password: str

    check_email = field_validator("email")(_check_email)


class ProfileUpdateRequest(BaseModel):
    """Request model for profile updates (at least one field required)."""
    username: Optional[str] = Field(None, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: Optional[str] = Field(None, max_length=255)

    check_username = field_validator("username")(_check_username)
    check_email = field_validator("email")(_check_email)


class PasswordChangeRequest(BaseModel):
    """Request model for password change."""
    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword", min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str = Field(..., alias="confirmPassword")

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class DeleteAccountRequest(BaseModel):
    """Request model for account deletion (password confirmation)."""
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Response model for authentication."""
    message: str
    token: str
    token_type: str = Field("bearer", alias="tokenType")
    user: User

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class UserResponse(BaseModel):
    """Response wrapping a single user."""
    user: User
    message: Optional[str] = None


class AvailabilityResponse(BaseModel):
    """Response for email/username availability checks."""
    available: bool
