"""User data model for TaskFlow."""

from datetime import datetime
from pydantic import BaseModel, Field


class User(BaseModel):
    """Public user model (never carries the password hash)."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="User email address")
    created_at: datetime = Field(..., alias="createdAt", description="User creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="User last update timestamp")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
