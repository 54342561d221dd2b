"""Profile Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wormhole.models.worm import WormStatus


class ProfileResponse(BaseModel):
    """Schema for profile API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Profile identifier")
    auth_id: str = Field(description="Associated auth account ID")
    username: str | None = Field(default=None, description="Display username")
    created_at: datetime = Field(description="Profile creation timestamp")
    settings: dict[str, Any] | None = Field(default=None, description="Free-form settings")
    bio: str | None = Field(default=None, description="Profile bio")
    badge_id: int | None = Field(default=None, description="Selected badge")


class ProfileUpdate(BaseModel):
    """Schema for updating the current profile.

    All fields are optional for partial updates.
    """

    model_config = ConfigDict(from_attributes=True)

    username: str | None = Field(default=None, min_length=1, max_length=64, description="New username")
    bio: str | None = Field(default=None, max_length=500, description="New bio")
    settings: dict[str, Any] | None = Field(default=None, description="Replacement settings")


class PublicProfileCardResponse(BaseModel):
    """Read-only public projection of a profile."""

    model_config = ConfigDict(from_attributes=True)

    profile_id: int = Field(description="Profile identifier")
    username: str | None = Field(default=None, description="Display username")
    badge_slug: str | None = Field(default=None, description="Badge slug")
    badge_url: str | None = Field(default=None, description="Badge image URL")


class WormsStatusUpdate(BaseModel):
    """Bulk visibility change for all worms of the current profile."""

    status: WormStatus = Field(description="New visibility (private or friends)")
