"""Worm Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wormhole.models.worm import WormStatus


class WormCreate(BaseModel):
    """Schema for creating a worm."""

    model_config = ConfigDict(from_attributes=True)

    content: str = Field(..., description="Worm text")
    status: WormStatus = Field(default=WormStatus.PRIVATE, description="Visibility")
    tags: list[str] | None = Field(default=None, description="Free-text tags")
    author_id: int = Field(..., description="Owning profile ID")
    position: dict[str, Any] | None = Field(default=None, description="Position payload")
    host_url: str = Field(..., description="URL of the page hosting the worm")


class WormUpdate(BaseModel):
    """Schema for patching a worm.

    Only fields that are explicitly set are sent.
    """

    model_config = ConfigDict(from_attributes=True)

    content: str | None = Field(default=None, description="New text")
    status: WormStatus | None = Field(default=None, description="New visibility")
    tags: list[str] | None = Field(default=None, description="New tags")
    position: dict[str, Any] | None = Field(default=None, description="New position payload")
    host_url: str | None = Field(default=None, description="New host URL")


class WormStatusUpdate(BaseModel):
    """Schema for changing a worm's visibility."""

    status: WormStatus = Field(description="New visibility")


class WormResponse(BaseModel):
    """Schema for worm API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Worm identifier")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    content: str = Field(description="Worm text")
    status: WormStatus = Field(description="Visibility")
    tags: list[str] | None = Field(default=None, description="Free-text tags")
    author_id: int = Field(description="Owning profile ID")
    position: dict[str, Any] | None = Field(default=None, description="Position payload")
    host_url: str = Field(description="URL of the page hosting the worm")
