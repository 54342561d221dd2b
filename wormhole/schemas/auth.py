"""Authentication schemas for sign-up, sign-in and the current user."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wormhole.schemas.profile import ProfileResponse


class SignUpRequest(BaseModel):
    """Request schema for user sign-up."""

    model_config = ConfigDict(from_attributes=True)

    username: str = Field(..., description="Display username stored in user metadata", min_length=1, max_length=64)
    email: str = Field(..., description="User's email address", min_length=3, max_length=255)
    password: str = Field(..., description="User's password", min_length=6, max_length=100)


class SignInRequest(BaseModel):
    """Request schema for password sign-in."""

    model_config = ConfigDict(from_attributes=True)

    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")


class UserResponse(BaseModel):
    """Auth account as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Auth account ID")
    email: str | None = Field(default=None, description="Account email address")
    user_metadata: dict[str, Any] = Field(default_factory=dict, description="Metadata set at sign-up")


class SessionTokens(BaseModel):
    """Tokens of a newly created session."""

    access_token: str = Field(description="JWT access token")
    refresh_token: str | None = Field(default=None, description="Refresh token")
    expires_in: int | None = Field(default=None, description="Token lifetime in seconds")


class SignUpResponse(BaseModel):
    """Response schema for user sign-up.

    profile is null when the trigger-created row could not be read yet;
    profile_error then says why.
    """

    user: UserResponse = Field(description="Created auth account")
    profile: ProfileResponse | None = Field(default=None, description="Profile row, if already available")
    profile_error: str | None = Field(default=None, description="Why the profile is missing")
    session: SessionTokens | None = Field(default=None, description="Session, unless email confirmation is pending")


class SignInResponse(BaseModel):
    """Response schema for password sign-in."""

    user: UserResponse = Field(description="Signed-in auth account")
    profile: ProfileResponse = Field(description="Profile of the account")
    session: SessionTokens | None = Field(default=None, description="Session tokens")


class MessageResponse(BaseModel):
    """Plain status message."""

    message: str = Field(description="Status message")
