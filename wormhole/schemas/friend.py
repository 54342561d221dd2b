"""Friend Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wormhole.models.friend import FriendState


class FriendEdgeResponse(BaseModel):
    """Friend edge between two accounts."""

    model_config = ConfigDict(from_attributes=True)

    a: str = Field(description="First account of the pair")
    b: str = Field(description="Second account of the pair")
    requested_by: str = Field(description="Account that sent the request")
    state: FriendState = Field(description="Edge state")
    created_at: datetime = Field(description="Edge creation timestamp")
    updated_at: datetime = Field(description="Last state change")


class FriendWithUsernameResponse(BaseModel):
    """Accepted friend with the counterpart's username."""

    auth_id: str = Field(description="Friend's auth account ID")
    username: str | None = Field(default=None, description="Friend's username, null if unavailable")
    username_degraded: bool = Field(default=False, description="Whether the username lookup failed")
    created_at: datetime = Field(description="When the edge was created")
    edge: FriendEdgeResponse = Field(description="Underlying edge")


class InviteCreate(BaseModel):
    """Request schema for minting an invite code."""

    ttl_minutes: int = Field(default=60, ge=1, le=60 * 24 * 30, description="Minutes until the code expires")


class InviteResponse(BaseModel):
    """Minted invite code."""

    model_config = ConfigDict(from_attributes=True)

    code: str = Field(description="Invite code")
    expires_at: datetime = Field(description="Expiry timestamp")


class InviteRedeemRequest(BaseModel):
    """Request schema for redeeming an invite code."""

    code: str = Field(..., min_length=1, description="Invite code to redeem")


class InviteRedeemResponse(BaseModel):
    """Result of redeeming an invite code."""

    redeemed: bool = Field(description="Whether the code was valid and consumed")
