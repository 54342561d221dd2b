"""Friend edge model type definitions for database operations."""

from enum import Enum
from typing import TypedDict


class FriendState(str, Enum):
    """Friend edge state values matching database enum."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    BLOCKED = "blocked"
    CANCELED = "canceled"


class FriendEdge(TypedDict):
    """Friend edge table row representation.

    The unordered account pair is stored as (a, b); requested_by names the
    account that sent the request.
    """

    a: str
    b: str
    requested_by: str
    state: FriendState
    created_at: str
    updated_at: str


class FriendWithUsername(TypedDict):
    """Accepted edge decorated with the other account's username.

    username_degraded is set when the username could not be looked up.
    """

    auth_id: str
    username: str | None
    username_degraded: bool
    created_at: str
    edge: FriendEdge


class Invite(TypedDict):
    """Invite code returned by friend_send_invite."""

    code: str
    expires_at: str
