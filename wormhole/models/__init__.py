"""Database model type definitions."""

from wormhole.models.friend import FriendEdge, FriendState, FriendWithUsername, Invite
from wormhole.models.profile import ProfileRow, PublicProfileCard
from wormhole.models.result import Lookup
from wormhole.models.worm import Worm, WormStatus

__all__ = [
    "ProfileRow",
    "PublicProfileCard",
    "FriendEdge",
    "FriendState",
    "FriendWithUsername",
    "Invite",
    "Lookup",
    "Worm",
    "WormStatus",
]
