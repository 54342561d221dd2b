"""Friend edge data access, friend actions and invites."""

import logging
from typing import Any

from supabase import Client

from wormhole.api.middleware.error_handler import APIError, AuthenticationError
from wormhole.core.supabase import single_row
from wormhole.models.friend import FriendEdge, FriendState, FriendWithUsername, Invite
from wormhole.models.profile import PublicProfileCard
from wormhole.models.result import Lookup

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 10


class FriendService:
    """Data access for friend_edges and the friend_* RPCs.

    State transitions and the one-edge-per-pair invariant are enforced by
    the RPCs in the database; this class only shapes the calls.
    """

    def __init__(self, client: Client) -> None:
        """Initialize friend service.

        Args:
            client: Supabase client carrying the caller's session.
        """
        self.client = client

    # Cards

    async def get_public_card(self, profile_id: int) -> PublicProfileCard | None:
        """Get the public card of a profile."""
        response = (
            self.client.table("public_profile_cards")
            .select("*")
            .eq("profile_id", profile_id)
            .maybe_single()
            .execute()
        )
        return single_row(response)

    async def search_by_username(self, username: str) -> list[PublicProfileCard]:
        """Find public cards whose username contains the given text.

        Case-insensitive, at most SEARCH_RESULT_LIMIT results.
        """
        response = (
            self.client.table("public_profile_cards")
            .select("*")
            .ilike("username", f"%{username}%")
            .limit(SEARCH_RESULT_LIMIT)
            .execute()
        )
        return response.data or []

    # Lists

    async def list_accepted(self) -> list[FriendEdge]:
        """List accepted edges that include the signed-in account."""
        me = await self._me()
        return await self._accepted_edges(me)

    async def list_accepted_with_usernames(self) -> list[FriendWithUsername]:
        """List accepted friends together with their usernames.

        Usernames are looked up one edge at a time. A failed lookup leaves
        the username null and marks the entry degraded; the friend is
        still listed.
        """
        me = await self._me()
        edges = await self._accepted_edges(me)

        friends: list[FriendWithUsername] = []
        for edge in edges:
            friend_auth_id = edge["b"] if edge["a"] == me else edge["a"]
            username = await self._lookup_username(friend_auth_id)
            friends.append(
                {
                    "auth_id": friend_auth_id,
                    "username": username.value,
                    "username_degraded": username.degraded,
                    "created_at": edge["created_at"],
                    "edge": edge,
                }
            )

        return friends

    async def list_incoming(self) -> list[FriendEdge]:
        """List pending requests sent to the signed-in account."""
        me = await self._me()
        response = (
            self.client.table("friend_edges")
            .select("*")
            .eq("state", FriendState.PENDING.value)
            .neq("requested_by", me)
            .or_(f"a.eq.{me},b.eq.{me}")
            .execute()
        )
        return response.data or []

    async def list_outgoing(self) -> list[FriendEdge]:
        """List pending requests sent by the signed-in account."""
        me = await self._me()
        response = (
            self.client.table("friend_edges")
            .select("*")
            .eq("state", FriendState.PENDING.value)
            .eq("requested_by", me)
            .execute()
        )
        return response.data or []

    # Actions

    async def request(self, other_auth_id: str) -> FriendEdge:
        """Send a friend request to another account."""
        response = self.client.rpc("friend_request", {"target": str(other_auth_id)}).execute()
        return response.data

    async def accept(self, other_auth_id: str) -> FriendEdge:
        """Accept a pending request from another account."""
        response = self.client.rpc("friend_accept", {"other": str(other_auth_id)}).execute()
        return response.data

    async def decline(self, other_auth_id: str) -> FriendEdge:
        """Decline a pending request from another account."""
        response = self.client.rpc("friend_decline", {"other": str(other_auth_id)}).execute()
        return response.data

    async def remove(self, other_auth_id: str) -> None:
        """Remove the edge with another account."""
        self.client.rpc("friend_remove", {"_other": str(other_auth_id)}).execute()

    # Invites

    async def create_invite(self, ttl_minutes: int = 60) -> Invite:
        """Mint an invite code valid for ttl_minutes.

        Raises:
            APIError: If the procedure returned no invite row.
        """
        response = self.client.rpc("friend_send_invite", {"ttl_minutes": ttl_minutes}).execute()
        data: Any = response.data
        # Table-returning functions come back as a one-row list
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise APIError("Invite was not created")
        return data

    async def redeem_invite(self, code: str) -> bool:
        """Redeem an invite code.

        Returns:
            bool: False when the code is unknown, used or expired.
        """
        response = self.client.rpc("friend_redeem", {"_code": code}).execute()
        return bool(response.data)

    # Helpers

    async def _accepted_edges(self, me: str) -> list[FriendEdge]:
        response = (
            self.client.table("friend_edges")
            .select("*")
            .eq("state", FriendState.ACCEPTED.value)
            .or_(f"a.eq.{me},b.eq.{me}")
            .execute()
        )
        return response.data or []

    async def _lookup_username(self, auth_id: str) -> Lookup[str]:
        try:
            response = (
                self.client.table("profiles")
                .select("username")
                .eq("auth_id", auth_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            logger.warning("Could not fetch username for friend %s: %s", auth_id, e)
            return Lookup(error=str(e))

        row = single_row(response)
        return Lookup(value=row["username"] if row else None)

    async def _me(self) -> str:
        """Get the auth ID of the signed-in account.

        Raises:
            AuthenticationError: If there is no signed-in account.
        """
        response = self.client.auth.get_user()
        if not response or not response.user:
            raise AuthenticationError("Not authenticated")
        return str(response.user.id)
