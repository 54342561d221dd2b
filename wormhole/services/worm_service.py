"""Worm data access."""

from supabase import Client

from wormhole.core.supabase import first_row
from wormhole.models.worm import Worm, WormStatus
from wormhole.schemas.worm import WormCreate, WormUpdate

DEFAULT_PAGE_SIZE = 50


class WormService:
    """Data access for the worms table.

    Ownership and visibility are enforced by row-level security.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    async def create(self, data: WormCreate) -> Worm | None:
        """Insert a worm and return the stored row."""
        response = (
            self.client.table("worms")
            .insert(data.model_dump(mode="json"))
            .execute()
        )
        return first_row(response)

    async def update(self, worm_id: int, data: WormUpdate) -> Worm | None:
        """Patch the fields set on data.

        Returns:
            Worm | None: The updated row, or None if no row matched.
        """
        response = (
            self.client.table("worms")
            .update(data.model_dump(mode="json", exclude_unset=True))
            .eq("id", worm_id)
            .execute()
        )
        return first_row(response)

    async def delete(self, worm_id: int) -> None:
        self.client.table("worms").delete().eq("id", worm_id).execute()

    async def list_visible(self, limit: int = DEFAULT_PAGE_SIZE) -> list[Worm]:
        """List the newest worms the caller may see."""
        response = (
            self.client.table("worms")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    async def by_author_profile_id(self, profile_id: int, limit: int = DEFAULT_PAGE_SIZE) -> list[Worm]:
        """List the newest worms of one profile."""
        response = (
            self.client.table("worms")
            .select("*")
            .eq("author_id", profile_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    async def update_status(self, worm_id: int, status: WormStatus) -> Worm | None:
        response = (
            self.client.table("worms")
            .update({"status": WormStatus(status).value})
            .eq("id", worm_id)
            .execute()
        )
        return first_row(response)
