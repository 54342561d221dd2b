"""Profile model type definitions for database operations."""

from typing import Any, TypedDict

# Columns read from the profiles table
PROFILE_COLUMNS = "id, auth_id, username, created_at, settings, bio, badge_id"


class ProfileRow(TypedDict):
    """Profile table row representation.

    One profile per auth account, created by a database trigger on sign-up.
    """

    id: int
    auth_id: str
    username: str | None
    created_at: str
    settings: dict[str, Any] | None
    bio: str | None
    badge_id: int | None


class PublicProfileCard(TypedDict):
    """Row of the read-only public_profile_cards view."""

    profile_id: int
    username: str | None
    badge_slug: str | None
    badge_url: str | None
