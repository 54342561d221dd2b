"""Worm model type definitions for database operations."""

from enum import Enum
from typing import Any, TypedDict


class WormStatus(str, Enum):
    """Worm visibility values matching database enum."""

    PRIVATE = "private"
    FRIENDS = "friends"
    PUBLIC = "public"


class Worm(TypedDict):
    """Worm table row representation.

    author_id references profiles.id, not the auth account.
    """

    id: int
    created_at: str
    updated_at: str | None
    content: str
    status: WormStatus
    tags: list[str] | None
    author_id: int
    position: dict[str, Any] | None
    host_url: str
