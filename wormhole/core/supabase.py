"""Supabase client binding for database, auth and RPC calls."""

import logging
from typing import Any

from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions
from supabase_auth import SyncMemoryStorage

from wormhole.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Process-wide client, owned by init_supabase_client()/shutdown_supabase_client()
_supabase_client: Client | None = None


def create_supabase_client(settings: Settings | None = None) -> Client:
    """Create a Supabase client that keeps its session and refreshes tokens.

    Args:
        settings: Settings to read the project URL and anon key from.

    Returns:
        Client: New Supabase client instance.
    """
    settings = settings or get_settings()
    options = SyncClientOptions(
        persist_session=True,
        auto_refresh_token=True,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=options,
    )


def create_auth_client(settings: Settings | None = None) -> Client:
    """Create a fresh Supabase client for a single caller's session.

    Use this for per-request work that calls auth.set_session() or
    auth.sign_in_*(), so one caller's Authorization header never leaks
    into the process-wide client.

    Returns:
        Client: Fresh Supabase client instance with isolated session storage.
    """
    settings = settings or get_settings()
    options = SyncClientOptions(
        storage=SyncMemoryStorage(),
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=options,
    )


def close_auth_client(client: Client) -> None:
    """Close the HTTP connections of a client from create_auth_client().

    The session is only dropped locally; nothing is revoked on the server.
    A failure to close is logged, never raised, since the request it served
    has already completed.
    """
    try:
        client.auth.close()
        client.postgrest.aclose()
    except Exception as e:
        logger.warning("Failed to close per-request Supabase client: %s", e)


def init_supabase_client(settings: Settings | None = None) -> Client:
    """Create the process-wide client. Call at startup.

    Calling it again returns the existing client.
    """
    global _supabase_client
    if _supabase_client is None:
        settings = settings or get_settings()
        _supabase_client = create_supabase_client(settings)
        logger.info("Supabase client initialized for %s", settings.supabase_url)
    return _supabase_client


def get_supabase_client() -> Client:
    """Get the process-wide client.

    Raises:
        RuntimeError: If init_supabase_client() has not been called.
    """
    if _supabase_client is None:
        raise RuntimeError("Supabase client not initialized; call init_supabase_client() first")
    return _supabase_client


def shutdown_supabase_client() -> None:
    """Release the process-wide client. Call at shutdown."""
    global _supabase_client
    if _supabase_client is not None:
        _supabase_client = None
        logger.info("Supabase client released")


def single_row(response: Any) -> dict[str, Any] | None:
    """Row of a maybe_single() response, or None when nothing matched.

    Depending on the postgrest version, an empty maybe_single() result is
    either None or a response whose data is None.
    """
    if response is None:
        return None
    return response.data or None


def first_row(response: Any) -> dict[str, Any] | None:
    """First row of a list response (insert/update return representation)."""
    if response is None or not response.data:
        return None
    return response.data[0]


async def check_database_connection(client: Client) -> dict[str, Any]:
    """Check if database connection is healthy.

    Performs a one-row read of the public profile cards view.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client.table("public_profile_cards").select("profile_id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        logger.warning("Database check failed: %s", e)
        return {"healthy": False, "error": str(e)}
