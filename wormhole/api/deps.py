"""FastAPI dependency injection functions."""

from typing import Annotated, Generator

from fastapi import Depends, Header, HTTPException, status
from supabase import Client
from supabase_auth.errors import AuthError

from wormhole.core.supabase import close_auth_client, create_auth_client


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(authorization: str) -> str:
    """Extract the access token from an Authorization header.

    Raises:
        HTTPException: 401 if the header is missing, not Bearer, or the
            token is not a three-part JWT.
    """
    if not authorization:
        raise _unauthorized("Authorization header required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid authorization header format. Expected: Bearer <token>")

    token = parts[1]
    if len(token.split(".")) != 3:
        raise _unauthorized("Invalid access token")
    return token


def get_anon_client() -> Generator[Client, None, None]:
    """Provide an isolated client with no session, for sign-up and sign-in."""
    client = create_auth_client()
    try:
        yield client
    finally:
        close_auth_client(client)


def get_session_client(
    authorization: Annotated[str, Header(description="Bearer token")] = "",
    x_refresh_token: Annotated[str | None, Header(description="Refresh token of the session")] = None,
) -> Generator[Client, None, None]:
    """Provide an isolated client carrying the caller's session.

    Row-level security then sees the caller as the authenticated user.
    The client's connections are closed when the request ends.

    Args:
        authorization: The Authorization header value (Bearer token).
        x_refresh_token: Optional refresh token for the same session.

    Yields:
        Client: Supabase client scoped to this request.

    Raises:
        HTTPException: 401 if the token is missing or rejected.
    """
    token = _bearer_token(authorization)

    client = create_auth_client()
    try:
        try:
            client.auth.set_session(token, x_refresh_token or "")
        except AuthError as e:
            raise _unauthorized(e.message) from e
        except (ValueError, IndexError) as e:
            # Payload that does not decode as a JWT
            raise _unauthorized("Invalid access token") from e

        yield client
    finally:
        close_auth_client(client)


# Type aliases for cleaner dependency injection
AnonClient = Annotated[Client, Depends(get_anon_client)]
SessionClient = Annotated[Client, Depends(get_session_client)]
