"""Authentication API routes."""

from fastapi import APIRouter, status
from supabase_auth.types import Session, User

from wormhole.api.deps import AnonClient, SessionClient
from wormhole.api.middleware.error_handler import AuthenticationError
from wormhole.schemas.auth import (
    MessageResponse,
    SessionTokens,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserResponse,
)
from wormhole.schemas.profile import ProfileResponse
from wormhole.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        user_metadata=user.user_metadata or {},
    )


def _session_tokens(session: Session | None) -> SessionTokens | None:
    if session is None:
        return None
    return SessionTokens(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up new user",
    description="Create an account; its profile is created by the database and returned when ready.",
)
async def signup(data: SignUpRequest, client: AnonClient) -> SignUpResponse:
    """Sign up a new user.

    A missing profile does not fail the request; profile_error tells why
    it is absent.
    """
    result = await AuthService(client).sign_up(data.username, data.email, data.password)

    return SignUpResponse(
        user=_user_response(result.user),
        profile=ProfileResponse(**result.profile.value) if result.profile.value else None,
        profile_error=result.profile.error,
        session=_session_tokens(result.session),
    )


@router.post(
    "/signin",
    response_model=SignInResponse,
    summary="Sign in",
    description="Password sign-in. Fails when the account has no profile.",
)
async def signin(data: SignInRequest, client: AnonClient) -> SignInResponse:
    result = await AuthService(client).sign_in(data.email, data.password)

    return SignInResponse(
        user=_user_response(result.user),
        profile=ProfileResponse(**result.profile),
        session=_session_tokens(result.session),
    )


@router.post(
    "/signout",
    response_model=MessageResponse,
    summary="Sign out",
)
async def signout(client: SessionClient) -> MessageResponse:
    await AuthService(client).sign_out()
    return MessageResponse(message="Signed out")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(client: SessionClient) -> UserResponse:
    """Return the account of the bearer token.

    Raises:
        AuthenticationError: If the auth state cannot be determined.
    """
    user = await AuthService(client).get_current_user()
    if not user:
        raise AuthenticationError("Not authenticated")
    return _user_response(user)
