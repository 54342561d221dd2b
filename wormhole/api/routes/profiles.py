"""Profile API routes."""

from fastapi import APIRouter, Response, status

from wormhole.api.deps import SessionClient
from wormhole.api.middleware.error_handler import NotFoundError
from wormhole.schemas.profile import (
    ProfileResponse,
    ProfileUpdate,
    PublicProfileCardResponse,
    WormsStatusUpdate,
)
from wormhole.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
)
async def get_my_profile(client: SessionClient) -> ProfileResponse:
    """Get the authenticated user's profile.

    Raises:
        NotFoundError: If the account has no profile row.
    """
    profile = await ProfileService(client).get_current_profile()
    if not profile:
        raise NotFoundError("Profile not found")
    return ProfileResponse(**profile)


@router.patch(
    "/me",
    response_model=ProfileResponse,
    summary="Update current user's profile",
    description="Updates username, bio or settings; omitted fields are unchanged and null clears a field.",
)
async def update_my_profile(data: ProfileUpdate, client: SessionClient) -> ProfileResponse:
    profile = await ProfileService(client).update_current_profile(data)
    if not profile:
        raise NotFoundError("Profile not found")
    return ProfileResponse(**profile)


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete current account",
    description="Deletes the account and its data through the delete_user_account procedure.",
)
async def delete_my_account(client: SessionClient) -> Response:
    await ProfileService(client).delete_account()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/me/worms/status",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set visibility of all my worms",
    description="Only private and friends are accepted.",
)
async def update_my_worms_status(data: WormsStatusUpdate, client: SessionClient) -> Response:
    await ProfileService(client).update_all_worms_status(data.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{profile_id}",
    response_model=ProfileResponse,
    summary="Get profile by ID",
)
async def get_profile(profile_id: int, client: SessionClient) -> ProfileResponse:
    profile = await ProfileService(client).get_by_profile_id(profile_id)
    if not profile:
        raise NotFoundError("Profile not found")
    return ProfileResponse(**profile)


@router.get(
    "/{profile_id}/card",
    response_model=PublicProfileCardResponse,
    summary="Get public profile card",
)
async def get_profile_card(profile_id: int, client: SessionClient) -> PublicProfileCardResponse:
    card = await ProfileService(client).get_public_card(profile_id)
    if not card:
        raise NotFoundError("Profile not found")
    return PublicProfileCardResponse(**card)
