"""Friend API routes."""

from fastapi import APIRouter, Query, Response, status

from wormhole.api.deps import SessionClient
from wormhole.schemas.friend import (
    FriendEdgeResponse,
    FriendWithUsernameResponse,
    InviteCreate,
    InviteRedeemRequest,
    InviteRedeemResponse,
    InviteResponse,
)
from wormhole.schemas.profile import PublicProfileCardResponse
from wormhole.services.friend_service import FriendService

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get(
    "",
    response_model=list[FriendWithUsernameResponse],
    summary="List friends",
    description="Accepted friends with usernames. A friend whose username could not be read has username null.",
)
async def list_friends(client: SessionClient) -> list[FriendWithUsernameResponse]:
    friends = await FriendService(client).list_accepted_with_usernames()
    return [FriendWithUsernameResponse(**friend) for friend in friends]


@router.get(
    "/incoming",
    response_model=list[FriendEdgeResponse],
    summary="List incoming requests",
)
async def list_incoming(client: SessionClient) -> list[FriendEdgeResponse]:
    edges = await FriendService(client).list_incoming()
    return [FriendEdgeResponse(**edge) for edge in edges]


@router.get(
    "/outgoing",
    response_model=list[FriendEdgeResponse],
    summary="List outgoing requests",
)
async def list_outgoing(client: SessionClient) -> list[FriendEdgeResponse]:
    edges = await FriendService(client).list_outgoing()
    return [FriendEdgeResponse(**edge) for edge in edges]


@router.get(
    "/search",
    response_model=list[PublicProfileCardResponse],
    summary="Search users by username",
    description="Case-insensitive substring match, at most 10 results.",
)
async def search_users(
    client: SessionClient,
    q: str = Query(..., min_length=1, description="Part of a username"),
) -> list[PublicProfileCardResponse]:
    cards = await FriendService(client).search_by_username(q)
    return [PublicProfileCardResponse(**card) for card in cards]


@router.post(
    "/invites",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invite code",
)
async def create_invite(data: InviteCreate, client: SessionClient) -> InviteResponse:
    invite = await FriendService(client).create_invite(data.ttl_minutes)
    return InviteResponse(**invite)


@router.post(
    "/invites/redeem",
    response_model=InviteRedeemResponse,
    summary="Redeem invite code",
)
async def redeem_invite(data: InviteRedeemRequest, client: SessionClient) -> InviteRedeemResponse:
    redeemed = await FriendService(client).redeem_invite(data.code)
    return InviteRedeemResponse(redeemed=redeemed)


@router.post(
    "/{auth_id}/request",
    response_model=FriendEdgeResponse,
    summary="Send friend request",
)
async def send_request(auth_id: str, client: SessionClient) -> FriendEdgeResponse:
    edge = await FriendService(client).request(auth_id)
    return FriendEdgeResponse(**edge)


@router.post(
    "/{auth_id}/accept",
    response_model=FriendEdgeResponse,
    summary="Accept friend request",
)
async def accept_request(auth_id: str, client: SessionClient) -> FriendEdgeResponse:
    edge = await FriendService(client).accept(auth_id)
    return FriendEdgeResponse(**edge)


@router.post(
    "/{auth_id}/decline",
    response_model=FriendEdgeResponse,
    summary="Decline friend request",
)
async def decline_request(auth_id: str, client: SessionClient) -> FriendEdgeResponse:
    edge = await FriendService(client).decline(auth_id)
    return FriendEdgeResponse(**edge)


@router.delete(
    "/{auth_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove friend",
)
async def remove_friend(auth_id: str, client: SessionClient) -> Response:
    await FriendService(client).remove(auth_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
