"""Worm API routes."""

from fastapi import APIRouter, Query, Response, status

from wormhole.api.deps import SessionClient
from wormhole.api.middleware.error_handler import AuthorizationError, NotFoundError
from wormhole.schemas.worm import WormCreate, WormResponse, WormStatusUpdate, WormUpdate
from wormhole.services.worm_service import DEFAULT_PAGE_SIZE, WormService

router = APIRouter(prefix="/worms", tags=["worms"])


@router.get(
    "",
    response_model=list[WormResponse],
    summary="List visible worms",
    description="Newest first. Visibility is decided by row-level security.",
)
async def list_worms(
    client: SessionClient,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=200, description="Maximum rows"),
) -> list[WormResponse]:
    worms = await WormService(client).list_visible(limit)
    return [WormResponse(**worm) for worm in worms]


@router.get(
    "/by-author/{profile_id}",
    response_model=list[WormResponse],
    summary="List worms of a profile",
)
async def list_worms_by_author(
    profile_id: int,
    client: SessionClient,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=200, description="Maximum rows"),
) -> list[WormResponse]:
    worms = await WormService(client).by_author_profile_id(profile_id, limit)
    return [WormResponse(**worm) for worm in worms]


@router.post(
    "",
    response_model=WormResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create worm",
)
async def create_worm(data: WormCreate, client: SessionClient) -> WormResponse:
    worm = await WormService(client).create(data)
    if not worm:
        raise AuthorizationError("Worm was not created")
    return WormResponse(**worm)


@router.patch(
    "/{worm_id}",
    response_model=WormResponse,
    summary="Update worm",
)
async def update_worm(worm_id: int, data: WormUpdate, client: SessionClient) -> WormResponse:
    worm = await WormService(client).update(worm_id, data)
    if not worm:
        raise NotFoundError("Worm not found")
    return WormResponse(**worm)


@router.put(
    "/{worm_id}/status",
    response_model=WormResponse,
    summary="Set worm visibility",
)
async def update_worm_status(worm_id: int, data: WormStatusUpdate, client: SessionClient) -> WormResponse:
    worm = await WormService(client).update_status(worm_id, data.status)
    if not worm:
        raise NotFoundError("Worm not found")
    return WormResponse(**worm)


@router.delete(
    "/{worm_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete worm",
)
async def delete_worm(worm_id: int, client: SessionClient) -> Response:
    await WormService(client).delete(worm_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
