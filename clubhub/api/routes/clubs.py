"""Club and membership routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import (
    Club,
    ClubCreate,
    ClubUpdate,
    Membership,
    MembershipCreate,
    MessageResponse,
)

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.get("", response_model=list[Club])
async def list_clubs(
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.list(ctx)


@router.get("/{club_id}", response_model=Club)
async def get_club(
    club_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.get(ctx, club_id)


@router.post("", response_model=Club)
async def create_club(
    data: ClubCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.create(ctx, data)


@router.put("/{club_id}", response_model=Club)
async def update_club(
    club_id: int,
    data: ClubUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.update(ctx, club_id, data)


@router.get("/{club_id}/members", response_model=list[Membership])
async def list_members(
    club_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.list_members(ctx, club_id)


@router.post("/{club_id}/members", response_model=Membership)
async def add_member(
    club_id: int,
    data: MembershipCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.clubs.add_member(ctx, club_id, data.user_id)


@router.delete("/{club_id}/members/{user_id}", response_model=MessageResponse)
async def remove_member(
    club_id: int,
    user_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.clubs.remove_member(ctx, club_id, user_id)
    return MessageResponse(message="Member removed successfully")
