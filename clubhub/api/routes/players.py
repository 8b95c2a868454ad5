"""Player routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import MessageResponse, Player, PlayerCreate, PlayerUpdate

router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=list[Player])
async def list_players(
    team_id: int | None = Query(None, alias="teamId"),
    squad_team_id: int | None = Query(None, alias="squadTeamId"),
    services: ClubServices = Depends(get_services),
):
    return await services.players.list(team_id=team_id, squad_team_id=squad_team_id)


@router.get("/{player_id}", response_model=Player)
async def get_player(player_id: int, services: ClubServices = Depends(get_services)):
    return await services.players.get(player_id)


@router.post("", response_model=Player)
async def create_player(
    data: PlayerCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.players.create(ctx, data)


@router.put("/{player_id}", response_model=Player)
async def update_player(
    player_id: int,
    data: PlayerUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.players.update(ctx, player_id, data)


@router.delete("/{player_id}", response_model=MessageResponse)
async def delete_player(
    player_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.players.delete(ctx, player_id)
    return MessageResponse(message="Player deleted successfully")
