"""Squad team routes, including roster management."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import (
    MessageResponse,
    Player,
    SquadRoleUpdate,
    SquadTeam,
    SquadTeamCreate,
    SquadTeamUpdate,
)

router = APIRouter(prefix="/squad-teams", tags=["squad-teams"])


@router.get("", response_model=list[SquadTeam])
async def list_squads(
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.list(ctx)


@router.get("/{squad_id}", response_model=SquadTeam)
async def get_squad(
    squad_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.get(ctx, squad_id)


@router.post("", response_model=SquadTeam)
async def create_squad(
    data: SquadTeamCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.create(ctx, data)


@router.put("/{squad_id}", response_model=SquadTeam)
async def update_squad(
    squad_id: int,
    data: SquadTeamUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.update(ctx, squad_id, data)


@router.delete("/{squad_id}", response_model=MessageResponse)
async def delete_squad(
    squad_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.squads.delete(ctx, squad_id)
    return MessageResponse(message="Squad team deleted successfully")


# =============================================================================
# Roster
# =============================================================================


@router.get("/{squad_id}/players", response_model=list[Player])
async def list_squad_players(
    squad_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.list_players(ctx, squad_id)


@router.post("/{squad_id}/players/{player_id}", response_model=Player)
async def add_squad_player(
    squad_id: int,
    player_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.add_player(ctx, squad_id, player_id)


@router.delete("/{squad_id}/players/{player_id}", response_model=Player)
async def remove_squad_player(
    squad_id: int,
    player_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.squads.remove_player(ctx, squad_id, player_id)


@router.put("/{squad_id}/players/{player_id}/role", response_model=Player)
async def set_squad_player_role(
    squad_id: int,
    player_id: int,
    data: SquadRoleUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """Captain / team director designation. President only."""
    return await services.squads.set_player_role(ctx, squad_id, player_id, data.role)
