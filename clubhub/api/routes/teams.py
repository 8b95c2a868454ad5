"""Team routes. Reads are public, writes need board rights."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import MessageResponse, Team, TeamCreate, TeamUpdate

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=list[Team])
async def list_teams(services: ClubServices = Depends(get_services)):
    return await services.teams.list()


@router.get("/{team_id}", response_model=Team)
async def get_team(team_id: int, services: ClubServices = Depends(get_services)):
    return await services.teams.get(team_id)


@router.post("", response_model=Team)
async def create_team(
    data: TeamCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.teams.create(ctx, data)


@router.put("/{team_id}", response_model=Team)
async def update_team(
    team_id: int,
    data: TeamUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.teams.update(ctx, team_id, data)


@router.delete("/{team_id}", response_model=MessageResponse)
async def delete_team(
    team_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.teams.delete(ctx, team_id)
    return MessageResponse(message="Team deleted successfully")
