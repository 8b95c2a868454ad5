"""Game routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import Game, GameCreate, GameUpdate, MessageResponse

router = APIRouter(prefix="/games", tags=["games"])


@router.get("", response_model=list[Game])
async def list_games(upcoming: bool = False, services: ClubServices = Depends(get_services)):
    """All games newest first, or the next five scheduled with ``upcoming=true``."""
    return await services.games.list(upcoming=upcoming)


@router.get("/{game_id}", response_model=Game)
async def get_game(game_id: int, services: ClubServices = Depends(get_services)):
    return await services.games.get(game_id)


@router.post("", response_model=Game)
async def create_game(
    data: GameCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.games.create(ctx, data)


@router.put("/{game_id}", response_model=Game)
async def update_game(
    game_id: int,
    data: GameUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.games.update(ctx, game_id, data)


@router.delete("/{game_id}", response_model=MessageResponse)
async def delete_game(
    game_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.games.delete(ctx, game_id)
    return MessageResponse(message="Game deleted successfully")
