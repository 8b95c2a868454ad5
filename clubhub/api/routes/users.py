"""User administration routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require, require_auth
from clubhub.core.models import RoleUpdate, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    ctx: AuthContext = Depends(require(Action.USER_LIST)),
    services: ClubServices = Depends(get_services),
):
    users = await services.users.list_users(ctx)
    return [UserResponse.from_db(u) for u in users]


@router.put("/{user_id}/role", response_model=UserResponse)
async def set_user_role(
    user_id: int,
    data: RoleUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """
    Change a user's role.

    Tokens the user already holds keep their old role until expiry.
    """
    user = await services.users.set_role(ctx, user_id, data.role)
    return UserResponse.from_db(user)
