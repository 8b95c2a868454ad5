"""
Chat routes.

Clients poll ``GET /chat/{clubId}/{channel}``; there is no push delivery.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require_auth
from clubhub.core.models import Channel, Message, MessageCreate, MessageResponse

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/{club_id}/{channel}", response_model=list[Message])
async def list_messages(
    club_id: int,
    channel: Channel,
    limit: int | None = Query(None, ge=1),
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """Newest first, capped at the history limit."""
    return await services.chat.list_messages(ctx, club_id, channel, limit)


@router.post("/send", response_model=Message)
async def send_message(
    data: MessageCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.chat.post_message(ctx, data)


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.chat.delete_message(ctx, message_id)
    return MessageResponse(message="Message deleted successfully")
