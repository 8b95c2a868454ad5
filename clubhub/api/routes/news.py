"""News routes. Drafts are only visible to logged-in users."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import optional_auth, require_auth
from clubhub.core.models import MessageResponse, News, NewsCreate, NewsUpdate

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=list[News])
async def list_news(
    published: bool = False,
    ctx: AuthContext = Depends(optional_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.news.list(ctx, published_only=published)


@router.get("/{news_id}", response_model=News)
async def get_news(
    news_id: int,
    ctx: AuthContext = Depends(optional_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.news.get(ctx, news_id)


@router.post("", response_model=News)
async def create_news(
    data: NewsCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.news.create(ctx, data)


@router.put("/{news_id}", response_model=News)
async def update_news(
    news_id: int,
    data: NewsUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.news.update(ctx, news_id, data)


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(
    news_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.news.delete(ctx, news_id)
    return MessageResponse(message="News deleted successfully")
