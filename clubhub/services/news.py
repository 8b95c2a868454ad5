"""News feed. Published items are public; drafts need a login."""

from __future__ import annotations

import logging

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.models import News, NewsCreate, NewsUpdate
from clubhub.core.utils import as_utc, utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)


class NewsService(ResourceService[News]):
    collection = Collections.NEWS
    model = News
    label = "News"

    async def list(self, actor: AuthContext, published_only: bool = False) -> list[News]:
        """Newest first. Anonymous callers only ever see published items."""
        if published_only or actor.is_anonymous:
            items = await self._query({"published": True})
        else:
            items = await self._query()
        return sorted(items, key=lambda n: (as_utc(n.created_at), n.id), reverse=True)

    async def get(self, actor: AuthContext, news_id: int) -> News:
        item = await self.load(news_id)
        authorize(actor, Action.NEWS_READ, item)
        return item

    async def create(self, actor: AuthContext, data: NewsCreate) -> News:
        authorize(actor, Action.NEWS_CREATE)
        item = await self._insert({
            **data.model_dump(),
            "author_id": actor.user_id,
            "created_at": utc_now(),
        })
        logger.info(f"News {item.id} created by user {actor.user_id}")
        return item

    async def update(self, actor: AuthContext, news_id: int, data: NewsUpdate) -> News:
        item = await self.load(news_id)
        authorize(actor, Action.NEWS_UPDATE, item)
        updates = data.model_dump(exclude_unset=True)
        self._merged(item, updates)
        return await self._update(news_id, updates)

    async def delete(self, actor: AuthContext, news_id: int) -> None:
        item = await self.load(news_id)
        authorize(actor, Action.NEWS_DELETE, item)
        await self._delete(news_id)
