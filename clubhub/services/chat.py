"""
Channel-gated chat.

An append-only log partitioned by (club, channel). Every read and post
re-checks the channel gate from the caller's current role; there is no
"joined channel" state. Clients poll for new messages.
"""

from __future__ import annotations

import logging

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import NotFound
from clubhub.core.models import Channel, Message, MessageCreate
from clubhub.core.utils import as_utc, utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100


class ChatService(ResourceService[Message]):
    collection = Collections.MESSAGES
    model = Message
    label = "Message"

    def __init__(self, storage, history_limit: int = HISTORY_LIMIT):
        super().__init__(storage)
        self.history_limit = history_limit

    async def post_message(self, actor: AuthContext, data: MessageCreate) -> Message:
        """Append a message. Content is already trimmed and length-checked."""
        authorize(actor, Action.MESSAGE_POST, data.channel)
        await self._check_club(data.club_id)

        message = await self._insert({
            "user_id": actor.user_id,
            "club_id": data.club_id,
            "channel": data.channel,
            "content": data.content,
            "created_at": utc_now(),
        })
        logger.debug(f"Message {message.id} posted to {data.club_id}/{data.channel.value}")
        return message.model_copy(update={"author_name": await self._author_name(actor.user_id)})

    async def list_messages(
        self,
        actor: AuthContext,
        club_id: int,
        channel: Channel,
        limit: int | None = None,
    ) -> list[Message]:
        """
        Most recent messages for a club channel, newest first.

        Never more than the history limit; clients render oldest-first.
        """
        await self._check_club(club_id)
        authorize(actor, Action.MESSAGE_READ, channel)

        limit = min(limit or self.history_limit, self.history_limit)
        messages = await self._query({"club_id": club_id, "channel": channel.value})
        messages.sort(key=lambda m: (as_utc(m.created_at), m.id), reverse=True)
        messages = messages[:limit]

        names: dict[int, str | None] = {}
        result = []
        for message in messages:
            if message.user_id not in names:
                names[message.user_id] = await self._author_name(message.user_id)
            result.append(message.model_copy(update={"author_name": names[message.user_id]}))
        return result

    async def delete_message(self, actor: AuthContext, message_id: int) -> None:
        """Hard delete. Admin override, irreversible."""
        message = await self.load(message_id)
        authorize(actor, Action.MESSAGE_DELETE, message)
        await self._delete(message_id)
        logger.info(f"Message {message_id} deleted by user {actor.user_id}")

    async def _check_club(self, club_id: int) -> None:
        if not await self.storage.get(Collections.CLUBS, club_id):
            raise NotFound("Club not found")

    async def _author_name(self, user_id: int) -> str | None:
        user = await self.storage.get(Collections.USERS, user_id)
        if not user:
            return None
        return user.get("full_name") or user.get("email")
