"""Players: roster entries managed by coaches and the board."""

from __future__ import annotations

import logging
from typing import Any

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import ValidationError
from clubhub.core.models import Player, PlayerCreate, PlayerUpdate
from clubhub.core.utils import utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)


class PlayerService(ResourceService[Player]):
    collection = Collections.PLAYERS
    model = Player
    label = "Player"

    async def list(
        self,
        team_id: int | None = None,
        squad_team_id: int | None = None,
    ) -> list[Player]:
        filters: dict[str, Any] = {}
        if team_id is not None:
            filters["team_id"] = team_id
        if squad_team_id is not None:
            filters["squad_team_id"] = squad_team_id
        return await self._query(filters or None)

    async def get(self, player_id: int) -> Player:
        return await self.load(player_id)

    async def create(self, actor: AuthContext, data: PlayerCreate) -> Player:
        authorize(actor, Action.PLAYER_CREATE)
        await self._check_references(data.model_dump())
        player = await self._insert({**data.model_dump(), "created_at": utc_now()})
        logger.info(f"Player {player.id} created by user {actor.user_id}")
        return player

    async def update(self, actor: AuthContext, player_id: int, data: PlayerUpdate) -> Player:
        """
        Update a player.

        Any authenticated user may do this; there is no ownership check.
        """
        player = await self.load(player_id)
        authorize(actor, Action.PLAYER_UPDATE, player)
        updates = data.model_dump(exclude_unset=True)
        self._merged(player, updates)
        await self._check_references(updates)
        return await self._update(player_id, updates)

    async def delete(self, actor: AuthContext, player_id: int) -> None:
        player = await self.load(player_id)
        authorize(actor, Action.PLAYER_DELETE, player)
        await self._delete(player_id)
        logger.info(f"Player {player_id} deleted by user {actor.user_id}")

    async def set_squad(
        self,
        player_id: int,
        squad_team_id: int | None,
        squad_role: str,
    ) -> Player:
        """Move a player in or out of a squad. Callers authorize."""
        return await self._update(player_id, {
            "squad_team_id": squad_team_id,
            "squad_role": squad_role,
        })

    async def set_squad_role(self, player_id: int, squad_role: str) -> Player:
        """Change a player's squad designation. Callers authorize."""
        return await self._update(player_id, {"squad_role": squad_role})

    async def _check_references(self, data: dict[str, Any]) -> None:
        if data.get("team_id") is not None:
            if not await self.storage.get(Collections.TEAMS, data["team_id"]):
                raise ValidationError(f"Unknown team {data['team_id']}")
        if data.get("user_id") is not None:
            if not await self.storage.get(Collections.USERS, data["user_id"]):
                raise ValidationError(f"Unknown user {data['user_id']}")
