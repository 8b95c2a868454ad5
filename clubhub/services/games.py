"""
Games: fixtures between two teams.

Status moves forward only: scheduled → live → finished. Changing it needs
board rights even though any authenticated user may edit the other fields.
Scores are plain fields, never derived from status.
"""

from __future__ import annotations

import logging
from datetime import datetime

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import Conflict, ValidationError
from clubhub.core.models import Game, GameCreate, GameStatus, GameUpdate
from clubhub.core.utils import as_utc, utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5

STATUS_ORDER = [GameStatus.SCHEDULED, GameStatus.LIVE, GameStatus.FINISHED]


def can_transition(current: GameStatus, target: GameStatus) -> bool:
    """Forward moves (skipping allowed) and no-ops are legal."""
    return STATUS_ORDER.index(target) >= STATUS_ORDER.index(current)


class GameService(ResourceService[Game]):
    collection = Collections.GAMES
    model = Game
    label = "Game"

    async def list(self, upcoming: bool = False, now: datetime | None = None) -> list[Game]:
        """
        All games, newest first.

        With ``upcoming``: scheduled games from now on, soonest first,
        at most five.
        """
        games = await self._query()
        if not upcoming:
            return sorted(games, key=lambda g: (as_utc(g.game_date), g.id), reverse=True)

        now = now or utc_now()
        pending = [
            g for g in games
            if g.status == GameStatus.SCHEDULED and as_utc(g.game_date) >= now
        ]
        pending.sort(key=lambda g: (as_utc(g.game_date), g.id))
        return pending[:UPCOMING_LIMIT]

    async def get(self, game_id: int) -> Game:
        return await self.load(game_id)

    async def create(self, actor: AuthContext, data: GameCreate) -> Game:
        authorize(actor, Action.GAME_CREATE)
        await self._check_teams(data.home_team_id, data.away_team_id)
        game = await self._insert({
            **data.model_dump(),
            "home_score": None,
            "away_score": None,
            "status": GameStatus.SCHEDULED,
            "created_at": utc_now(),
        })
        logger.info(f"Game {game.id} scheduled by user {actor.user_id}")
        return game

    async def update(self, actor: AuthContext, game_id: int, data: GameUpdate) -> Game:
        game = await self.load(game_id)
        authorize(actor, Action.GAME_UPDATE, game)

        updates = data.model_dump(exclude_unset=True)
        new_status = updates.get("status")
        if new_status is not None and new_status != game.status:
            authorize(actor, Action.GAME_UPDATE_STATUS, game)
            if not can_transition(game.status, new_status):
                raise Conflict(
                    f"Cannot move game from {game.status.value} to {new_status.value}"
                )
        elif "status" in updates and new_status is None:
            raise ValidationError("status cannot be null")

        merged = self._merged(game, updates)
        if "home_team_id" in updates or "away_team_id" in updates:
            await self._check_teams(merged.home_team_id, merged.away_team_id)

        updated = await self._update(game_id, updates)
        if new_status is not None and new_status != game.status:
            logger.info(f"Game {game_id} {game.status.value} -> {new_status.value}")
        return updated

    async def delete(self, actor: AuthContext, game_id: int) -> None:
        game = await self.load(game_id)
        authorize(actor, Action.GAME_DELETE, game)
        await self._delete(game_id)

    async def _check_teams(self, *team_ids: int) -> None:
        for team_id in team_ids:
            if not await self.storage.get(Collections.TEAMS, team_id):
                raise ValidationError(f"Unknown team {team_id}")
