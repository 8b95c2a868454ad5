"""Teams: the club's top-level sides, also used as fixture opponents."""

from __future__ import annotations

import logging

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.models import Team, TeamCreate, TeamUpdate
from clubhub.core.utils import utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)


class TeamService(ResourceService[Team]):
    collection = Collections.TEAMS
    model = Team
    label = "Team"

    async def list(self) -> list[Team]:
        return await self._query()

    async def get(self, team_id: int) -> Team:
        return await self.load(team_id)

    async def create(self, actor: AuthContext, data: TeamCreate) -> Team:
        authorize(actor, Action.TEAM_CREATE)
        team = await self._insert({**data.model_dump(), "created_at": utc_now()})
        logger.info(f"Team {team.id} created by user {actor.user_id}")
        return team

    async def update(self, actor: AuthContext, team_id: int, data: TeamUpdate) -> Team:
        team = await self.load(team_id)
        authorize(actor, Action.TEAM_UPDATE, team)
        updates = data.model_dump(exclude_unset=True)
        self._merged(team, updates)
        return await self._update(team_id, updates)

    async def delete(self, actor: AuthContext, team_id: int) -> None:
        """
        Delete a team.

        Players, squads and games that reference it keep the dangling id.
        """
        team = await self.load(team_id)
        authorize(actor, Action.TEAM_DELETE, team)
        await self._delete(team_id)
        logger.info(f"Team {team_id} deleted by user {actor.user_id}")
