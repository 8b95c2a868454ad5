"""
Squad teams: age/category sub-rosters such as "Sub-17".

A squad has at most one coach. That coach, and the board, manage its
roster; only the president hands out captain / team director designations.
Coach authority is always resolved against the loaded squad, never from
the role alone.
"""

from __future__ import annotations

import logging
from typing import Any

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import NotFound, ValidationError
from clubhub.core.models import (
    Player,
    Role,
    SquadRole,
    SquadTeam,
    SquadTeamCreate,
    SquadTeamUpdate,
)
from clubhub.core.utils import utc_now
from clubhub.services.base import ResourceService
from clubhub.services.players import PlayerService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)

# Changing these takes board rights even for the squad's own coach
ASSIGNMENT_FIELDS = {"coach_id", "association_id"}


class SquadTeamService(ResourceService[SquadTeam]):
    collection = Collections.SQUAD_TEAMS
    model = SquadTeam
    label = "Squad team"

    def __init__(self, storage, players: PlayerService):
        super().__init__(storage)
        self.players = players

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def list(self, actor: AuthContext) -> list[SquadTeam]:
        authorize(actor, Action.SQUAD_READ)
        return await self._query()

    async def get(self, actor: AuthContext, squad_id: int) -> SquadTeam:
        squad = await self.load(squad_id)
        authorize(actor, Action.SQUAD_READ, squad)
        return squad

    async def create(self, actor: AuthContext, data: SquadTeamCreate) -> SquadTeam:
        authorize(actor, Action.SQUAD_CREATE)
        await self._check_association(data.association_id)
        if data.coach_id is not None:
            await self._check_coach(data.coach_id)

        squad = await self._insert({
            **data.model_dump(),
            "created_by": actor.user_id,
            "created_at": utc_now(),
        })
        logger.info(f"Squad {squad.id} '{squad.name}' created by user {actor.user_id}")
        return squad

    async def update(self, actor: AuthContext, squad_id: int, data: SquadTeamUpdate) -> SquadTeam:
        squad = await self.load(squad_id)
        authorize(actor, Action.SQUAD_UPDATE, squad)

        updates = data.model_dump(exclude_unset=True)
        # Echoing the current coach or association back is not a reassignment
        if any(updates[f] != getattr(squad, f) for f in ASSIGNMENT_FIELDS & updates.keys()):
            authorize(actor, Action.SQUAD_ASSIGN, squad)
        self._merged(squad, updates)

        if "association_id" in updates:
            await self._check_association(updates["association_id"])
        if updates.get("coach_id") is not None:
            await self._check_coach(updates["coach_id"])

        updated = await self._update(squad_id, updates)
        if "coach_id" in updates and updates["coach_id"] != squad.coach_id:
            logger.info(f"Squad {squad_id} coach {squad.coach_id} -> {updates['coach_id']}")
        return updated

    async def delete(self, actor: AuthContext, squad_id: int) -> None:
        """Delete a squad. Its players keep the dangling squad_team_id."""
        squad = await self.load(squad_id)
        authorize(actor, Action.SQUAD_DELETE, squad)
        await self._delete(squad_id)
        logger.info(f"Squad {squad_id} deleted by user {actor.user_id}")

    # -------------------------------------------------------------------------
    # Roster
    # -------------------------------------------------------------------------

    async def list_players(self, actor: AuthContext, squad_id: int) -> list[Player]:
        squad = await self.load(squad_id)
        authorize(actor, Action.SQUAD_READ, squad)
        return await self.players.list(squad_team_id=squad_id)

    async def add_player(self, actor: AuthContext, squad_id: int, player_id: int) -> Player:
        """
        Put a player on the squad.

        Taking a player from another squad also needs rights on that squad.
        """
        squad = await self.load(squad_id)
        player = await self.players.load(player_id)
        authorize(actor, Action.SQUAD_ROSTER_ADD, squad)

        if player.squad_team_id == squad_id:
            return player
        if player.squad_team_id is not None:
            previous = await self.find(player.squad_team_id)
            if previous is not None:
                authorize(actor, Action.SQUAD_ROSTER_REMOVE, previous)

        player = await self.players.set_squad(player_id, squad_id, SquadRole.PLAYER)
        logger.info(f"Player {player_id} added to squad {squad_id} by user {actor.user_id}")
        return player

    async def remove_player(self, actor: AuthContext, squad_id: int, player_id: int) -> Player:
        squad = await self.load(squad_id)
        player = await self.players.load(player_id)
        if player.squad_team_id != squad_id:
            raise NotFound("Player not in squad")
        authorize(actor, Action.SQUAD_ROSTER_REMOVE, squad)

        player = await self.players.set_squad(player_id, None, SquadRole.PLAYER)
        logger.info(f"Player {player_id} removed from squad {squad_id} by user {actor.user_id}")
        return player

    async def set_player_role(
        self,
        actor: AuthContext,
        squad_id: int,
        player_id: int,
        role: SquadRole,
    ) -> Player:
        """Designate captain / team director / player. President only."""
        squad = await self.load(squad_id)
        player = await self.players.load(player_id)
        if player.squad_team_id != squad_id:
            raise NotFound("Player not in squad")
        authorize(actor, Action.SQUAD_ROLE_ASSIGN, squad)
        return await self.players.set_squad_role(player_id, role)

    # -------------------------------------------------------------------------
    # Reference checks
    # -------------------------------------------------------------------------

    async def _check_association(self, team_id: Any) -> None:
        if team_id is None or not await self.storage.get(Collections.TEAMS, team_id):
            raise ValidationError(f"Unknown team {team_id}")

    async def _check_coach(self, user_id: int) -> None:
        user = await self.storage.get(Collections.USERS, user_id)
        if not user:
            raise ValidationError(f"Unknown user {user_id}")
        if user.get("role") != Role.COACH.value:
            raise ValidationError(f"User {user_id} is not a coach")
