"""Clubs and memberships. The app runs around a single default club."""

from __future__ import annotations

import logging

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import Conflict, NotFound, ValidationError
from clubhub.core.models import Club, ClubCreate, ClubUpdate, Membership, UserInDB
from clubhub.core.utils import utc_now
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)

DEFAULT_CLUB_ID = 1


class ClubService(ResourceService[Club]):
    collection = Collections.CLUBS
    model = Club
    label = "Club"

    async def ensure_default_club(self, name: str) -> Club:
        """Create the default club on an empty store."""
        clubs = await self._query()
        if clubs:
            return clubs[0]
        club = await self._insert({
            "name": name,
            "description": None,
            "created_by": None,
            "created_at": utc_now(),
        })
        logger.info(f"Created default club {club.id} '{club.name}'")
        return club

    async def list(self, actor: AuthContext) -> list[Club]:
        authorize(actor, Action.CLUB_READ)
        return await self._query()

    async def get(self, actor: AuthContext, club_id: int) -> Club:
        club = await self.load(club_id)
        authorize(actor, Action.CLUB_READ, club)
        return club

    async def create(self, actor: AuthContext, data: ClubCreate) -> Club:
        authorize(actor, Action.CLUB_CREATE)
        club = await self._insert({
            **data.model_dump(),
            "created_by": actor.user_id,
            "created_at": utc_now(),
        })
        logger.info(f"Club {club.id} created by user {actor.user_id}")
        return club

    async def update(self, actor: AuthContext, club_id: int, data: ClubUpdate) -> Club:
        club = await self.load(club_id)
        authorize(actor, Action.CLUB_UPDATE, club)
        updates = data.model_dump(exclude_unset=True)
        self._merged(club, updates)
        return await self._update(club_id, updates)

    # -------------------------------------------------------------------------
    # Memberships
    # -------------------------------------------------------------------------

    async def list_members(self, actor: AuthContext, club_id: int) -> list[Membership]:
        club = await self.load(club_id)
        authorize(actor, Action.CLUB_READ, club)
        records = await self.storage.query(Collections.MEMBERSHIPS, {"club_id": club_id})
        return [Membership.model_validate(r) for r in records]

    async def add_member(self, actor: AuthContext, club_id: int, user_id: int) -> Membership:
        club = await self.load(club_id)
        authorize(actor, Action.MEMBERSHIP_MANAGE, club)
        if not await self.storage.get(Collections.USERS, user_id):
            raise ValidationError(f"Unknown user {user_id}")
        if await self._membership(club_id, user_id):
            raise Conflict("User is already a member")
        return await self._add_membership(club_id, user_id)

    async def remove_member(self, actor: AuthContext, club_id: int, user_id: int) -> None:
        club = await self.load(club_id)
        membership = await self._membership(club_id, user_id)
        if membership is None:
            raise NotFound("Membership not found")
        authorize(actor, Action.MEMBERSHIP_MANAGE, club)
        await self.storage.delete(Collections.MEMBERSHIPS, membership.id)

    async def join_default_club(self, user: UserInDB) -> Membership | None:
        """Enrol a freshly registered user in the default club, if it exists."""
        if not await self.exists(DEFAULT_CLUB_ID):
            return None
        existing = await self._membership(DEFAULT_CLUB_ID, user.id)
        if existing:
            return existing
        return await self._add_membership(DEFAULT_CLUB_ID, user.id)

    async def _membership(self, club_id: int, user_id: int) -> Membership | None:
        record = await self.storage.find_one(
            Collections.MEMBERSHIPS, {"club_id": club_id, "user_id": user_id}
        )
        return Membership.model_validate(record) if record else None

    async def _add_membership(self, club_id: int, user_id: int) -> Membership:
        record = await self.storage.insert(Collections.MEMBERSHIPS, {
            "club_id": club_id,
            "user_id": user_id,
            "created_at": utc_now().isoformat(),
        })
        return Membership.model_validate(record)
