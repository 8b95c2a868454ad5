"""User administration: listing accounts and changing roles."""

from __future__ import annotations

import logging

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import Forbidden
from clubhub.core.models import ProfileUpdate, Role, UserInDB
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)


class UserService(ResourceService[UserInDB]):
    collection = Collections.USERS
    model = UserInDB
    label = "User"

    async def list_users(self, actor: AuthContext) -> list[UserInDB]:
        authorize(actor, Action.USER_LIST)
        return await self._query()

    async def set_role(self, actor: AuthContext, user_id: int, role: Role) -> UserInDB:
        """
        Change a user's club role.

        Board and president may do this; granting or revoking the
        president role is reserved to a president. Tokens already issued
        keep the old role until they expire.
        """
        user = await self.load(user_id)
        authorize(actor, Action.USER_ROLE_UPDATE, user)
        if Role.PRESIDENT in (role, user.role) and actor.role != Role.PRESIDENT:
            raise Forbidden()

        updated = await self._update(user_id, {"role": role})
        logger.info(f"User {user_id} role {user.role.value} -> {role.value} by user {actor.user_id}")
        return updated

    async def update_profile(self, actor: AuthContext, data: ProfileUpdate) -> UserInDB:
        """A user edits their own display name and avatar."""
        user = await self.load(actor.user_id)
        return await self._update(user.id, data.model_dump(exclude_unset=True))
