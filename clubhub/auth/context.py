"""
Auth context - the "who is asking" for each request.

This is the lightweight object passed from route handlers into services.
It is built from a decoded session token, so the role it carries is the
role at token issuance, not a live lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clubhub.auth.capabilities import Action, get_capabilities, is_admin
from clubhub.core.models import Role


@dataclass
class AuthContext:
    """
    Actor identity for a request.

    Usage in services:
        authorize(ctx, Action.TEAM_CREATE)
        if ctx.is_admin:
            ...
    """

    # Who
    user_id: int | None = None
    email: str | None = None
    role: Role | None = None

    # Extra context (token id, issue time)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        """Is there a logged-in user?"""
        return self.user_id is not None

    @property
    def is_anonymous(self) -> bool:
        """Is this an anonymous request?"""
        return self.user_id is None

    @property
    def is_admin(self) -> bool:
        """President or board."""
        return self.is_authenticated and is_admin(self.role)

    @property
    def capabilities(self) -> set[Action]:
        """Actions this actor may perform regardless of the resource."""
        if self.is_anonymous:
            return get_capabilities(None)
        return get_capabilities(self.role)

    def can(self, action: Action | str, resource: Any | None = None) -> bool:
        """
        Check if the actor may perform an action.

        Usage:
            if ctx.can("payment.read"):
                ...
            if ctx.can(Action.SQUAD_ROSTER_ADD, squad):
                ...
        """
        from clubhub.auth.policies import can_perform

        if isinstance(action, str) and not isinstance(action, Action):
            try:
                action = Action(action)
            except ValueError:
                return False
        return can_perform(self, action, resource).allowed

    @classmethod
    def anonymous(cls) -> AuthContext:
        """Create an anonymous context (no user)."""
        return cls()
