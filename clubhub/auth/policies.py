"""
Policies - the single place where access decisions are made.

Two layers:
- ``can_perform(actor, action, resource)`` is a pure, synchronous decision
  over already-loaded data. Services call ``authorize`` (which raises)
  before every mutation or sensitive read.
- FastAPI dependencies (``optional_auth``, ``require_auth``, ``require``)
  turn the bearer token into an AuthContext. Missing credentials on a
  protected route fail with 401 before the policy is ever consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from clubhub.auth.capabilities import (
    Action,
    CHANNEL_READERS,
    CHANNEL_WRITERS,
    COACH_SQUAD_ACTIONS,
    PUBLIC_ACTIONS,
    get_capabilities,
)
from clubhub.auth.context import AuthContext
from clubhub.core.errors import AuthenticationRequired, Forbidden
from clubhub.core.models import Channel, Message, News, Role, SquadTeam


# =============================================================================
# Decision
# =============================================================================


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check."""

    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def _deny(reason: str) -> Decision:
    return Decision(False, reason)


# =============================================================================
# Core decision function
# =============================================================================


def can_perform(
    actor: AuthContext,
    action: Action,
    resource: Any | None = None,
) -> Decision:
    """
    Decide whether ``actor`` may perform ``action`` on ``resource``.

    Resource-sensitive rules:
    - news reads: unpublished items need an authenticated actor
    - chat read/post: gated by channel and role
    - squad update/roster: a coach qualifies only on the squad whose
      coach_id is their own id
    """
    # News visibility depends on publication state
    if action == Action.NEWS_READ:
        if isinstance(resource, News) and not resource.published and actor.is_anonymous:
            return _deny("Authentication required")
        return ALLOW

    if action in PUBLIC_ACTIONS:
        return ALLOW

    if actor.is_anonymous or actor.role is None:
        return _deny("Authentication required")

    # Channel gates
    if action in (Action.MESSAGE_READ, Action.MESSAGE_POST):
        channel = _channel_of(resource)
        if channel is None:
            return _deny("Channel required")
        gate = CHANNEL_READERS if action == Action.MESSAGE_READ else CHANNEL_WRITERS
        if actor.role in gate[channel]:
            return ALLOW
        return _deny(f"No access to channel '{channel.value}'")

    if action in get_capabilities(actor.role):
        return ALLOW

    # Coach scoped to their own squad
    if (
        action in COACH_SQUAD_ACTIONS
        and actor.role == Role.COACH
        and isinstance(resource, SquadTeam)
        and resource.coach_id is not None
        and resource.coach_id == actor.user_id
    ):
        return ALLOW

    return _deny("Forbidden")


def _channel_of(resource: Any) -> Channel | None:
    if isinstance(resource, Channel):
        return resource
    if isinstance(resource, Message):
        return resource.channel
    if isinstance(resource, str):
        try:
            return Channel(resource)
        except ValueError:
            return None
    return None


def authorize(
    actor: AuthContext,
    action: Action,
    resource: Any | None = None,
) -> None:
    """
    Raise unless the actor may perform the action.

    Anonymous actors get AuthenticationRequired, everyone else a generic
    Forbidden that does not reveal anything about the resource.
    """
    decision = can_perform(actor, action, resource)
    if decision.allowed:
        return
    if actor.is_anonymous:
        raise AuthenticationRequired()
    raise Forbidden()


# =============================================================================
# FastAPI dependencies
# =============================================================================


# Optional bearer (doesn't fail if no token)
optional_bearer = HTTPBearer(auto_error=False)


async def optional_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> AuthContext:
    """
    Resolve the actor for a request.

    No token → anonymous. A token that is present but fails verification
    is rejected outright, never downgraded.
    """
    if not credentials:
        return AuthContext.anonymous()

    credential_service = request.app.state.services.credentials
    ctx = credential_service.verify(credentials.credentials)

    from clubhub.integrations.sentry import set_user
    set_user(ctx.user_id, ctx.email, role=ctx.role.value if ctx.role else None)
    return ctx


async def require_auth(ctx: AuthContext = Depends(optional_auth)) -> AuthContext:
    """Require a logged-in actor, no specific permission."""
    if ctx.is_anonymous:
        raise AuthenticationRequired()
    return ctx


def require(*actions: Action) -> Callable:
    """
    Require role-level permission for every listed action.

    Only for actions that do not depend on a resource; resource-sensitive
    checks happen in the services after the entity is loaded.

    Usage:
        @router.get("/payments")
        async def list_payments(ctx: AuthContext = Depends(require(Action.PAYMENT_READ))):
            ...
    """

    async def dependency(ctx: AuthContext = Depends(require_auth)) -> AuthContext:
        for action in actions:
            authorize(ctx, action)
        return ctx

    return dependency
