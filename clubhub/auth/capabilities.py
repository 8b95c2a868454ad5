"""
Actions, roles, and channel gates.

This defines WHAT each role can do, not HOW we check it.
The actual checking happens in policies.py.
"""

from __future__ import annotations

from enum import Enum

from clubhub.core.models import Channel, Role


class Action(str, Enum):
    """
    Everything the policy can be asked about.

    Most actions are granted by role alone. A few depend on the resource
    (squad coach assignment, chat channel, news publication state).
    """

    # Teams
    TEAM_READ = "team.read"
    TEAM_CREATE = "team.create"
    TEAM_UPDATE = "team.update"
    TEAM_DELETE = "team.delete"

    # Players
    PLAYER_READ = "player.read"
    PLAYER_CREATE = "player.create"
    PLAYER_UPDATE = "player.update"
    PLAYER_DELETE = "player.delete"

    # Games
    GAME_READ = "game.read"
    GAME_CREATE = "game.create"
    GAME_UPDATE = "game.update"
    GAME_UPDATE_STATUS = "game.update_status"
    GAME_DELETE = "game.delete"

    # News
    NEWS_READ = "news.read"
    NEWS_CREATE = "news.create"
    NEWS_UPDATE = "news.update"
    NEWS_DELETE = "news.delete"

    # Payments
    PAYMENT_READ = "payment.read"
    PAYMENT_CREATE = "payment.create"
    PAYMENT_UPDATE = "payment.update"
    PAYMENT_DELETE = "payment.delete"

    # Squad teams
    SQUAD_READ = "squad.read"
    SQUAD_CREATE = "squad.create"
    SQUAD_UPDATE = "squad.update"
    SQUAD_ASSIGN = "squad.assign"  # coach / association reassignment
    SQUAD_DELETE = "squad.delete"
    SQUAD_ROSTER_ADD = "squad.roster_add"
    SQUAD_ROSTER_REMOVE = "squad.roster_remove"
    SQUAD_ROLE_ASSIGN = "squad.role_assign"

    # Chat
    MESSAGE_READ = "message.read"
    MESSAGE_POST = "message.post"
    MESSAGE_DELETE = "message.delete"

    # Clubs
    CLUB_READ = "club.read"
    CLUB_CREATE = "club.create"
    CLUB_UPDATE = "club.update"
    MEMBERSHIP_MANAGE = "membership.manage"

    # Users
    USER_LIST = "user.list"
    USER_ROLE_UPDATE = "user.role_update"


# =============================================================================
# Role Mappings
# =============================================================================


# Allowed for anyone, logged in or not
PUBLIC_ACTIONS: set[Action] = {
    Action.TEAM_READ,
    Action.PLAYER_READ,
    Action.GAME_READ,
    Action.NEWS_READ,  # published items only, see policies
}

# Allowed for every authenticated role
AUTHENTICATED_ACTIONS: set[Action] = {
    Action.PLAYER_UPDATE,
    Action.GAME_UPDATE,
    Action.NEWS_CREATE,
    Action.NEWS_UPDATE,
    Action.NEWS_DELETE,
    Action.SQUAD_READ,
    Action.CLUB_READ,
}

# board and president
BOARD_ACTIONS: set[Action] = {
    Action.TEAM_CREATE,
    Action.TEAM_UPDATE,
    Action.TEAM_DELETE,
    Action.PLAYER_CREATE,
    Action.PLAYER_DELETE,
    Action.GAME_CREATE,
    Action.GAME_UPDATE_STATUS,
    Action.GAME_DELETE,
    Action.PAYMENT_READ,
    Action.PAYMENT_CREATE,
    Action.PAYMENT_UPDATE,
    Action.PAYMENT_DELETE,
    Action.SQUAD_CREATE,
    Action.SQUAD_UPDATE,
    Action.SQUAD_ASSIGN,
    Action.SQUAD_DELETE,
    Action.SQUAD_ROSTER_ADD,
    Action.SQUAD_ROSTER_REMOVE,
    Action.MESSAGE_DELETE,
    Action.CLUB_CREATE,
    Action.CLUB_UPDATE,
    Action.MEMBERSHIP_MANAGE,
    Action.USER_LIST,
    Action.USER_ROLE_UPDATE,
}

PRESIDENT_ONLY_ACTIONS: set[Action] = {
    Action.SQUAD_ROLE_ASSIGN,
}

# What each role is granted unconditionally
ROLE_CAPABILITIES: dict[Role, set[Action]] = {
    Role.PRESIDENT: PUBLIC_ACTIONS | AUTHENTICATED_ACTIONS | BOARD_ACTIONS | PRESIDENT_ONLY_ACTIONS,
    Role.BOARD: PUBLIC_ACTIONS | AUTHENTICATED_ACTIONS | BOARD_ACTIONS,
    Role.COACH: PUBLIC_ACTIONS | AUTHENTICATED_ACTIONS,
    Role.PLAYER: PUBLIC_ACTIONS | AUTHENTICATED_ACTIONS,
}

# Granted to a coach only on the squad they are assigned to
COACH_SQUAD_ACTIONS: set[Action] = {
    Action.SQUAD_UPDATE,
    Action.SQUAD_ROSTER_ADD,
    Action.SQUAD_ROSTER_REMOVE,
}

ADMIN_ROLES: set[Role] = {Role.PRESIDENT, Role.BOARD}


# =============================================================================
# Channel Gates
# =============================================================================


CHANNEL_READERS: dict[Channel, set[Role]] = {
    Channel.GERAL: {Role.PRESIDENT, Role.BOARD, Role.COACH, Role.PLAYER},
    Channel.TECNICOS: {Role.PRESIDENT, Role.BOARD, Role.COACH},
    Channel.DIRETORIA: {Role.PRESIDENT, Role.BOARD},
}

# Posting follows the same gate as reading
CHANNEL_WRITERS: dict[Channel, set[Role]] = CHANNEL_READERS


def get_capabilities(role: Role | None) -> set[Action]:
    """Unconditional actions for a role (anonymous gets public ones)."""
    if role is None:
        return set(PUBLIC_ACTIONS)
    return set(ROLE_CAPABILITIES.get(role, PUBLIC_ACTIONS))


def is_admin(role: Role | None) -> bool:
    return role in ADMIN_ROLES
