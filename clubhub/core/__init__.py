"""
Core module - fundamental data models and infrastructure.

This module contains:
- models: Domain entities and request bodies (User, Team, Player, Payment...)
- errors: The error taxonomy every client-visible failure belongs to
- utils: Shared utility functions
"""

from clubhub.core.errors import (
    ClubError,
    ValidationError,
    AuthenticationRequired,
    Forbidden,
    NotFound,
    Conflict,
    DuplicateEmail,
    InternalError,
    ConfigurationError,
)
from clubhub.core.models import (
    Role,
    SquadRole,
    GameStatus,
    PaymentStatus,
    PaymentMethod,
    Channel,
    UserInDB,
    Club,
    Membership,
    Team,
    Player,
    SquadTeam,
    Game,
    Payment,
    News,
    Message,
)

__all__ = [
    # Errors
    "ClubError",
    "ValidationError",
    "AuthenticationRequired",
    "Forbidden",
    "NotFound",
    "Conflict",
    "DuplicateEmail",
    "InternalError",
    "ConfigurationError",
    # Enums
    "Role",
    "SquadRole",
    "GameStatus",
    "PaymentStatus",
    "PaymentMethod",
    "Channel",
    # Entities
    "UserInDB",
    "Club",
    "Membership",
    "Team",
    "Player",
    "SquadTeam",
    "Game",
    "Payment",
    "News",
    "Message",
]
