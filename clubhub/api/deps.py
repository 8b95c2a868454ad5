"""
Service container and FastAPI dependencies.

Services are built once at startup and hung off ``app.state.services``.
Route handlers reach them through ``get_services``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from clubhub.auth.credentials import CredentialService
from clubhub.auth.jwt import TokenService
from clubhub.config import Settings
from clubhub.services import (
    ChatService,
    ClubService,
    GameService,
    NewsService,
    PaymentService,
    PlayerService,
    SquadTeamService,
    TeamService,
    UserService,
)
from clubhub.storage import MetadataStorage


@dataclass
class ClubServices:
    """Application services - initialized at startup."""

    storage: MetadataStorage
    credentials: CredentialService
    users: UserService
    clubs: ClubService
    teams: TeamService
    players: PlayerService
    squads: SquadTeamService
    games: GameService
    news: NewsService
    payments: PaymentService
    chat: ChatService


def build_services(settings: Settings, storage: MetadataStorage) -> ClubServices:
    """
    Wire every service to the given storage.

    Raises ConfigurationError when no usable signing key is configured.
    """
    tokens = TokenService.from_settings(settings)
    players = PlayerService(storage)
    return ClubServices(
        storage=storage,
        credentials=CredentialService(
            storage,
            tokens,
            allow_role_on_register=settings.allow_role_on_register,
        ),
        users=UserService(storage),
        clubs=ClubService(storage),
        teams=TeamService(storage),
        players=players,
        squads=SquadTeamService(storage, players),
        games=GameService(storage),
        news=NewsService(storage),
        payments=PaymentService(storage),
        chat=ChatService(storage, history_limit=settings.chat_history_limit),
    )


def get_services(request: Request) -> ClubServices:
    return request.app.state.services
