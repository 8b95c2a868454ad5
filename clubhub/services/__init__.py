"""
Resource services.

Each service owns one collection and consults the authorization policy
before every mutation.
"""

from clubhub.services.base import ResourceService
from clubhub.services.chat import ChatService
from clubhub.services.clubs import ClubService
from clubhub.services.games import GameService
from clubhub.services.news import NewsService
from clubhub.services.payments import PaymentService
from clubhub.services.players import PlayerService
from clubhub.services.squads import SquadTeamService
from clubhub.services.teams import TeamService
from clubhub.services.users import UserService

__all__ = [
    "ResourceService",
    "ChatService",
    "ClubService",
    "GameService",
    "NewsService",
    "PaymentService",
    "PlayerService",
    "SquadTeamService",
    "TeamService",
    "UserService",
]
