"""HTTP routers, all mounted under ``/api``."""

from clubhub.api.routes.chat import router as chat_router
from clubhub.api.routes.clubs import router as clubs_router
from clubhub.api.routes.games import router as games_router
from clubhub.api.routes.news import router as news_router
from clubhub.api.routes.payments import router as payments_router
from clubhub.api.routes.players import router as players_router
from clubhub.api.routes.squads import router as squads_router
from clubhub.api.routes.teams import router as teams_router
from clubhub.api.routes.users import router as users_router

ROUTERS = [
    users_router,
    clubs_router,
    teams_router,
    players_router,
    squads_router,
    games_router,
    news_router,
    payments_router,
    chat_router,
]

__all__ = ["ROUTERS"]
