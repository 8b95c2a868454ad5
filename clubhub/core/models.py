"""
Core data models for the club platform.

Stored entities (User, Club, Team, Player, SquadTeam, Game, Payment, News,
Message, Membership) plus the request payloads that create and update them.

Over HTTP all fields are camelCase (``teamId``, ``fullName``); snake_case is
accepted on input as well.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from clubhub.core.utils import utc_now


MESSAGE_MAX_LENGTH = 1000


class ApiModel(BaseModel):
    """Base for every model that crosses the HTTP boundary."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# =============================================================================
# Enums
# =============================================================================


class Role(str, Enum):
    """Club-wide role of a user account."""

    PRESIDENT = "president"
    BOARD = "board"        # diretoria
    COACH = "coach"        # tecnico
    PLAYER = "player"


class SquadRole(str, Enum):
    """Designation of a player inside a squad."""

    CAPTAIN = "captain"
    TEAM_DIRECTOR = "team_director"
    PLAYER = "player"


class GameStatus(str, Enum):
    """Lifecycle of a fixture. Only moves forward."""

    SCHEDULED = "scheduled"
    LIVE = "live"
    FINISHED = "finished"


class PaymentStatus(str, Enum):
    """Status of a monthly dues entry."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    PIX = "pix"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"


class Channel(str, Enum):
    """Chat partitions, each with its own read/write gate."""

    GERAL = "geral"
    TECNICOS = "tecnicos"
    DIRETORIA = "diretoria"


# =============================================================================
# Users
# =============================================================================


class UserCreate(ApiModel):
    """User registration data."""

    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str | None = Field(default=None, max_length=100)
    role: Role | None = None


class UserInDB(ApiModel):
    """User stored in database."""

    id: int
    email: str
    password_hash: str
    full_name: str | None = None
    role: Role = Role.PLAYER
    avatar: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class UserResponse(ApiModel):
    """User data returned to client (no credential hash)."""

    id: int
    email: str
    full_name: str | None = None
    role: Role
    avatar: str | None = None
    created_at: datetime

    @classmethod
    def from_db(cls, user: UserInDB) -> UserResponse:
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))


class ProfileUpdate(ApiModel):
    full_name: str | None = Field(default=None, max_length=100)
    avatar: str | None = None


class RoleUpdate(ApiModel):
    role: Role


# =============================================================================
# Clubs
# =============================================================================


class Club(ApiModel):
    id: int
    name: str
    description: str | None = None
    created_by: int | None = None
    created_at: datetime = Field(default_factory=utc_now)


class ClubCreate(ApiModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class ClubUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None


class Membership(ApiModel):
    id: int
    user_id: int
    club_id: int
    created_at: datetime = Field(default_factory=utc_now)


class MembershipCreate(ApiModel):
    user_id: int


# =============================================================================
# Teams
# =============================================================================


class Team(ApiModel):
    """Top-level club representation, also used for fixtures."""

    id: int
    name: str
    logo: str | None = None
    founded: date | None = None
    colors: str | None = None
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class TeamCreate(ApiModel):
    name: str = Field(min_length=1)
    logo: str | None = None
    founded: date | None = None
    colors: str | None = None


class TeamUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1)
    logo: str | None = None
    founded: date | None = None
    colors: str | None = None
    wins: int | None = Field(default=None, ge=0)
    draws: int | None = Field(default=None, ge=0)
    losses: int | None = Field(default=None, ge=0)
    goals_for: int | None = Field(default=None, ge=0)
    goals_against: int | None = Field(default=None, ge=0)


# =============================================================================
# Players
# =============================================================================


class Player(ApiModel):
    """
    A person on the roster. May or may not have a login (user_id).

    Squad membership (squad_team_id, squad_role) is only changed through
    the squad roster operations.
    """

    id: int
    user_id: int | None = None
    team_id: int | None = None
    squad_team_id: int | None = None
    squad_role: SquadRole = SquadRole.PLAYER
    name: str
    position: str
    jersey_number: int | None = None
    photo: str | None = None
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    games_played: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class PlayerCreate(ApiModel):
    user_id: int | None = None
    team_id: int | None = None
    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    jersey_number: int | None = Field(default=None, ge=0, le=99)
    photo: str | None = None


class PlayerUpdate(ApiModel):
    user_id: int | None = None
    team_id: int | None = None
    name: str | None = Field(default=None, min_length=1)
    position: str | None = Field(default=None, min_length=1)
    jersey_number: int | None = Field(default=None, ge=0, le=99)
    photo: str | None = None
    goals: int | None = Field(default=None, ge=0)
    assists: int | None = Field(default=None, ge=0)
    yellow_cards: int | None = Field(default=None, ge=0)
    red_cards: int | None = Field(default=None, ge=0)
    games_played: int | None = Field(default=None, ge=0)


# =============================================================================
# Squad teams
# =============================================================================


class SquadTeam(ApiModel):
    """Age/category sub-roster, e.g. "Sub-17"."""

    id: int
    name: str
    category: str
    association_id: int
    coach_id: int | None = None
    created_by: int | None = None
    created_at: datetime = Field(default_factory=utc_now)


class SquadTeamCreate(ApiModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    association_id: int
    coach_id: int | None = None


class SquadTeamUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    association_id: int | None = None
    coach_id: int | None = None


class SquadRoleUpdate(ApiModel):
    role: SquadRole


# =============================================================================
# Games
# =============================================================================


class Game(ApiModel):
    id: int
    home_team_id: int
    away_team_id: int
    home_score: int | None = None
    away_score: int | None = None
    game_date: datetime
    location: str | None = None
    status: GameStatus = GameStatus.SCHEDULED
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _distinct_teams(self) -> Game:
        if self.home_team_id == self.away_team_id:
            raise ValueError("homeTeamId and awayTeamId must differ")
        return self


class GameCreate(ApiModel):
    home_team_id: int
    away_team_id: int
    game_date: datetime
    location: str | None = None

    @model_validator(mode="after")
    def _distinct_teams(self) -> GameCreate:
        if self.home_team_id == self.away_team_id:
            raise ValueError("homeTeamId and awayTeamId must differ")
        return self


class GameUpdate(ApiModel):
    home_team_id: int | None = None
    away_team_id: int | None = None
    home_score: int | None = Field(default=None, ge=0)
    away_score: int | None = Field(default=None, ge=0)
    game_date: datetime | None = None
    location: str | None = None
    status: GameStatus | None = None


# =============================================================================
# Payments
# =============================================================================


class Payment(ApiModel):
    """Monthly dues entry. Amount is in minor currency units."""

    id: int
    player_id: int
    amount: int
    due_date: date
    paid_date: date | None = None
    status: PaymentStatus = PaymentStatus.PENDING
    month: int
    year: int
    method: PaymentMethod | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class PaymentCreate(ApiModel):
    player_id: int
    amount: int = Field(ge=0)
    due_date: date
    paid_date: date | None = None
    status: PaymentStatus | None = None
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000, le=2100)
    method: PaymentMethod | None = None
    notes: str | None = None


class PaymentUpdate(ApiModel):
    amount: int | None = Field(default=None, ge=0)
    due_date: date | None = None
    paid_date: date | None = None
    status: PaymentStatus | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=2000, le=2100)
    method: PaymentMethod | None = None
    notes: str | None = None


class MarkPaid(ApiModel):
    paid_date: date | None = None
    method: PaymentMethod | None = None


# =============================================================================
# News
# =============================================================================


class News(ApiModel):
    id: int
    title: str
    content: str
    image: str | None = None
    author_id: int | None = None
    published: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class NewsCreate(ApiModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    image: str | None = None
    published: bool = False


class NewsUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    image: str | None = None
    published: bool | None = None


# =============================================================================
# Chat
# =============================================================================


class Message(ApiModel):
    """Append-only chat entry."""

    id: int
    user_id: int
    club_id: int
    channel: Channel
    content: str
    author_name: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class MessageCreate(ApiModel):
    club_id: int
    channel: Channel
    content: str

    @field_validator("content")
    @classmethod
    def _bounded_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("content must not be empty")
        if len(value) > MESSAGE_MAX_LENGTH:
            raise ValueError(f"content must be at most {MESSAGE_MAX_LENGTH} characters")
        return value


# =============================================================================
# Generic responses
# =============================================================================


class MessageResponse(ApiModel):
    message: str
