"""
Shared fixtures.

Everything runs against the in-memory store with a fixed signing key.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from clubhub.api.app import create_app
from clubhub.api.deps import build_services
from clubhub.auth.context import AuthContext
from clubhub.config import Settings
from clubhub.core.models import Role, TeamCreate, UserCreate
from clubhub.storage import InMemoryMetadataStorage


TEST_SECRET = "test-secret-key-for-the-suite"


@pytest.fixture
def settings():
    return Settings(_env_file=None, jwt_secret_key=TEST_SECRET, environment="test")


@pytest.fixture
def storage():
    return InMemoryMetadataStorage()


@pytest_asyncio.fixture
async def services(settings, storage):
    """Fully wired services with the default club in place."""
    services = build_services(settings, storage)
    await services.clubs.ensure_default_club(settings.default_club_name)
    return services


async def make_actor(services, role: Role, email: str | None = None) -> AuthContext:
    """Register a user with ``role`` and return their context."""
    email = email or f"{role.value}-{len(await services.storage.query('users')) + 1}@club.com"
    user = await services.credentials.register(
        UserCreate(email=email, password="secret123", full_name=role.value.title(), role=role)
    )
    return AuthContext(user_id=user.id, email=user.email, role=user.role)


@pytest_asyncio.fixture
async def president(services):
    return await make_actor(services, Role.PRESIDENT)


@pytest_asyncio.fixture
async def board(services):
    return await make_actor(services, Role.BOARD)


@pytest_asyncio.fixture
async def coach(services):
    return await make_actor(services, Role.COACH)


@pytest_asyncio.fixture
async def player_user(services):
    return await make_actor(services, Role.PLAYER)


@pytest_asyncio.fixture
async def team(services, president):
    return await services.teams.create(president, TeamCreate(name="Clube Atletico"))


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def client(settings):
    """Test client with the app lifespan running."""
    with TestClient(create_app(settings)) as client:
        yield client


def register_and_login(client, email: str, role: str, password: str = "secret123") -> dict:
    """Register a user over HTTP and return auth headers plus the user body."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "fullName": email.split("@")[0], "role": role},
    )
    assert response.status_code == 200, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    return {
        "headers": {"Authorization": f"Bearer {body['token']}"},
        "user": body["user"],
    }
