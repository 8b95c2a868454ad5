"""
End-to-end tests through the HTTP API.

Checks status codes, the ``{"error", "kind"}`` body, and camelCase fields.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from clubhub.api.app import create_app
from clubhub.config import Settings
from clubhub.core.errors import ConfigurationError
from clubhub.core.utils import utc_now

from conftest import register_and_login


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def president(client):
    return register_and_login(client, "presidente@club.com", "president")


@pytest.fixture
def board(client):
    return register_and_login(client, "diretoria@club.com", "board")


@pytest.fixture
def coach_x(client):
    return register_and_login(client, "coach.x@club.com", "coach")


@pytest.fixture
def coach_y(client):
    return register_and_login(client, "coach.y@club.com", "coach")


@pytest.fixture
def player(client):
    return register_and_login(client, "jogador@club.com", "player")


@pytest.fixture
def team(client, board):
    response = client.post("/api/teams", json={"name": "Clube Atletico"}, headers=board["headers"])
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def roster_player(client, board, team):
    response = client.post(
        "/api/players",
        json={"name": "Rui", "position": "GK", "teamId": team["id"], "jerseyNumber": 1},
        headers=board["headers"],
    )
    assert response.status_code == 200
    return response.json()


# =============================================================================
# Basics
# =============================================================================


class TestBasics:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_startup_fails_without_signing_key(self):
        app = create_app(Settings(_env_file=None, jwt_secret_key="", dev_mode=False))
        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

    def test_dev_mode_starts_without_key(self):
        app = create_app(Settings(_env_file=None, jwt_secret_key="", dev_mode=True))
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    def test_validation_error_shape(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "x"})
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
        assert response.json()["error"]


# =============================================================================
# Auth
# =============================================================================


class TestAuth:
    def test_register_login_me(self, client, player):
        me = client.get("/api/auth/me", headers=player["headers"])
        assert me.status_code == 200
        body = me.json()
        assert body["email"] == "jogador@club.com"
        assert body["role"] == "player"
        assert "passwordHash" not in body
        assert "createdAt" in body

    def test_login_response(self, client, player):
        response = client.post(
            "/api/auth/login", json={"email": "jogador@club.com", "password": "secret123"}
        )
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["expiresIn"] == 7 * 24 * 60 * 60

    def test_wrong_password(self, client, player):
        response = client.post(
            "/api/auth/login", json={"email": "jogador@club.com", "password": "wrong-pass"}
        )
        assert response.status_code == 401
        assert response.json()["kind"] == "authentication_required"

    def test_duplicate_registration(self, client, player):
        response = client.post(
            "/api/auth/register",
            json={"email": "jogador@club.com", "password": "another-pass"},
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "conflict"

        # The original password still works
        login = client.post(
            "/api/auth/login", json={"email": "jogador@club.com", "password": "secret123"}
        )
        assert login.status_code == 200

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_update_profile(self, client, player):
        response = client.patch(
            "/api/auth/me", json={"fullName": "Joao Silva"}, headers=player["headers"]
        )
        assert response.status_code == 200
        assert response.json()["fullName"] == "Joao Silva"

    def test_registration_joins_default_club(self, client, player):
        members = client.get("/api/clubs/1/members", headers=player["headers"])
        assert members.status_code == 200
        assert player["user"]["id"] in [m["userId"] for m in members.json()]

    def test_logout(self, client, player):
        assert client.post("/api/auth/logout", headers=player["headers"]).status_code == 200


# =============================================================================
# Error ordering
# =============================================================================


class TestErrorOrdering:
    def test_public_read_without_token(self, client, team):
        assert client.get("/api/teams").status_code == 200

    def test_invalid_token_rejected_on_public_route(self, client, team):
        response = client.get("/api/teams", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_anonymous_write_is_401(self, client):
        response = client.post("/api/teams", json={"name": "x"})
        assert response.status_code == 401

    def test_role_denied_is_403(self, client, player):
        response = client.post("/api/teams", json={"name": "x"}, headers=player["headers"])
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden", "kind": "forbidden"}

    def test_missing_entity_is_404_before_403(self, client, player):
        response = client.delete("/api/teams/999", headers=player["headers"])
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_payments_hidden_from_players(self, client, player):
        response = client.get("/api/payments", headers=player["headers"])
        assert response.status_code == 403


# =============================================================================
# Scenarios
# =============================================================================


class TestSquadScenarios:
    def test_unassigned_coach_forbidden_then_assigned_coach_allowed(
        self, client, president, board, coach_x, coach_y, team, roster_player
    ):
        created = client.post(
            "/api/squad-teams",
            json={"name": "Sub-17", "category": "Sub-17", "associationId": team["id"]},
            headers=president["headers"],
        )
        assert created.status_code == 200
        squad = created.json()
        assert squad["coachId"] is None

        players = client.get(f"/api/squad-teams/{squad['id']}/players", headers=president["headers"])
        assert players.json() == []

        roster_url = f"/api/squad-teams/{squad['id']}/players/{roster_player['id']}"
        assert client.post(roster_url, headers=coach_x["headers"]).status_code == 403

        assigned = client.put(
            f"/api/squad-teams/{squad['id']}",
            json={"coachId": coach_y["user"]["id"]},
            headers=board["headers"],
        )
        assert assigned.status_code == 200
        assert assigned.json()["coachId"] == coach_y["user"]["id"]

        added = client.post(roster_url, headers=coach_y["headers"])
        assert added.status_code == 200
        assert added.json()["squadTeamId"] == squad["id"]

        removed = client.delete(roster_url, headers=coach_y["headers"])
        assert removed.status_code == 200
        assert removed.json()["squadTeamId"] is None

        # Coach X is still out
        assert client.post(roster_url, headers=coach_x["headers"]).status_code == 403

    def test_captain_designation(self, client, president, board, team, roster_player):
        squad = client.post(
            "/api/squad-teams",
            json={"name": "Sub-15", "category": "Sub-15", "associationId": team["id"]},
            headers=board["headers"],
        ).json()
        roster_url = f"/api/squad-teams/{squad['id']}/players/{roster_player['id']}"
        client.post(roster_url, headers=board["headers"])

        denied = client.put(f"{roster_url}/role", json={"role": "captain"}, headers=board["headers"])
        assert denied.status_code == 403

        response = client.put(f"{roster_url}/role", json={"role": "captain"}, headers=president["headers"])
        assert response.status_code == 200
        assert response.json()["squadRole"] == "captain"


class TestChatScenarios:
    def test_channel_gate(self, client, president, player):
        message = {"clubId": 1, "channel": "diretoria", "content": "Reunião na sexta"}

        assert client.post("/api/chat/send", json=message, headers=player["headers"]).status_code == 403

        posted = client.post("/api/chat/send", json=message, headers=president["headers"])
        assert posted.status_code == 200
        assert posted.json()["authorName"] == "presidente"

        history = client.get("/api/chat/1/diretoria", headers=president["headers"])
        assert history.status_code == 200
        assert [m["content"] for m in history.json()] == ["Reunião na sexta"]

        assert client.get("/api/chat/1/diretoria", headers=player["headers"]).status_code == 403

    def test_empty_message_rejected(self, client, player):
        response = client.post(
            "/api/chat/send",
            json={"clubId": 1, "channel": "geral", "content": "   "},
            headers=player["headers"],
        )
        assert response.status_code == 400

    def test_unknown_club_is_404(self, client, player):
        assert client.get("/api/chat/99/geral", headers=player["headers"]).status_code == 404

    def test_unknown_channel_is_400(self, client, player):
        assert client.get("/api/chat/1/random", headers=player["headers"]).status_code == 400


class TestRoleChanges:
    def test_old_token_keeps_old_role(self, client, board, coach_x):
        response = client.put(
            f"/api/users/{coach_x['user']['id']}/role",
            json={"role": "player"},
            headers=board["headers"],
        )
        assert response.status_code == 200
        assert response.json()["role"] == "player"

        # Stored role changed, the token still says coach
        me = client.get("/api/auth/me", headers=coach_x["headers"]).json()
        assert me["role"] == "player"
        tecnicos = client.get("/api/chat/1/tecnicos", headers=coach_x["headers"])
        assert tecnicos.status_code == 200

    def test_users_listing_is_board_only(self, client, board, player):
        assert client.get("/api/users", headers=player["headers"]).status_code == 403
        listed = client.get("/api/users", headers=board["headers"])
        assert listed.status_code == 200
        assert all("passwordHash" not in u for u in listed.json())


# =============================================================================
# Resources
# =============================================================================


class TestResources:
    def test_team_delete_leaves_player_reference(self, client, board, team, roster_player):
        assert client.delete(f"/api/teams/{team['id']}", headers=board["headers"]).status_code == 200
        assert client.get(f"/api/teams/{team['id']}").status_code == 404

        player = client.get(f"/api/players/{roster_player['id']}").json()
        assert player["teamId"] == team["id"]

    def test_players_filter_by_team(self, client, team, roster_player):
        assert len(client.get("/api/players", params={"teamId": team["id"]}).json()) == 1
        assert client.get("/api/players", params={"teamId": 999}).json() == []

    def test_game_lifecycle(self, client, board, player, team):
        away = client.post("/api/teams", json={"name": "Visitante"}, headers=board["headers"]).json()
        game = client.post(
            "/api/games",
            json={
                "homeTeamId": team["id"],
                "awayTeamId": away["id"],
                "gameDate": (utc_now() + timedelta(days=2)).isoformat(),
            },
            headers=board["headers"],
        )
        assert game.status_code == 200
        game_id = game.json()["id"]

        upcoming = client.get("/api/games", params={"upcoming": "true"}).json()
        assert [g["id"] for g in upcoming] == [game_id]

        denied = client.put(f"/api/games/{game_id}", json={"status": "live"}, headers=player["headers"])
        assert denied.status_code == 403

        finished = client.put(
            f"/api/games/{game_id}",
            json={"status": "finished", "homeScore": 3, "awayScore": 0},
            headers=board["headers"],
        )
        assert finished.json()["status"] == "finished"

        back = client.put(f"/api/games/{game_id}", json={"status": "live"}, headers=board["headers"])
        assert back.status_code == 409
        assert back.json()["kind"] == "conflict"

    def test_same_team_game_rejected(self, client, board, team):
        response = client.post(
            "/api/games",
            json={"homeTeamId": team["id"], "awayTeamId": team["id"], "gameDate": utc_now().isoformat()},
            headers=board["headers"],
        )
        assert response.status_code == 400

    def test_news_visibility(self, client, player):
        client.post("/api/news", json={"title": "Rascunho", "content": "..."}, headers=player["headers"])
        client.post(
            "/api/news",
            json={"title": "Publicada", "content": "...", "published": True},
            headers=player["headers"],
        )

        anonymous = client.get("/api/news").json()
        assert [n["title"] for n in anonymous] == ["Publicada"]
        assert len(client.get("/api/news", headers=player["headers"]).json()) == 2

    def test_payment_flow(self, client, board, roster_player):
        today = utc_now().date()
        created = client.post(
            "/api/payments",
            json={
                "playerId": roster_player["id"],
                "amount": 5000,
                "dueDate": (today + timedelta(days=10)).isoformat(),
                "month": today.month,
                "year": today.year,
            },
            headers=board["headers"],
        )
        assert created.status_code == 200
        payment_id = created.json()["id"]
        assert created.json()["status"] == "pending"

        paid = client.post(
            f"/api/payments/{payment_id}/pay", json={"method": "pix"}, headers=board["headers"]
        )
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert paid.json()["paidDate"] == today.isoformat()

        again = client.post(f"/api/payments/{payment_id}/pay", headers=board["headers"])
        assert again.json() == paid.json()

        pending = client.get("/api/payments", params={"status": "pending"}, headers=board["headers"])
        assert pending.json() == []

    @pytest.mark.parametrize("month", [0, 13])
    def test_payment_month_out_of_range(self, client, board, roster_player, month):
        today = utc_now().date()
        body = {
            "playerId": roster_player["id"],
            "amount": 5000,
            "dueDate": today.isoformat(),
            "month": month,
            "year": today.year,
        }
        created = client.post("/api/payments", json=body, headers=board["headers"])
        assert created.status_code == 400
        assert created.json()["kind"] == "validation_error"

        body["month"] = today.month
        payment_id = client.post("/api/payments", json=body, headers=board["headers"]).json()["id"]
        updated = client.put(
            f"/api/payments/{payment_id}", json={"month": month}, headers=board["headers"]
        )
        assert updated.status_code == 400
        assert updated.json()["kind"] == "validation_error"
