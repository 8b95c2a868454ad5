"""
Tests for the authorization policy.

The whole permission matrix lives in ``can_perform``; these tests pin it
down without touching storage or HTTP.
"""

import pytest

from clubhub.auth.capabilities import (
    Action,
    AUTHENTICATED_ACTIONS,
    BOARD_ACTIONS,
    PUBLIC_ACTIONS,
)
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize, can_perform
from clubhub.core.errors import AuthenticationRequired, Forbidden
from clubhub.core.models import Channel, Message, News, Role, SquadTeam


# =============================================================================
# Fixtures
# =============================================================================


def actor(role: Role, user_id: int = 10) -> AuthContext:
    return AuthContext(user_id=user_id, email=f"{role.value}@club.com", role=role)


ANONYMOUS = AuthContext.anonymous()


@pytest.fixture
def squad():
    """Squad coached by user 42."""
    return SquadTeam(id=1, name="Sub-17", category="Sub-17", association_id=1, coach_id=42)


# =============================================================================
# Role matrix
# =============================================================================


class TestRoleMatrix:
    @pytest.mark.parametrize("action", sorted(PUBLIC_ACTIONS, key=lambda a: a.value))
    def test_public_actions_allow_anonymous(self, action):
        assert can_perform(ANONYMOUS, action)

    def test_anonymous_denied_everything_else(self):
        for action in Action:
            if action in PUBLIC_ACTIONS:
                continue
            assert not can_perform(ANONYMOUS, action), action

    @pytest.mark.parametrize("role", list(Role))
    def test_authenticated_actions_for_every_role(self, role):
        for action in AUTHENTICATED_ACTIONS:
            assert can_perform(actor(role), action), (role, action)

    @pytest.mark.parametrize("role", [Role.PRESIDENT, Role.BOARD])
    def test_board_actions(self, role):
        for action in BOARD_ACTIONS:
            assert can_perform(actor(role), action), (role, action)

    @pytest.mark.parametrize("role", [Role.COACH, Role.PLAYER])
    def test_board_actions_denied_without_resource(self, role):
        for action in BOARD_ACTIONS:
            assert not can_perform(actor(role), action), (role, action)

    def test_squad_role_assign_is_president_only(self, squad):
        assert can_perform(actor(Role.PRESIDENT), Action.SQUAD_ROLE_ASSIGN, squad)
        assert not can_perform(actor(Role.BOARD), Action.SQUAD_ROLE_ASSIGN, squad)
        assert not can_perform(actor(Role.COACH, user_id=42), Action.SQUAD_ROLE_ASSIGN, squad)

    def test_payments_hidden_from_coach_and_player(self):
        for role in (Role.COACH, Role.PLAYER):
            assert not can_perform(actor(role), Action.PAYMENT_READ)

    def test_player_and_game_updates_open_to_any_login(self):
        assert can_perform(actor(Role.PLAYER), Action.PLAYER_UPDATE)
        assert can_perform(actor(Role.PLAYER), Action.GAME_UPDATE)
        assert not can_perform(actor(Role.PLAYER), Action.GAME_UPDATE_STATUS)


# =============================================================================
# Coach scoping
# =============================================================================


class TestCoachScope:
    def test_assigned_coach_manages_roster(self, squad):
        coach = actor(Role.COACH, user_id=42)
        assert can_perform(coach, Action.SQUAD_ROSTER_ADD, squad)
        assert can_perform(coach, Action.SQUAD_ROSTER_REMOVE, squad)
        assert can_perform(coach, Action.SQUAD_UPDATE, squad)

    def test_other_coach_is_denied(self, squad):
        coach = actor(Role.COACH, user_id=7)
        assert not can_perform(coach, Action.SQUAD_ROSTER_ADD, squad)
        assert not can_perform(coach, Action.SQUAD_UPDATE, squad)

    def test_assigned_coach_cannot_reassign_or_delete(self, squad):
        coach = actor(Role.COACH, user_id=42)
        assert not can_perform(coach, Action.SQUAD_ASSIGN, squad)
        assert not can_perform(coach, Action.SQUAD_DELETE, squad)

    def test_unassigned_squad_grants_no_coach(self):
        squad = SquadTeam(id=2, name="Sub-15", category="Sub-15", association_id=1)
        assert not can_perform(actor(Role.COACH, user_id=42), Action.SQUAD_ROSTER_ADD, squad)

    def test_player_with_matching_id_is_not_a_coach(self, squad):
        assert not can_perform(actor(Role.PLAYER, user_id=42), Action.SQUAD_ROSTER_ADD, squad)

    def test_coach_role_alone_is_not_enough(self):
        assert not can_perform(actor(Role.COACH, user_id=42), Action.SQUAD_ROSTER_ADD)


# =============================================================================
# Channels
# =============================================================================


class TestChannels:
    @pytest.mark.parametrize(
        "role,allowed",
        [
            (Role.PRESIDENT, {Channel.GERAL, Channel.TECNICOS, Channel.DIRETORIA}),
            (Role.BOARD, {Channel.GERAL, Channel.TECNICOS, Channel.DIRETORIA}),
            (Role.COACH, {Channel.GERAL, Channel.TECNICOS}),
            (Role.PLAYER, {Channel.GERAL}),
        ],
    )
    def test_channel_gates(self, role, allowed):
        for channel in Channel:
            expected = channel in allowed
            assert bool(can_perform(actor(role), Action.MESSAGE_READ, channel)) is expected
            assert bool(can_perform(actor(role), Action.MESSAGE_POST, channel)) is expected

    def test_channel_taken_from_message(self):
        message = Message(id=1, user_id=1, club_id=1, channel=Channel.DIRETORIA, content="hi")
        assert not can_perform(actor(Role.COACH), Action.MESSAGE_READ, message)

    def test_missing_channel_is_denied(self):
        decision = can_perform(actor(Role.PRESIDENT), Action.MESSAGE_POST)
        assert not decision
        assert decision.reason

    def test_anonymous_cannot_read_any_channel(self):
        assert not can_perform(ANONYMOUS, Action.MESSAGE_READ, Channel.GERAL)

    def test_delete_is_board_only(self):
        assert can_perform(actor(Role.BOARD), Action.MESSAGE_DELETE)
        assert not can_perform(actor(Role.COACH), Action.MESSAGE_DELETE)


# =============================================================================
# News
# =============================================================================


class TestNewsVisibility:
    def test_published_news_is_public(self):
        item = News(id=1, title="t", content="c", published=True)
        assert can_perform(ANONYMOUS, Action.NEWS_READ, item)

    def test_draft_needs_login(self):
        item = News(id=1, title="t", content="c", published=False)
        assert not can_perform(ANONYMOUS, Action.NEWS_READ, item)
        assert can_perform(actor(Role.PLAYER), Action.NEWS_READ, item)


# =============================================================================
# authorize / AuthContext
# =============================================================================


class TestAuthorize:
    def test_anonymous_gets_authentication_required(self):
        with pytest.raises(AuthenticationRequired):
            authorize(ANONYMOUS, Action.TEAM_CREATE)

    def test_authenticated_gets_forbidden(self):
        with pytest.raises(Forbidden):
            authorize(actor(Role.PLAYER), Action.TEAM_CREATE)

    def test_allowed_returns_none(self):
        assert authorize(actor(Role.BOARD), Action.TEAM_CREATE) is None

    def test_context_can_accepts_strings(self):
        assert actor(Role.BOARD).can("payment.read")
        assert not actor(Role.PLAYER).can("payment.read")
        assert not actor(Role.BOARD).can("no.such.action")

    def test_context_flags(self):
        assert actor(Role.BOARD).is_admin
        assert not actor(Role.COACH).is_admin
        assert ANONYMOUS.is_anonymous
        assert ANONYMOUS.capabilities == PUBLIC_ACTIONS
