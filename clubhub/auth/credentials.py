"""
Credential service: registration, login, token verification.

Users live in the ``users`` collection. Passwords are only ever stored
as salted hashes.
"""

from __future__ import annotations

import logging

from clubhub.auth.context import AuthContext
from clubhub.auth.jwt import TokenService, hash_password, verify_password
from clubhub.core.errors import AuthenticationRequired, DuplicateEmail
from clubhub.core.models import Role, UserCreate, UserInDB
from clubhub.core.utils import utc_now
from clubhub.storage import Collections, MetadataStorage

logger = logging.getLogger(__name__)


class InvalidCredentials(AuthenticationRequired):
    """Wrong email or password. Deliberately does not say which."""

    default_message = "Invalid email or password"


class CredentialService:
    """Verifies email/password and issues and validates session tokens."""

    def __init__(
        self,
        storage: MetadataStorage,
        tokens: TokenService,
        allow_role_on_register: bool = True,
    ):
        self.storage = storage
        self.tokens = tokens
        self.allow_role_on_register = allow_role_on_register

    async def register(self, data: UserCreate) -> UserInDB:
        """Create a new user. Fails with DuplicateEmail if the email is taken."""
        email = data.email.lower()
        if await self.get_user_by_email(email):
            raise DuplicateEmail()

        role = data.role if (data.role and self.allow_role_on_register) else Role.PLAYER

        record = await self.storage.insert(Collections.USERS, {
            "email": email,
            "password_hash": hash_password(data.password),
            "full_name": data.full_name,
            "role": role.value,
            "avatar": None,
            "created_at": utc_now().isoformat(),
        })
        logger.info(f"Registered user {record['id']} with role {role.value}")
        return UserInDB.model_validate(record)

    async def authenticate(self, email: str, password: str) -> tuple[str, UserInDB]:
        """Check credentials and return a fresh session token with the user."""
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return self.tokens.issue(user), user

    def verify(self, token: str) -> AuthContext:
        """
        Decode a session token into an actor identity.

        Fails closed: any decode problem raises a TokenError.
        """
        payload = self.tokens.decode(token)
        return AuthContext(
            user_id=payload.id,
            email=payload.email,
            role=payload.role,
            metadata={"jti": payload.jti, "issued_at": payload.iat},
        )

    async def get_user(self, user_id: int) -> UserInDB | None:
        record = await self.storage.get(Collections.USERS, user_id)
        return UserInDB.model_validate(record) if record else None

    async def get_user_by_email(self, email: str) -> UserInDB | None:
        record = await self.storage.find_one(Collections.USERS, {"email": email.lower()})
        return UserInDB.model_validate(record) if record else None
