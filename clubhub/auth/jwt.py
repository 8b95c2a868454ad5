# =============================================================================
# JWT Authentication Implementation
# =============================================================================
#
# This module provides:
#   - Password hashing
#   - Session token creation and validation
#   - Signing key resolution from settings
#
# The signing key is injected into TokenService at construction. There is
# no module-level secret.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import hashlib
import logging
import secrets

from pydantic import BaseModel
import jwt

from clubhub.config import Settings
from clubhub.core.errors import AuthenticationRequired, ConfigurationError
from clubhub.core.models import Role, UserInDB
from clubhub.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
TOKEN_TYPE = "access"


# =============================================================================
# Models
# =============================================================================


class TokenPayload(BaseModel):
    """Session token payload."""

    sub: str  # user id as string
    id: int
    email: str
    role: Role
    exp: datetime
    iat: datetime
    type: str
    jti: str  # unique token ID


# =============================================================================
# Password Hashing
# =============================================================================


def hash_password(password: str) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: salt:hash format string
    """
    salt = secrets.token_hex(32)
    hash_bytes = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=PBKDF2_ITERATIONS,
    )
    return f"{salt}:{hash_bytes.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        salt, stored_hash = password_hash.split(':')
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=PBKDF2_ITERATIONS,
        )
        return secrets.compare_digest(hash_bytes.hex(), stored_hash)
    except (ValueError, AttributeError):
        return False


# =============================================================================
# Token Errors
# =============================================================================


class TokenError(AuthenticationRequired):
    """Base exception for token errors."""

    default_message = "Invalid or expired token"


class TokenExpiredError(TokenError):
    """Token has expired."""

    default_message = "Token has expired"


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""

    default_message = "Invalid token"


# =============================================================================
# Signing Key
# =============================================================================


def resolve_signing_key(settings: Settings) -> str:
    """
    Pick the JWT signing key for this process.

    A configured key always wins. Without one, an ephemeral key is only
    generated in dev mode outside production; otherwise startup fails.
    """
    if settings.jwt_secret_key:
        return settings.jwt_secret_key

    if settings.dev_mode and not settings.is_production:
        logger.warning(
            "JWT_SECRET_KEY not set. Generated a temporary development key. "
            "All sessions will be invalidated on restart. "
            "Set JWT_SECRET_KEY for any real deployment!"
        )
        return secrets.token_urlsafe(48)

    raise ConfigurationError(
        "JWT_SECRET_KEY is not set. Configure it, or set DEV_MODE=true "
        "(non-production only) to use an ephemeral key."
    )


# =============================================================================
# Token Service
# =============================================================================


class TokenService:
    """Issues and validates signed session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_days: int = 7,
    ):
        if not secret_key:
            raise ConfigurationError("TokenService requires a signing key")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            secret_key=resolve_signing_key(settings),
            algorithm=settings.jwt_algorithm,
            expire_days=settings.jwt_token_expire_days,
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.expire_days * 24 * 60 * 60

    def issue(self, user: UserInDB, now: datetime | None = None) -> str:
        """Create a session token snapshotting the user's id, email and role."""
        now = now or utc_now()
        expire = now + timedelta(days=self.expire_days)

        payload = {
            "sub": str(user.id),
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "exp": expire,
            "iat": now,
            "type": TOKEN_TYPE,
            "jti": generate_id("tok"),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Decode and validate a session token.

        Raises:
            TokenExpiredError: Token has expired
            TokenInvalidError: Token is invalid, tampered or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        if payload.get("type") != TOKEN_TYPE:
            raise TokenInvalidError(f"Expected {TOKEN_TYPE} token, got {payload.get('type')}")

        try:
            return TokenPayload(
                sub=payload["sub"],
                id=payload["id"],
                email=payload["email"],
                role=Role(payload["role"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                type=payload["type"],
                jti=payload.get("jti", ""),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise TokenInvalidError(f"Invalid token claims: {e}")
