"""
Authentication and authorization.

Design principles:
1. One decision function (``can_perform``) holds the whole permission matrix
2. Services call ``authorize`` with the loaded entity before mutating
3. Session tokens are signed snapshots of id, email and role
4. The signing key is injected configuration, never module state

The HTTP routes live in ``clubhub.auth.routes`` and are mounted by the app.
"""

from clubhub.auth.context import AuthContext
from clubhub.auth.policies import (
    Decision,
    authorize,
    can_perform,
    optional_auth,
    require,
    require_auth,
)
from clubhub.auth.capabilities import (
    Action,
    CHANNEL_READERS,
    CHANNEL_WRITERS,
    ROLE_CAPABILITIES,
)
from clubhub.auth.jwt import (
    TokenService,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    hash_password,
    resolve_signing_key,
    verify_password,
)
from clubhub.auth.credentials import CredentialService, InvalidCredentials

__all__ = [
    # Main interface
    "can_perform",
    "authorize",
    "require",
    "require_auth",
    "optional_auth",
    "AuthContext",
    "Decision",
    # Types
    "Action",
    "CHANNEL_READERS",
    "CHANNEL_WRITERS",
    "ROLE_CAPABILITIES",
    # Credentials
    "CredentialService",
    "InvalidCredentials",
    "TokenService",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "hash_password",
    "resolve_signing_key",
    "verify_password",
]
