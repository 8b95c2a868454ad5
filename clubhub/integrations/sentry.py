# =============================================================================
# Sentry Error Tracking
# =============================================================================
#
# Enable with:
#   pip install clubhub[sentry]
#   SENTRY_DSN=https://...@sentry.io/... in .env
#
# The app factory calls init_sentry() from its lifespan. Without the SDK
# or a DSN every helper here is a no-op (errors are still logged).
#
# =============================================================================

import logging

from clubhub.config import Settings
from clubhub.core.errors import ClubError

logger = logging.getLogger(__name__)

# Sentry SDK is optional - gracefully degrade if not installed
try:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration
    SENTRY_AVAILABLE = True
except ImportError:
    SENTRY_AVAILABLE = False
    sentry_sdk = None

SCRUBBED_HEADERS = {"authorization", "cookie"}
SCRUBBED_FIELDS = {"password", "passwordHash", "password_hash", "token"}

# Transactions are named by route template, e.g. "/api/chat/{club_id}/{channel}"
TRANSACTION_STYLE = "url"

# Routes polled by clients
QUIET_TRANSACTIONS = ("/health",)
QUIET_PREFIXES = ("/api/chat/",)


def init_sentry(settings: Settings) -> bool:
    """
    Start error tracking for this process.

    Returns True if Sentry is now active.
    """
    if not SENTRY_AVAILABLE:
        logger.info("sentry-sdk not installed, error tracking off")
        return False
    if not settings.sentry_dsn:
        logger.info("No SENTRY_DSN configured, error tracking off")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        integrations=[
            FastApiIntegration(transaction_style=TRANSACTION_STYLE),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        send_default_pii=False,
        before_send=_filter_events,
        before_send_transaction=_filter_transactions,
    )
    logger.info(f"Sentry active ({settings.environment})")
    return True


def _is_active() -> bool:
    return SENTRY_AVAILABLE and sentry_sdk.get_client().is_active()


# =============================================================================
# Event filters
# =============================================================================


def _filter_events(event: dict, hint: dict) -> dict | None:
    """Drop expected client errors and strip credentials."""
    exc_info = hint.get("exc_info")
    if exc_info:
        error = exc_info[1]
        # 4xx are answers, not bugs
        if isinstance(error, ClubError) and error.status_code < 500:
            return None

    request = event.get("request")
    if request:
        _scrub_request(request)
    return event


def _scrub_request(request: dict) -> None:
    headers = request.get("headers") or {}
    for key in list(headers):
        if key.lower() in SCRUBBED_HEADERS:
            headers[key] = "[Filtered]"

    data = request.get("data")
    if isinstance(data, dict):
        for key in SCRUBBED_FIELDS & data.keys():
            data[key] = "[Filtered]"


def _filter_transactions(event: dict, hint: dict) -> dict | None:
    transaction = event.get("transaction") or ""
    if transaction in QUIET_TRANSACTIONS:
        return None
    method = (event.get("request") or {}).get("method")
    if method == "GET" and transaction.startswith(QUIET_PREFIXES):
        return None
    return event


# =============================================================================
# Reporting helpers
# =============================================================================


def capture_exception(error: Exception, **context) -> str | None:
    """
    Report an unexpected error.

    Returns the Sentry event id, or None when tracking is off (the error
    is logged instead).
    """
    if not _is_active():
        logger.error("Unhandled error", exc_info=error)
        return None

    with sentry_sdk.new_scope() as scope:
        for key, value in context.items():
            scope.set_extra(key, value)
        return sentry_sdk.capture_exception(error)


def set_user(user_id: int | None, email: str | None = None, role: str | None = None) -> None:
    """Attach the acting user (and their club role) to later reports."""
    if user_id is None or not _is_active():
        return
    sentry_sdk.set_user({"id": str(user_id), "email": email})
    if role:
        sentry_sdk.set_tag("club.role", role)
