"""
Sentry initialization and scope helpers.

Everything here is a no-op when SENTRY_DSN is not configured.
"""

import logging

import sentry_sdk

from mcbays_contact.core.config import settings

logger = logging.getLogger(__name__)


def init_sentry() -> None:
    """Initialize Sentry SDK. Called once at app startup (main.py)."""
    if not settings.SENTRY_DSN:
        logger.info("Sentry DSN not configured - skipping initialization")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=(
            1.0 if settings.is_local else settings.SENTRY_TRACES_SAMPLE_RATE
        ),
        environment=settings.ENVIRONMENT,
        # Submissions carry personal data; keep it out of Sentry events
        send_default_pii=False,
    )
    logger.info("Sentry initialized (environment=%s)", settings.ENVIRONMENT)


def set_sentry_request_id(request_id: str) -> None:
    """Tag the current Sentry scope with the request_id."""
    if not settings.SENTRY_DSN:
        return
    sentry_sdk.set_tag("request_id", request_id)


def clear_sentry_request_id() -> None:
    if not settings.SENTRY_DSN:
        return
    sentry_sdk.set_tag("request_id", "")
