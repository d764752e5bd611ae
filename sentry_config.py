"""
Sentry SDK initialization for HireDesk.

Reports unhandled exceptions from the applicant API and traces a sample of
requests. Nothing is sent unless SENTRY_DSN is set and the app environment
is 'production', so development and test runs stay silent.

Env vars:
    SENTRY_DSN                   – Project DSN (required to enable)
    SENTRY_TRACES_SAMPLE_RATE    – Fraction of requests traced (0.0–1.0, default 0.2)
    SENTRY_PROFILES_SAMPLE_RATE  – Fraction of traced requests profiled (default 0.1)
    GIT_SHA                      – Release identifier attached to events
"""

import os
import logging

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

logger = logging.getLogger(__name__)


def _sample_rate(env_var, default):
    """Read a 0.0–1.0 rate from the environment, falling back on bad input."""
    raw = os.environ.get(env_var, "").strip()
    if not raw:
        return default
    try:
        rate = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number, using %.2f", env_var, raw, default)
        return default
    if not 0.0 <= rate <= 1.0:
        logger.warning("%s=%r is outside 0.0–1.0, using %.2f", env_var, raw, default)
        return default
    return rate


def init_sentry(app):
    """Initialise Sentry for the given app when enabled.

    Called from create_app() before blueprints are registered so the Flask
    integration sees every route.

    Returns True if Sentry was initialised, False otherwise.
    """
    dsn = os.environ.get("SENTRY_DSN", "").strip()
    environment = app.config.get("ENVIRONMENT", "development")

    if not dsn:
        logger.info("Sentry disabled – SENTRY_DSN not set")
        return False

    if environment != "production":
        logger.info(
            "Sentry disabled – environment is '%s' (requires 'production')",
            environment,
        )
        return False

    traces_sample_rate = _sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.2)
    profiles_sample_rate = _sample_rate("SENTRY_PROFILES_SAMPLE_RATE", 0.1)

    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=os.environ.get("GIT_SHA", "unknown"),
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=traces_sample_rate,
            profiles_sample_rate=profiles_sample_rate,
            # Applicant names and e-mails must not leave the system
            send_default_pii=False,
        )
    except Exception as exc:
        logger.error("Failed to initialise Sentry: %s", exc)
        return False

    logger.info(
        "Sentry initialised (traces=%.0f%%, profiles=%.0f%%)",
        traces_sample_rate * 100,
        profiles_sample_rate * 100,
    )
    return True
