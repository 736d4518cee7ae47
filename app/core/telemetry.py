"""Error reporting through Sentry (or any Sentry-compatible backend)."""

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.redis import RedisIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.core.config import Settings

logger = logging.getLogger(__name__)


def init_sentry(config: Settings) -> bool:
    """Initialize the SDK when a DSN is configured. Returns whether it was."""
    if not config.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.environment,
        release=f"{config.project_name}@{config.version}",
        traces_sample_rate=0.1,
        send_default_pii=False,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
            RedisIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
    )
    logger.info("Sentry initialized (environment=%s)", config.environment)
    return True
