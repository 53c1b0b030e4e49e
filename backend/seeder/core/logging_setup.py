"""Logging and error tracking setup for the seeder process"""

import logging

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from seeder.core.config import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Background monitor loggers that report every reconnect attempt
NOISY_DRIVER_LOGGERS = (
    "pymongo.synchronous.pool",
    "pymongo.synchronous.mongo_client",
    "pymongo.synchronous.topology",
    "pymongo.synchronous.server_selection",
)


def configure_logging(level: str = "INFO") -> None:
    """Configure line-oriented console logging"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    for name in NOISY_DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(logging.CRITICAL)
    logging.getLogger("motor").setLevel(logging.WARNING)


def init_sentry(config: Settings) -> bool:
    """Initialize Sentry error tracking if DSN is configured."""
    if not config.SENTRY_DSN:
        logger.debug("Sentry DSN not configured - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=config.SENTRY_DSN,
        traces_sample_rate=0.0,
        environment="development" if config.DEBUG else "production",
        integrations=[
            LoggingIntegration(
                level=logging.INFO,  # Capture info and above as breadcrumbs
                event_level=logging.ERROR,  # Send errors and above as events
            ),
        ],
    )
    logger.info("Sentry error tracking initialized")
    return True
