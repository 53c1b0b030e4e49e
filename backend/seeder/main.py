"""Process entry point for the rating seeder"""

import asyncio
import logging
import sys

from seeder.core.config import settings, validate_settings
from seeder.core.exceptions import ConfigurationError
from seeder.core.logging_setup import configure_logging, init_sentry
from seeder.services.seed_service import run_seed

logger = logging.getLogger(__name__)


async def main() -> int:
    """Seed ratings with the configured settings and return the exit code."""
    configure_logging(settings.LOG_LEVEL)
    init_sentry(settings)

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    report = await run_seed(settings)
    if report is None:
        return 1

    logger.info(
        f"Seeded {report.users_seeded} users "
        f"({report.variants_written} ratings, {report.users_skipped} skipped without username)"
    )
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
