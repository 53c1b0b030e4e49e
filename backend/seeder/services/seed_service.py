"""Seed synthetic ratings onto every user in the store"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from seeder.adapters.base import UserRatingStore
from seeder.adapters.mongodb import MongoDBUserStore
from seeder.core.config import Settings
from seeder.core.error_utils import safe_log_error
from seeder.core.exceptions import SeederError
from seeder.models.rating import BASE_RATINGS, RatingTriple
from seeder.services.generator import build_ratings

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    """Counts collected during a seeding run"""

    users_found: int = 0
    users_seeded: int = 0
    users_skipped: int = 0
    variants_written: int = 0


class RatingSeeder:
    """Writes randomized ratings for a random subset of variants onto each user."""

    def __init__(
        self,
        store: UserRatingStore,
        rng: Optional[random.Random] = None,
        base_ratings: Mapping[str, RatingTriple] = BASE_RATINGS,
        clamp: bool = True,
        merge: bool = False,
        dry_run: bool = False,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.base_ratings = base_ratings
        self.clamp = clamp
        self.merge = merge
        self.dry_run = dry_run
        self.report = SeedReport()

    async def seed(self) -> SeedReport:
        """Seed every user with a username. The store must already be connected.

        Errors from the store propagate; ``self.report`` keeps the counts up
        to the failure.
        """
        self.report = SeedReport()

        users = await self.store.load_users()
        self.report.users_found = len(users)
        logger.info(f"Found {len(users)} users")

        for user in users:
            if not user.username:
                self.report.users_skipped += 1
                continue

            logger.info(f"Adding ratings for user: {user.username}")
            ratings = build_ratings(self.base_ratings, self.rng, clamp=self.clamp)

            if self.dry_run:
                logger.info(f"  [dry run] {self._describe(ratings)}")
            else:
                await self.store.apply_ratings(user, ratings, merge=self.merge)

            self.report.users_seeded += 1
            self.report.variants_written += len(ratings)
            logger.info(f"  Added ratings for {len(ratings)} variants")

        logger.info("Test ratings added successfully!")
        return self.report

    @staticmethod
    def _describe(ratings: Dict[str, RatingTriple]) -> str:
        return ", ".join(
            f"{variant}=({triple.rating:.1f}, {triple.rd:.1f}, {triple.vol:.4f})"
            for variant, triple in ratings.items()
        )


async def run_seed(
    config: Settings,
    store: Optional[UserRatingStore] = None,
    rng: Optional[random.Random] = None,
) -> Optional[SeedReport]:
    """Run one seeding pass, holding the store connection for its duration.

    Any error is caught and logged here once; the connection is released
    on every path.

    Returns:
        The run's report, or None if the run failed
    """
    if store is None:
        store = MongoDBUserStore.from_settings(config)
    if rng is None:
        rng = random.Random(config.RANDOM_SEED)

    seeder = RatingSeeder(
        store,
        rng=rng,
        clamp=config.CLAMP_RATINGS,
        merge=config.merge_rankings,
        dry_run=config.DRY_RUN,
    )

    try:
        async with store.session():
            return await seeder.seed()
    except SeederError as e:
        _log_failure(seeder.report, f"Error adding test ratings: {e}", exc_info=config.DEBUG)
        return None
    except Exception as e:
        _log_failure(
            seeder.report,
            f"Unexpected error adding test ratings: {type(e).__name__}: {e}",
            exc_info=True,
        )
        return None


def _log_failure(report: SeedReport, message: str, exc_info: bool) -> None:
    safe_log_error(
        logger,
        f"{message} ({report.users_seeded} of {report.users_found} users seeded before the failure)",
        exc_info=exc_info,
        extra={
            "users_found": report.users_found,
            "users_seeded": report.users_seeded,
        },
    )
