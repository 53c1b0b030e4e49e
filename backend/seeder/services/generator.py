"""Random rating generation

Produces synthetic Glicko-2 style ratings for a random subset of variants.
All randomness comes from the ``random.Random`` passed in, so a seeded
generator gives reproducible output.
"""

import random
from typing import Dict, Iterable, List, Mapping

from seeder.models.rating import (MIN_RATING, MIN_RD, MIN_VOL,
                                  NOISE_HALF_WIDTHS, RatingTriple)

MIN_SELECTED_VARIANTS = 2


def select_variants(all_variants: Iterable[str], rng: random.Random) -> List[str]:
    """Choose a uniformly sized random subset of variants

    The subset size is drawn uniformly from [2, n]; with fewer than two
    variants configured every variant is selected.

    Args:
        all_variants: Configured variant names
        rng: Random source

    Returns:
        Distinct variant names in random order
    """
    # Sorted so that a seeded rng does not depend on the caller's iteration order
    variants = sorted(set(all_variants))
    rng.shuffle(variants)  # Fisher-Yates

    if len(variants) < MIN_SELECTED_VARIANTS:
        return variants

    count = rng.randint(MIN_SELECTED_VARIANTS, len(variants))
    return variants[:count]


def perturb(
    base: RatingTriple, rng: random.Random, clamp: bool = True
) -> RatingTriple:
    """Add independent uniform noise to each field of a rating triple

    Noise for each field is drawn from [-W, W] with W taken from
    NOISE_HALF_WIDTHS. With ``clamp`` the result is raised to the minimum
    rating, rd and vol.
    """
    rating = base.rating + rng.uniform(-NOISE_HALF_WIDTHS.rating, NOISE_HALF_WIDTHS.rating)
    rd = base.rd + rng.uniform(-NOISE_HALF_WIDTHS.rd, NOISE_HALF_WIDTHS.rd)
    vol = base.vol + rng.uniform(-NOISE_HALF_WIDTHS.vol, NOISE_HALF_WIDTHS.vol)

    if clamp:
        rating = max(rating, MIN_RATING)
        rd = max(rd, MIN_RD)
        vol = max(vol, MIN_VOL)

    return RatingTriple(rating=rating, rd=rd, vol=vol)


def build_ratings(
    base_ratings: Mapping[str, RatingTriple],
    rng: random.Random,
    clamp: bool = True,
) -> Dict[str, RatingTriple]:
    """Generate one perturbed rating per randomly selected variant"""
    return {
        variant: perturb(base_ratings[variant], rng, clamp=clamp)
        for variant in select_variants(base_ratings.keys(), rng)
    }
