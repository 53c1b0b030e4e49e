"""
Models package initialization.
Exports the rating and user models for easier access.
"""

from .rating import (BASE_RATINGS, MIN_RATING, MIN_RD, MIN_VOL,
                     NOISE_HALF_WIDTHS, RatingTriple)
from .user import SeedUser
