"""Rating models and the seed table of base ratings per variant"""

from typing import Dict

from pydantic import BaseModel


class RatingTriple(BaseModel):
    """Glicko-2 style rating parameters"""

    rating: float
    rd: float
    vol: float

    model_config = {
        "json_schema_extra": {
            "example": {"rating": 1500, "rd": 350, "vol": 0.06}
        }
    }


# Base triple that every seeded rating is perturbed from, keyed by variant name
BASE_RATINGS: Dict[str, RatingTriple] = {
    "baduk": RatingTriple(rating=1500, rd=350, vol=0.06),
    "phantom": RatingTriple(rating=1450, rd=300, vol=0.05),
    "capture": RatingTriple(rating=1600, rd=250, vol=0.04),
    "tetris": RatingTriple(rating=1400, rd=400, vol=0.07),
    "pyramid": RatingTriple(rating=1550, rd=280, vol=0.05),
}

# Uniform noise is drawn from [-W, W] per field
NOISE_HALF_WIDTHS = RatingTriple(rating=100, rd=50, vol=0.01)

# Lower bounds applied after perturbation when clamping is enabled
MIN_RATING = 0.0
MIN_RD = 1.0
MIN_VOL = 0.0001
