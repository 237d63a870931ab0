"""Composite sort score for advisor profiles.

The score is stored on denormalized advisor documents so the directory can
sort with a single indexed field.
"""

import math
from typing import Any

WEIGHTS = {
    "rating": 0.4,
    "reviews": 0.3,
    "assets": 0.2,
    "verification": 0.1,
}

VERIFICATION_BONUS = 0.1


def _as_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) and number > 0 else 0.0


def calculate_composite_score(
    average_rating: float | None,
    total_reviews: int,
    assets_under_management: Any = None,
    verified: bool = False,
) -> float:
    """Weighted score from rating, review volume, AUM and verification.

    Review count and AUM use log scales so a few very large advisors do not
    dominate. The result is rounded half-up to three decimals.

    Args:
        average_rating: Mean rating on a 0-5 scale, or None without reviews
        total_reviews: Number of reviews
        assets_under_management: AUM in dollars; non-numeric values count as 0
        verified: Whether the advisor profile is verified

    Returns:
        The composite score
    """
    rating_score = (average_rating or 0) / 5
    review_score = math.log(max(total_reviews, 0) + 1) / 10
    aum_score = math.log(_as_float(assets_under_management) + 1) / 25
    verification = VERIFICATION_BONUS if verified else 0.0

    score = (
        rating_score * WEIGHTS["rating"]
        + review_score * WEIGHTS["reviews"]
        + aum_score * WEIGHTS["assets"]
        + verification * WEIGHTS["verification"]
    )
    return math.floor(score * 1000 + 0.5) / 1000
