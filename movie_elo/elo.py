import math
from typing import Optional, Tuple

from .constants import DEFAULT_ELO, RATING_MIDPOINT, ELO_PER_STAR, K_FACTOR


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def calculate_win_probability(elo_a: float, elo_b: float) -> float:
    """Calculate the probability of movie A beating movie B using Elo formula."""
    return 1.0 / (1.0 + 10.0 ** ((elo_b - elo_a) / 400.0))


def initial_elo(rating: Optional[float]) -> int:
    """
    Seed an Elo rating from a 0-5 star rating.

    The mapping is linear around 1200, so 0 -> 700, 2.5 -> 1200, 5 -> 1700.
    Missing ratings start at DEFAULT_ELO.
    """
    if rating is None:
        return DEFAULT_ELO
    try:
        rating = float(rating)
    except (TypeError, ValueError):
        return DEFAULT_ELO
    if not math.isfinite(rating):
        return DEFAULT_ELO
    return round_half_up(DEFAULT_ELO + (rating - RATING_MIDPOINT) * ELO_PER_STAR)


def update_elo_ratings(elo_a: float, elo_b: float, score_a: int,
                       k: float = K_FACTOR) -> Tuple[int, int]:
    """
    Update Elo ratings based on the comparison result.
    score_a is 1 if A won and 0 if A lost; there are no ties.

    Each side is rounded on its own, so the two deltas can differ by one point.
    """
    # Calculate expected scores
    expected_a = calculate_win_probability(elo_a, elo_b)
    expected_b = 1.0 - expected_a

    actual_a = float(score_a)
    actual_b = 1.0 - actual_a

    # Calculate new ratings
    new_elo_a = elo_a + k * (actual_a - expected_a)
    new_elo_b = elo_b + k * (actual_b - expected_b)

    return round_half_up(new_elo_a), round_half_up(new_elo_b)
