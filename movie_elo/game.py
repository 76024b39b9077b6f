import random
from typing import List, Optional, Sequence, Tuple

from .constants import SAMPLE_LIMIT
from .models import Movie


def select_pair(movies: Sequence[Movie],
                rng: Optional[random.Random] = None,
                sample_limit: int = SAMPLE_LIMIT) -> Optional[Tuple[Movie, Movie]]:
    """
    Select the next matchup, preferring movies with close Elo ratings.

    Draws min(sample_limit, 2 * len(movies)) random pairs with replacement,
    drops draws of the same movie twice and keeps the first draw with the
    smallest Elo gap. If every draw was dropped, the first two movies are used.
    Returns None when fewer than two movies exist. Never mutates `movies`.
    """
    if len(movies) < 2:
        return None

    rng = rng or random
    sample_size = min(sample_limit, 2 * len(movies))

    picks: List[Tuple[Movie, Movie, int]] = []
    for _ in range(sample_size):
        a = rng.choice(movies)
        b = rng.choice(movies)
        if a.id == b.id:
            continue
        picks.append((a, b, abs(a.elo - b.elo)))

    if not picks:
        return movies[0], movies[1]

    # min() returns the first minimal draw
    best = min(picks, key=lambda pick: pick[2])
    return best[0], best[1]
