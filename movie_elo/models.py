"""Movie and history records, and conversion of imported rows into movies."""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Optional

from .constants import TITLE_KEYS, RATING_KEYS, YEAR_KEYS, UNKNOWN_TITLE
from .elo import initial_elo


@dataclass
class Movie:
    """One ranked movie. `id` is the natural key built from title and year."""

    id: str
    title: str
    year: Optional[str]
    rating: Optional[float]  # source scale, usually 0-5 in half steps
    elo: int
    played: int = 0
    wins: int = 0
    losses: int = 0

    @property
    def label(self) -> str:
        return f"{self.title} ({self.year})" if self.year else self.title

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Movie':
        """Rebuild a movie from its stored form. Raises KeyError/TypeError/ValueError on bad data."""
        rating = data.get('rating')
        return cls(
            id=str(data['id']),
            title=str(data['title']),
            year=str(data['year']) if data.get('year') else None,
            rating=float(rating) if rating is not None else None,
            elo=int(data['elo']),
            played=int(data.get('played', 0)),
            wins=int(data.get('wins', 0)),
            losses=int(data.get('losses', 0)),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One resolved comparison. Ratings are (winner, loser) before and after."""

    time: str  # ISO 8601
    winner: str
    loser: str
    prev_a: int
    prev_b: int
    new_a: int
    new_b: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'HistoryEntry':
        return cls(
            time=str(data['time']),
            winner=str(data['winner']),
            loser=str(data['loser']),
            prev_a=int(data['prev_a']),
            prev_b=int(data['prev_b']),
            new_a=int(data['new_a']),
            new_b=int(data['new_b']),
        )


def make_movie_id(title: str, year: Optional[str]) -> str:
    """Build the natural key: trimmed title and trimmed year joined by '|'."""
    return f"{title.strip()}|{(year or '').strip()}"


def parse_rating(raw: Optional[str]) -> Optional[float]:
    """
    Parse a rating cell.

    Examples:
        "4.5" -> 4.5
        "" -> None
        "n/a" -> None
    """
    if raw is None:
        return None
    raw = str(raw).strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _find_key(row: Dict[str, str], keys: Iterable[str]) -> Optional[str]:
    """Return the first synonym present in the row's columns."""
    for key in keys:
        if key in row:
            return key
    return None


def _first_value(row: Dict[str, str]) -> Optional[str]:
    value = next(iter(row.values()), None)
    return value if isinstance(value, str) else None


def movie_from_row(row: Dict[str, str],
                   title_keys: Iterable[str] = TITLE_KEYS,
                   rating_keys: Iterable[str] = RATING_KEYS,
                   year_keys: Iterable[str] = YEAR_KEYS) -> Movie:
    """
    Convert one imported row into a fresh, unplayed Movie.

    Title falls back to the first cell of the row, then to "Unknown".
    Never raises on missing or malformed cells.
    """
    title_key = _find_key(row, title_keys)
    rating_key = _find_key(row, rating_keys)
    year_key = _find_key(row, year_keys)

    title = (row.get(title_key) if title_key else None) or _first_value(row) or UNKNOWN_TITLE
    year = ((row.get(year_key) if year_key else None) or '').strip() or None
    raw_rating = ((row.get(rating_key) if rating_key else None)
                  or row.get('Rating') or row.get('rating') or '')
    rating = parse_rating(raw_rating)

    return Movie(
        id=make_movie_id(title, year),
        title=title.strip(),
        year=year,
        rating=rating,
        elo=initial_elo(rating),
    )
