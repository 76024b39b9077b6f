"""Append-only log of resolved comparisons, most recent first."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from .constants import HISTORY_DISPLAY_LIMIT
from .models import HistoryEntry, Movie


def make_entry(winner: Movie, loser: Movie, new_a: int, new_b: int,
               time: Optional[datetime] = None) -> HistoryEntry:
    """Build an entry from the movies' ratings before the update and the new ratings."""
    time = time or datetime.now(timezone.utc)
    return HistoryEntry(
        time=time.isoformat(),
        winner=winner.id,
        loser=loser.id,
        prev_a=winner.elo,
        prev_b=loser.elo,
        new_a=new_a,
        new_b=new_b,
    )


def record(history: List[HistoryEntry], entry: HistoryEntry) -> List[HistoryEntry]:
    """Return a new log with `entry` in front. The given list is left untouched."""
    return [entry] + history


def recent_entries(history: List[HistoryEntry],
                   limit: int = HISTORY_DISPLAY_LIMIT) -> List[HistoryEntry]:
    """Entries to display. The log itself is never truncated."""
    return history[:max(0, min(limit, HISTORY_DISPLAY_LIMIT))]


def resolve_title(movie_id: str, movies_by_id: Dict[str, Movie]) -> str:
    """Title for a logged id, or the raw id if the movie is no longer tracked."""
    movie = movies_by_id.get(movie_id)
    if movie is None or not movie.title:
        return movie_id
    return movie.title


def format_delta(entry: HistoryEntry) -> str:
    """
    Format the winner and loser rating changes.

    Examples:
        1200 -> 1216, 1200 -> 1184  =>  "+16 / -16"
    """
    delta_a = entry.new_a - entry.prev_a
    delta_b = entry.new_b - entry.prev_b
    return f"+{delta_a} / {delta_b}"


def format_time(entry: HistoryEntry) -> str:
    """Local, human readable timestamp. Falls back to the stored string."""
    try:
        when = datetime.fromisoformat(entry.time)
    except ValueError:
        return entry.time
    return when.astimezone().strftime('%Y-%m-%d %H:%M:%S')
