import csv
import io
import logging
import os
from typing import List, Optional, Sequence

from .constants import EXPORT_HEADER, EXPORT_FILENAME
from .models import Movie

logger = logging.getLogger(__name__)


def sort_by_elo(movies: Sequence[Movie]) -> List[Movie]:
    """Highest Elo first. Ties keep the collection order."""
    return sorted(movies, key=lambda m: m.elo, reverse=True)


def format_rating(rating: Optional[float]) -> str:
    """
    Format a source rating for export.

    Examples:
        4.5 -> "4.5"
        5.0 -> "5"
        1234567.0 -> "1234567"
        None -> ""
    """
    if rating is None:
        return ''
    if rating.is_integer():
        return str(int(rating))
    return repr(rating)


def export_csv(movies: Sequence[Movie]) -> str:
    """
    Render the collection as CSV text sorted by descending Elo.
    Returns an empty string for an empty collection.
    """
    if not movies:
        return ''

    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')

    # Write header
    writer.writerow(EXPORT_HEADER)

    # Write data rows
    for movie in sort_by_elo(movies):
        writer.writerow([
            movie.title,
            movie.year or '',
            format_rating(movie.rating),
            movie.elo,
            movie.played,
            movie.wins,
            movie.losses,
        ])

    return output.getvalue()


def write_export(movies: Sequence[Movie], path: Optional[str] = None,
                 target_dir: str = '.') -> Optional[str]:
    """
    Write the rankings CSV to `path` (default: movie_rankings.csv in target_dir).
    Returns the written path, or None if there is nothing to export.
    """
    text = export_csv(movies)
    if not text:
        return None

    csv_path = path or os.path.join(target_dir, EXPORT_FILENAME)
    with open(csv_path, 'w', newline='', encoding='utf-8') as csvfile:
        csvfile.write(text)
    logger.info("Exported %d movies to %s", len(movies), csv_path)
    return csv_path
