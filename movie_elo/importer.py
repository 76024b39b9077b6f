import csv
import io
import logging
from typing import Dict, List, NamedTuple, Sequence

from .models import Movie, movie_from_row

logger = logging.getLogger(__name__)


class ImportResult(NamedTuple):
    """Outcome of an import.

    movies: the collection after the import (the original list on failure)
    message: human readable status line
    imported: number of rows parsed from the source
    added: number of movies that actually entered the collection
    failed: True if the source could not be read or parsed
    """
    movies: List[Movie]
    message: str
    imported: int = 0
    added: int = 0
    failed: bool = False


def parse_csv_text(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text with a header row into a list of row dicts.

    Blank lines are skipped. Raises ValueError if there is no header row
    or no data rows, and csv.Error on malformed input.
    """
    if text.startswith('\ufeff'):
        text = text[1:]
    reader = csv.DictReader(io.StringIO(text, newline=''))
    if not reader.fieldnames:
        raise ValueError("no header row found")
    rows = list(reader)
    if not rows:
        raise ValueError("no data rows found")
    return rows


def read_csv_file(path: str) -> List[Dict[str, str]]:
    """Read and parse a CSV file. Raises OSError, UnicodeDecodeError, csv.Error or ValueError."""
    with open(path, 'r', encoding='utf-8-sig', newline='') as csvfile:
        return parse_csv_text(csvfile.read())


def merge_movies(current: Sequence[Movie], parsed: Sequence[Movie]) -> List[Movie]:
    """
    Append parsed movies whose id is not already tracked.

    The first movie seen for an id wins: existing movies keep their ratings
    and stats, and later duplicates (also within `parsed`) are dropped.
    """
    seen = {m.id for m in current}
    merged = list(current)
    for movie in parsed:
        if movie.id in seen:
            continue
        seen.add(movie.id)
        merged.append(movie)
    return merged


def _dedupe(parsed: Sequence[Movie]) -> List[Movie]:
    return merge_movies([], parsed)


def import_rows(current: Sequence[Movie], rows: Sequence[Dict[str, str]],
                merge: bool = False) -> ImportResult:
    """
    Convert rows into movies and either replace or extend the collection.

    Fresh import replaces the whole collection with the parsed movies.
    Merge import only adds movies with ids not already present.
    """
    parsed = [movie_from_row(row) for row in rows]
    mode = "(merge mode)" if merge else "(fresh import)"
    message = f"Imported {len(parsed)} rows from CSV. {mode}"

    if merge:
        movies = merge_movies(current, parsed)
        added = len(movies) - len(current)
    else:
        movies = _dedupe(parsed)
        added = len(movies)

    if added < len(parsed):
        logger.debug("Dropped %d rows with already tracked ids", len(parsed) - added)
    return ImportResult(movies, message, len(parsed), added)


def import_text(current: Sequence[Movie], text: str, merge: bool = False) -> ImportResult:
    """Parse CSV text and import it. Parse errors leave the collection unchanged."""
    try:
        rows = parse_csv_text(text)
    except (csv.Error, ValueError) as e:
        return ImportResult(list(current), f"CSV parse error: {e}", failed=True)
    return import_rows(current, rows, merge)


def import_file(current: Sequence[Movie], path: str, merge: bool = False) -> ImportResult:
    """Read a CSV file and import it. Read and parse errors leave the collection unchanged."""
    try:
        rows = read_csv_file(path)
    except (OSError, UnicodeDecodeError, csv.Error, ValueError) as e:
        logger.debug("Import of %s failed: %s", path, e)
        return ImportResult(list(current), f"CSV parse error: {e}", failed=True)
    return import_rows(current, rows, merge)
