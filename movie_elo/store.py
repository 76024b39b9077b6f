"""State container for the movie collection and its comparison history.

All mutations go through MovieStore and are written back to the blob store
right after they happen. Persistence errors are logged and never raised.
"""

import dataclasses
import logging
import random
import sqlite3
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import K_FACTOR, MOVIES_KEY, HISTORY_KEY
from .db import init_db, load_blob, save_blob, delete_blobs, move_aside
from .elo import update_elo_ratings
from .export import write_export
from .game import select_pair
from .history import make_entry, record
from .importer import ImportResult, import_file, import_rows, import_text, merge_movies
from .models import HistoryEntry, Movie

logger = logging.getLogger(__name__)


def _decode_movies(data) -> List[Movie]:
    if not isinstance(data, list):
        return []
    try:
        movies = [Movie.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.debug("Discarding stored movies: %s", e)
        return []
    return merge_movies([], movies)


def _decode_history(data) -> List[HistoryEntry]:
    if not isinstance(data, list):
        return []
    try:
        return [HistoryEntry.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.debug("Discarding stored history: %s", e)
        return []


class MovieStore:
    """Owns the movie collection, the history log and their persistence.

    conn: SQLite connection used for persistence, or None to keep state in memory
    rng: random source for pair selection (seed it for reproducible matchups)
    k: K-factor used when resolving comparisons
    """

    def __init__(self, conn: Optional[sqlite3.Connection] = None,
                 rng: Optional[random.Random] = None, k: float = K_FACTOR):
        self.conn = conn
        self.rng = rng or random.Random()
        self.k = k
        self.movies: List[Movie] = []
        self.history: List[HistoryEntry] = []

    @classmethod
    def open(cls, target_dir: str = '.', **kwargs) -> 'MovieStore':
        """
        Open (or create) the database in target_dir and load saved state.

        An unreadable database file is moved aside and replaced by an empty one.
        If that fails too, the store keeps its state in memory only.
        """
        try:
            conn = init_db(target_dir)
        except sqlite3.DatabaseError as e:
            logger.warning("Unreadable database in %s, starting empty: %s", target_dir, e)
            conn = None
            if move_aside(target_dir):
                try:
                    conn = init_db(target_dir)
                except sqlite3.Error as retry_error:
                    logger.warning("Could not create a new database: %s", retry_error)
        store = cls(conn, **kwargs)
        store.load()
        return store

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def load(self) -> None:
        """Load saved state. Missing or unreadable blobs load as empty."""
        if self.conn is None:
            self.movies, self.history = [], []
            return
        self.movies = _decode_movies(load_blob(self.conn, MOVIES_KEY))
        self.history = _decode_history(load_blob(self.conn, HISTORY_KEY))
        logger.debug("Loaded %d movies and %d history entries", len(self.movies), len(self.history))

    def save(self) -> bool:
        """Write both blobs. Returns False if persisting failed."""
        if self.conn is None:
            return True
        try:
            save_blob(self.conn, MOVIES_KEY, [m.to_dict() for m in self.movies])
            save_blob(self.conn, HISTORY_KEY, [h.to_dict() for h in self.history])
        except sqlite3.Error as e:
            logger.warning("Could not save state: %s", e)
            return False
        return True

    # Imports

    def _apply_import(self, result: ImportResult) -> ImportResult:
        if not result.failed:
            self.movies = result.movies
            self.save()
        return result

    def import_rows(self, rows: Sequence[Dict[str, str]], merge: bool = False) -> ImportResult:
        """Import already parsed rows (fresh import replaces, merge only adds new ids)."""
        return self._apply_import(import_rows(self.movies, rows, merge))

    def import_text(self, text: str, merge: bool = False) -> ImportResult:
        return self._apply_import(import_text(self.movies, text, merge))

    def import_file(self, path: str, merge: bool = False) -> ImportResult:
        return self._apply_import(import_file(self.movies, path, merge))

    # Comparisons

    def next_pair(self) -> Optional[Tuple[Movie, Movie]]:
        """Pick the next matchup, or None with fewer than two movies."""
        return select_pair(self.movies, self.rng)

    def resolve(self, winner_id: str, loser_id: str) -> Optional[HistoryEntry]:
        """
        Record that winner_id beat loser_id and update both ratings.
        Returns the new history entry, or None if either movie is missing.
        """
        if winner_id == loser_id:
            return None
        winner = self.find(winner_id)
        loser = self.find(loser_id)
        if winner is None or loser is None:
            return None

        new_a, new_b = update_elo_ratings(winner.elo, loser.elo, 1, self.k)
        entry = make_entry(winner, loser, new_a, new_b)

        updated = []
        for movie in self.movies:
            if movie.id == winner.id:
                movie = dataclasses.replace(movie, elo=new_a, played=movie.played + 1,
                                            wins=movie.wins + 1)
            elif movie.id == loser.id:
                movie = dataclasses.replace(movie, elo=new_b, played=movie.played + 1,
                                            losses=movie.losses + 1)
            updated.append(movie)

        self.movies = updated
        self.history = record(self.history, entry)
        self.save()
        return entry

    # Queries

    def find(self, movie_id: str) -> Optional[Movie]:
        for movie in self.movies:
            if movie.id == movie_id:
                return movie
        return None

    def movies_by_id(self) -> Dict[str, Movie]:
        return {m.id: m for m in self.movies}

    def get_rankings(self) -> Dict[str, int]:
        """Get current rankings as a dictionary mapping movie id to rank position."""
        ordered = sorted(self.movies, key=lambda m: m.elo, reverse=True)
        return {movie.id: rank for rank, movie in enumerate(ordered, 1)}

    def export(self, path: Optional[str] = None, target_dir: str = '.') -> Optional[str]:
        """Write the rankings CSV. Returns None when there are no movies."""
        return write_export(self.movies, path, target_dir)

    # Reset

    def reset(self) -> None:
        """Clear the collection and history, in memory and on disk."""
        self.movies = []
        self.history = []
        if self.conn is None:
            return
        try:
            delete_blobs(self.conn, (MOVIES_KEY, HISTORY_KEY))
        except sqlite3.Error as e:
            logger.warning("Could not clear saved state: %s", e)
