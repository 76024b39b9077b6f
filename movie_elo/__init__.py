"""Movie Elo - Rank movies using Elo ratings through pairwise comparisons."""

from .constants import (
    DEFAULT_ELO,
    K_FACTOR,
    DEFAULT_LEADERBOARD_SIZE,
    DB_NAME,
    EXPORT_FILENAME,
)

# Public API exports
from .models import Movie, HistoryEntry, movie_from_row
from .elo import calculate_win_probability, initial_elo, update_elo_ratings
from .game import select_pair
from .importer import import_rows, parse_csv_text
from .export import export_csv
from .store import MovieStore
from .commands import main

__all__ = [
    'DEFAULT_ELO',
    'K_FACTOR',
    'DEFAULT_LEADERBOARD_SIZE',
    'DB_NAME',
    'EXPORT_FILENAME',
    'Movie',
    'HistoryEntry',
    'movie_from_row',
    'calculate_win_probability',
    'initial_elo',
    'update_elo_ratings',
    'select_pair',
    'import_rows',
    'parse_csv_text',
    'export_csv',
    'MovieStore',
    'main',
]
