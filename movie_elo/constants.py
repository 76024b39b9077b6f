"""Global constants for movie_elo."""

# Rating engine
DEFAULT_ELO = 1200
RATING_MIDPOINT = 2.5
ELO_PER_STAR = 200
K_FACTOR = 32

# Pair selection
SAMPLE_LIMIT = 200

# Display
DEFAULT_LEADERBOARD_SIZE = 10
HISTORY_DISPLAY_LIMIT = 200

# Persistence
DB_NAME = "movie_elo.db"
MOVIES_KEY = "mb_movies"
HISTORY_KEY = "mb_history"

# Import / export
TITLE_KEYS = ("Title", "title", "Film", "Name")
RATING_KEYS = ("Rating", "rating", "Your Rating", "your_rating")
YEAR_KEYS = ("Year", "year", "Release Year")
UNKNOWN_TITLE = "Unknown"
EXPORT_FILENAME = "movie_rankings.csv"
EXPORT_HEADER = ("Title", "Year", "Rating", "Elo", "Played", "Wins", "Losses")
