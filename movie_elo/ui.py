from typing import Dict, Optional

from .constants import DEFAULT_LEADERBOARD_SIZE, HISTORY_DISPLAY_LIMIT
from .colors import (
    green, red, yellow, cyan, dim, bold, bold_cyan,
    delta_color, prob_color, histogram_bar
)
from .elo import calculate_win_probability
from .export import sort_by_elo
from .history import recent_entries, resolve_title, format_time
from .models import Movie
from .store import MovieStore


def format_record(movie: Movie) -> str:
    """Format a W/L record like "12W-8L"."""
    return f"{movie.wins}W-{movie.losses}L"


def create_elo_histogram(elo: float, max_elo: float, bar_width: int = 40) -> str:
    """
    Create a colored histogram bar using filled block characters.

    Args:
        elo: Current Elo rating
        max_elo: Maximum Elo rating to use as reference for scaling
        bar_width: Maximum number of blocks to display

    Returns:
        A string containing the colored histogram bar padded to bar_width
    """
    if max_elo <= 0:
        return ' ' * bar_width

    ratio = max(0.0, min(elo / max_elo, 1.0))
    filled_blocks = int(ratio * bar_width)

    bar = '█' * filled_blocks
    return histogram_bar(bar, ratio) + ' ' * (bar_width - filled_blocks)


def display_leaderboard(store: MovieStore, limit: int = DEFAULT_LEADERBOARD_SIZE) -> None:
    """Display the top N movies with histogram visualization."""
    results = sort_by_elo(store.movies)[:limit]

    if not results:
        print(f"\n{bold_cyan(f'Top {limit} Movies:')}\nNo movies found.\n")
        return

    max_elo = results[0].elo

    print(f"\n{bold_cyan(f'Top {limit} Movies:')}")
    for i, movie in enumerate(results, 1):
        histogram = create_elo_histogram(movie.elo, max_elo)
        print(f"{histogram} {i:3d}. {movie.elo:4d} ({format_record(movie):9s}) {movie.label}")
    print()


def display_ranking_changes(store: MovieStore, old_rankings: Dict[str, int],
                            winner_id: str, loser_id: str) -> None:
    """Display ranking changes for the two movies that were just compared."""
    new_rankings = store.get_rankings()

    print(f"\n{bold('Rankings:')}")
    for movie_id in (winner_id, loser_id):
        movie = store.find(movie_id)
        if movie is None:
            continue

        old_rank = old_rankings.get(movie_id)
        new_rank = new_rankings.get(movie_id)

        if old_rank == new_rank:
            movement = dim(f"#{new_rank} (no change)")
        elif old_rank is None:
            movement = cyan(f"#{new_rank} (new)")
        elif old_rank > new_rank:
            movement = green(f"#{new_rank} (up from #{old_rank})")
        else:
            movement = red(f"#{new_rank} (down from #{old_rank})")

        print(f"  {cyan(movie.label)}: {movement} | New Elo: {bold(str(movie.elo))}")
    print()


def display_history(store: MovieStore, limit: int = HISTORY_DISPLAY_LIMIT) -> None:
    """Display recent comparisons, most recent first."""
    entries = recent_entries(store.history, limit)
    if not entries:
        print(f"\n{bold_cyan('History:')}\nNo comparisons yet.\n")
        return

    movies_by_id = store.movies_by_id()
    print(f"\n{bold_cyan('History (most recent first):')}")
    for entry in entries:
        winner = resolve_title(entry.winner, movies_by_id)
        loser = resolve_title(entry.loser, movies_by_id)
        delta_a = entry.new_a - entry.prev_a
        delta_b = entry.new_b - entry.prev_b
        print(f"  {dim(format_time(entry))}  {winner} > {loser}  "
              f"{delta_color(delta_a, f'+{delta_a}')} / {delta_color(delta_b, str(delta_b))}")
    print()


def display_stats(store: MovieStore) -> None:
    print(f"Movies tracked: {bold(str(len(store.movies)))} | "
          f"Progress: {bold(str(len(store.history)))} matchups")


def parse_count_command(user_input: str, command: str, default: int) -> Optional[int]:
    """
    Parse '<command> [N]' and return N, or None if the input is another command.

    Examples:
        parse_count_command("top 5", "top", 10) -> 5
        parse_count_command("top", "top", 10) -> 10
        parse_count_command("a", "top", 10) -> None
    """
    parts = user_input.strip().lower().split()
    if not parts or parts[0] != command:
        return None

    if len(parts) == 1:
        return default

    try:
        return max(1, int(parts[1]))
    except ValueError:
        return default


def display_welcome_message() -> None:
    """Display welcome message and available commands."""
    print(f"{bold_cyan('Movie Elo')} - Movie Ranking Tool")
    print(f"Commands: {bold('A/B')} (better movie), {bold('s')} (skip), "
          f"{bold('top')} [N], {bold('hist')} [N], {bold('stats')}, "
          f"{bold('import')} <csv>, {bold('add')} <csv>, {bold('export')} [path], "
          f"{bold('reset')}, {bold('q')} (quit)")
    print(dim("Tip: matchups favor movies with close Elo so each choice matters."))
    print(dim("Press Ctrl+C to exit\n"))


def format_matchup(movie_a: Movie, movie_b: Movie, rankings: Dict[str, int]) -> str:
    """Format matchup display string with colors."""
    prob_a = calculate_win_probability(movie_a.elo, movie_b.elo)

    # Display probabilities as percentages, always >= 50%
    if prob_a >= 0.5:
        win_prob_display = f"{prob_a * 100:.0f}% A"
        label_a, label_b = bold(movie_a.label), movie_b.label
    else:
        win_prob_display = f"{(1.0 - prob_a) * 100:.0f}% B"
        label_a, label_b = movie_a.label, bold(movie_b.label)

    prob_colored = prob_color(max(prob_a, 1.0 - prob_a), win_prob_display)
    rank_a = rankings.get(movie_a.id, "?")
    rank_b = rankings.get(movie_b.id, "?")

    return (f"{bold('A')}: {label_a} ({movie_a.elo} / #{rank_a} / played {movie_a.played})\n"
            f"{dim('vs')}\n"
            f"{bold('B')}: {label_b} ({movie_b.elo} / #{rank_b} / played {movie_b.played})\n"
            f"Win probability: {prob_colored}")


def display_empty_hint() -> None:
    print(yellow("Import your ratings.csv to get started (import <path>)."))
