import argparse
import logging
import os
import sys
from typing import Optional

from .constants import DEFAULT_LEADERBOARD_SIZE, HISTORY_DISPLAY_LIMIT, K_FACTOR
from .colors import bold, green, red, yellow, dim
from .history import format_delta
from .store import MovieStore
from .ui import (
    display_leaderboard, display_ranking_changes, display_history, display_stats,
    display_welcome_message, display_empty_hint, format_matchup, parse_count_command
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for library modules. User-facing output stays on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def confirm(prompt: str) -> bool:
    answer = input(prompt).strip().lower()
    return answer in ('y', 'yes')


def handle_import_command(store: MovieStore, path: str, merge: bool) -> None:
    """Handle 'import <path>' (replace) and 'add <path>' (merge)."""
    if not path:
        print("Usage: import <csv> | add <csv>")
        return

    result = store.import_file(os.path.expanduser(path), merge=merge)
    if result.failed:
        print(red(result.message))
        return

    print(green(result.message))
    if merge:
        print(f"  {result.added} new movie(s) added, {result.imported - result.added} already tracked")


def handle_export_command(store: MovieStore, path: Optional[str], target_dir: str) -> None:
    """Handle the 'export' command."""
    if not store.movies:
        print(yellow("Nothing to export."))
        return
    try:
        csv_path = store.export(path or None, target_dir)
    except OSError as e:
        print(red(f"Error writing export: {e}"))
        return
    print(green(f"Exported {len(store.movies)} movies to {csv_path}"))


def handle_reset_command(store: MovieStore) -> bool:
    """
    Handle the 'reset' command.
    Returns True if the data was cleared.
    """
    if not confirm("Clear all stored movie data? This cannot be undone. (y/N): "):
        print("Reset cancelled.\n")
        return False
    store.reset()
    print("Cleared data.\n")
    return True


def handle_choice(store: MovieStore, winner_id: str, loser_id: str) -> None:
    """Record a comparison and show how the rankings moved."""
    old_rankings = store.get_rankings()
    entry = store.resolve(winner_id, loser_id)
    if entry is None:
        return
    display_ranking_changes(store, old_rankings, winner_id, loser_id)
    print(dim(f"Elo change: {format_delta(entry)}\n"))


def handle_common_command(store: MovieStore, user_input: str, target_dir: str) -> bool:
    """
    Handle commands available with or without a matchup.
    Returns True if the input was recognized.
    """
    command, _, arg = user_input.partition(' ')
    command = command.lower()
    arg = arg.strip()

    top_n = parse_count_command(user_input, 'top', DEFAULT_LEADERBOARD_SIZE)
    if top_n is not None:
        display_leaderboard(store, top_n)
        return True

    hist_n = parse_count_command(user_input, 'hist', HISTORY_DISPLAY_LIMIT)
    if hist_n is not None:
        display_history(store, hist_n)
        return True

    if command == 'stats':
        display_stats(store)
    elif command == 'import':
        handle_import_command(store, arg, merge=False)
    elif command == 'add':
        handle_import_command(store, arg, merge=True)
    elif command == 'export':
        handle_export_command(store, arg, target_dir)
    elif command == 'reset':
        handle_reset_command(store)
    else:
        return False
    return True


def run_session(store: MovieStore, target_dir: str) -> None:
    """Interactive comparison loop. Returns when the user quits."""
    display_welcome_message()
    display_stats(store)

    while True:
        pair = store.next_pair()

        if pair is None:
            display_empty_hint()
            user_input = input("Command (import <csv>/add <csv>/q): ").strip()
            if user_input.lower() in ('q', 'quit', 'exit'):
                return
            if not handle_common_command(store, user_input, target_dir):
                print("Invalid input. Please enter import <csv>, add <csv>, or q")
            continue

        movie_a, movie_b = pair
        matchup_display = format_matchup(movie_a, movie_b, store.get_rankings())
        print(matchup_display)

        # Get user input until the matchup is resolved, skipped or invalidated
        while True:
            user_input = input("Your choice (A/B/s/top [N]/hist [N]/stats/import/add/export/reset/q): ").strip()
            choice = user_input.upper()

            if choice == 'A':
                handle_choice(store, movie_a.id, movie_b.id)
                break
            if choice == 'B':
                handle_choice(store, movie_b.id, movie_a.id)
                break
            if choice == 'S':
                break
            if choice in ('Q', 'QUIT', 'EXIT'):
                return

            before = store.movies
            if handle_common_command(store, user_input, target_dir):
                # Imports and resets replace the collection; draw a new pair
                if store.movies is not before:
                    break
                print(matchup_display)
                continue

            print("Invalid input. Please enter A, B, s, top [N], hist [N], stats, "
                  "import <csv>, add <csv>, export [path], reset, or q")


def main():
    """Main entry point for the Movie Elo CLI tool."""
    parser = argparse.ArgumentParser(description='Movie Elo - Rank movies using Elo ratings')
    parser.add_argument('target_dir', nargs='?', default='.',
                        help='Directory holding the rankings database (default: current directory)')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('-i', '--import', dest='import_path', metavar='CSV',
                        help='Import a ratings CSV, replacing the current movies')
    source.add_argument('-a', '--add', dest='add_path', metavar='CSV',
                        help='Add movies from a ratings CSV, keeping existing ones')
    parser.add_argument('-e', '--export', dest='export_path', nargs='?', const='', default=None,
                        metavar='PATH', help='Export rankings to CSV and exit (default: movie_rankings.csv)')
    parser.add_argument('-t', '--top', dest='top', type=int, default=None, metavar='N',
                        help='Show the top N movies and exit')
    parser.add_argument('-k', '--k-factor', dest='k', type=float, default=K_FACTOR,
                        help=f'Elo K-factor used for updates (default: {K_FACTOR})')
    parser.add_argument('--reset', action='store_true',
                        help='Clear all stored movies and history, then exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.k <= 0:
        print("Error: K-factor must be positive (e.g., 16, 32)")
        sys.exit(1)

    if not os.path.isdir(args.target_dir):
        print(f"Error: {args.target_dir} is not a directory")
        sys.exit(1)

    store = MovieStore.open(args.target_dir, k=args.k)

    try:
        if args.reset:
            handle_reset_command(store)
            return

        if args.import_path:
            handle_import_command(store, args.import_path, merge=False)
        elif args.add_path:
            handle_import_command(store, args.add_path, merge=True)

        if args.export_path is not None or args.top is not None:
            if args.top is not None:
                display_leaderboard(store, max(1, args.top))
            if args.export_path is not None:
                handle_export_command(store, args.export_path, args.target_dir)
            return

        run_session(store, args.target_dir)

    except (KeyboardInterrupt, EOFError):
        print(f"\n\n{bold('Goodbye!')}")
    finally:
        store.close()
