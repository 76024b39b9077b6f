"""CLI tests."""

import builtins
import sys
from unittest.mock import patch

from movie_elo.commands import main, parse_count_command, run_session
from movie_elo.store import MovieStore

from .conftest import make_movie


def feed(*answers):
    replies = iter(answers)
    return patch.object(builtins, "input", lambda prompt="": next(replies))


class TestParseCountCommand:

    def test_values(self):
        assert parse_count_command("top 5", "top", 10) == 5
        assert parse_count_command("TOP", "top", 10) == 10
        assert parse_count_command("top x", "top", 10) == 10
        assert parse_count_command("hist 3", "top", 10) is None


class TestRunSession:

    def test_choose_and_quit(self, capsys):
        store = MovieStore()
        store.movies = [make_movie("Heat|1995", 1300), make_movie("Alien|1979", 1250)]
        with feed("A", "q"):
            run_session(store, ".")
        assert len(store.history) == 1
        assert all(m.played == 1 for m in store.movies)
        assert "Rankings:" in capsys.readouterr().out

    def test_skip_does_not_record(self):
        store = MovieStore()
        store.movies = [make_movie("Heat|1995"), make_movie("Alien|1979")]
        with feed("s", "top", "hist", "bogus", "q"):
            run_session(store, ".")
        assert store.history == []

    def test_empty_store_import(self, ratings_csv):
        store = MovieStore()
        with feed(f"import {ratings_csv}", "B", "q"):
            run_session(store, ".")
        assert len(store.movies) == 3
        assert len(store.history) == 1

    def test_import_redraws_matchup(self, tmp_path, capsys):
        path = tmp_path / "rerated.csv"
        path.write_text("Title,Year,Rating\nHeat,1995,5\nAlien,1979,5\n", encoding="utf-8")
        store = MovieStore()
        store.movies = [make_movie("Heat|1995", 1300), make_movie("Alien|1979", 1250)]
        with feed(f"import {path}", "q"):
            run_session(store, ".")
        matchups = [line for line in capsys.readouterr().out.splitlines() if line.startswith("A: ")]
        assert len(matchups) == 2
        assert "(1700 /" in matchups[-1]

    def test_reset_needs_confirmation(self):
        store = MovieStore()
        store.movies = [make_movie("Heat|1995"), make_movie("Alien|1979")]
        with feed("reset", "n", "reset", "y", "q"):
            run_session(store, ".")
        assert store.movies == []


class TestMain:

    def test_import_and_export(self, tmp_path, ratings_csv):
        out = tmp_path / "out.csv"
        argv = ["movie-elo", str(tmp_path), "-i", str(ratings_csv), "-e", str(out)]
        with patch.object(sys, "argv", argv):
            main()
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Title,Year,Rating,Elo,Played,Wins,Losses"
        assert lines[1] == "Alien,1979,5,1700,0,0,0"

        store = MovieStore.open(str(tmp_path))
        assert len(store.movies) == 3
        store.close()

    def test_default_export_path(self, tmp_path, ratings_csv):
        with patch.object(sys, "argv", ["movie-elo", str(tmp_path), "-a", str(ratings_csv), "-e"]):
            main()
        assert (tmp_path / "movie_rankings.csv").exists()

    def test_top_is_clamped(self, tmp_path, ratings_csv, capsys):
        with patch.object(sys, "argv", ["movie-elo", str(tmp_path), "-i", str(ratings_csv), "-t", "-3"]):
            main()
        out = capsys.readouterr().out
        assert "Top 1 Movies:" in out
        assert "Alien (1979)" in out
        assert "Heat (1995)" not in out

    def test_reset_flag(self, tmp_path, ratings_csv):
        with patch.object(sys, "argv", ["movie-elo", str(tmp_path), "-i", str(ratings_csv), "-t", "3"]):
            main()
        with patch.object(sys, "argv", ["movie-elo", str(tmp_path), "--reset"]), feed("y"):
            main()
        store = MovieStore.open(str(tmp_path))
        assert store.movies == []
        store.close()
