"""Terminal rendering tests."""

from movie_elo.store import MovieStore
from movie_elo.ui import display_history, display_leaderboard


class TestDisplayHistory:

    def test_dangling_ids_show_raw_id(self, capsys):
        store = MovieStore()
        store.import_rows([{"Title": "Heat", "Year": "1995"}, {"Title": "Alien", "Year": "1979"}])
        store.resolve("Heat|1995", "Alien|1979")
        store.import_rows([{"Title": "Cats", "Year": "2019"}])

        display_history(store)
        out = capsys.readouterr().out
        assert "Heat|1995 > Alien|1979" in out
        assert "+16 / -16" in out

    def test_known_ids_show_titles(self, capsys):
        store = MovieStore()
        store.import_rows([{"Title": "Heat", "Year": "1995"}, {"Title": "Alien", "Year": "1979"}])
        store.resolve("Alien|1979", "Heat|1995")

        display_history(store)
        assert "Alien > Heat" in capsys.readouterr().out

    def test_empty(self, capsys):
        display_history(MovieStore())
        assert "No comparisons yet." in capsys.readouterr().out


class TestDisplayLeaderboard:

    def test_order(self, capsys):
        store = MovieStore()
        store.import_rows([{"Title": "Cats", "Rating": "0.5"}, {"Title": "Alien", "Rating": "5"}])
        display_leaderboard(store, 2)
        lines = [line for line in capsys.readouterr().out.splitlines() if ". " in line]
        assert lines[0].endswith("Alien")
        assert lines[1].endswith("Cats")
