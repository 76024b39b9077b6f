import random

import pytest

from movie_elo.models import Movie
from movie_elo.store import MovieStore


def make_movie(movie_id: str, elo: int = 1200, **kwargs) -> Movie:
    title, _, year = movie_id.partition('|')
    return Movie(id=movie_id, title=title, year=year or None,
                 rating=kwargs.pop('rating', None), elo=elo, **kwargs)


class ScriptedRandom:
    """Stand-in random source that returns a fixed sequence of choices."""

    def __init__(self, picks):
        self.picks = list(picks)

    def choice(self, seq):
        return self.picks.pop(0)


@pytest.fixture
def movies():
    return [
        make_movie("Heat|1995", 1300),
        make_movie("Alien|1979", 1250),
        make_movie("Cats|2019", 800),
    ]


@pytest.fixture
def store(tmp_path):
    store = MovieStore.open(str(tmp_path), rng=random.Random(7))
    yield store
    store.close()


@pytest.fixture
def ratings_csv(tmp_path):
    path = tmp_path / "ratings.csv"
    path.write_text(
        "Date,Name,Year,Letterboxd URI,Rating\n"
        "2024-01-01,Heat,1995,https://boxd.it/a,4.5\n"
        "2024-01-02,Alien,1979,https://boxd.it/b,5\n"
        "2024-01-03,Cats,2019,https://boxd.it/c,0.5\n",
        encoding="utf-8",
    )
    return path
