"""Rating engine tests."""

import math

import pytest

from movie_elo.elo import calculate_win_probability, initial_elo, round_half_up, update_elo_ratings


class TestInitialElo:

    def test_midpoint_maps_to_default(self):
        assert initial_elo(2.5) == 1200

    def test_missing_rating(self):
        assert initial_elo(None) == 1200
        assert initial_elo(float('nan')) == 1200
        assert initial_elo("abc") == 1200

    def test_linear_mapping(self):
        assert initial_elo(5) == 1700
        assert initial_elo(0.5) == 800
        assert initial_elo(0) == 700
        assert initial_elo(4.5) == 1600

    def test_non_decreasing_over_scale(self):
        values = [initial_elo(r / 10) for r in range(0, 51)]
        assert values == sorted(values)


class TestWinProbability:

    @pytest.mark.parametrize("elo_a,elo_b", [(1200, 1200), (1500, 900), (800, 2400), (1234.5, 1199)])
    def test_complementary(self, elo_a, elo_b):
        total = calculate_win_probability(elo_a, elo_b) + calculate_win_probability(elo_b, elo_a)
        assert total == pytest.approx(1.0)

    def test_equal_ratings(self):
        assert calculate_win_probability(1200, 1200) == 0.5

    def test_400_points_is_ten_to_one(self):
        assert calculate_win_probability(1600, 1200) == pytest.approx(10 / 11)


class TestUpdateEloRatings:

    def test_equal_ratings_win(self):
        new_a, new_b = update_elo_ratings(1200, 1200, 1, 32)
        assert new_a > 1200
        assert new_b < 1200
        assert (new_a, new_b) == (1216, 1184)

    def test_underdog_loses(self):
        expected_a = 1 / (1 + 10 ** ((1000 - 1200) / 400))
        new_a, new_b = update_elo_ratings(1200, 1000, 1, 32)
        assert new_a == math.floor(1200 + 32 * (1 - expected_a) + 0.5)
        assert new_b == math.floor(1000 + 32 * (0 - (1 - expected_a)) + 0.5)
        assert (new_a, new_b) == (1208, 992)

    def test_loss_for_a(self):
        new_a, new_b = update_elo_ratings(1200, 1000, 0)
        assert (new_a, new_b) == (1176, 1024)

    def test_rounding_can_be_unbalanced(self):
        # 1200.5 rounds up, 1199.5 rounds up too: +1 / 0
        new_a, new_b = update_elo_ratings(1200, 1200, 1, k=1)
        assert (new_a, new_b) == (1201, 1200)

    def test_returns_ints(self):
        new_a, new_b = update_elo_ratings(1337, 1201, 1)
        assert isinstance(new_a, int)
        assert isinstance(new_b, int)


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (-2.5, -2), (1207.69, 1208), (992.31, 992), (3.0, 3)])
    def test_values(self, value, expected):
        assert round_half_up(value) == expected
