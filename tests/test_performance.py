"""Tests for the performance rating calculation."""

import pytest

from ecf_insight.stats.performance import (
    compute_performance_rating,
    recent_performance_rating,
    round_half_up,
)


def test_empty_input_is_zero():
    assert compute_performance_rating([]) == 0


def test_mixed_results(make_game):
    games = [
        make_game(opponent_rating=1800, score=1),
        make_game(opponent_rating=2000, score=5),
        make_game(opponent_rating=1900, score=0),
    ]

    assert compute_performance_rating(games) == 1900


@pytest.mark.parametrize(
    ("score", "expected"),
    [(1, 2400), (0, 1600), (5, 2000)],
)
def test_single_game(make_game, score, expected):
    assert compute_performance_rating([make_game(opponent_rating=2000, score=score)]) == expected


@pytest.mark.parametrize(
    ("score", "offset"),
    [(1, 400), (0, -400), (5, 0)],
)
def test_constant_opponent_rating(make_game, score, offset):
    games = [make_game(opponent_rating=1725, score=score) for _ in range(7)]

    assert compute_performance_rating(games) == 1725 + offset


def test_halves_round_up(make_game):
    games = [
        make_game(opponent_rating=2000, score=1),
        make_game(opponent_rating=2001, score=0),
    ]

    # avg 2000.5, p 0.5
    assert compute_performance_rating(games) == 2001


def test_result_is_not_clamped(make_game):
    games = [make_game(opponent_rating=100, score=0)]

    assert compute_performance_rating(games) == -300


def test_games_without_opponent_rating_are_ignored(make_game):
    games = [
        make_game(opponent_rating=2000, score=1),
        make_game(opponent_rating=None, score=0),
    ]

    assert compute_performance_rating(games) == 2400
    assert compute_performance_rating([make_game(opponent_rating=None)]) == 0


def test_recent_performance_uses_most_recent_games(make_game):
    games = [
        make_game(game_date="2024-01-01", opponent_rating=2000, score=0),
        make_game(game_date="2024-03-01", opponent_rating=2000, score=1),
        make_game(game_date="2024-02-01", opponent_rating=2000, score=0),
    ]

    assert recent_performance_rating(games, 1) == 2400
    assert recent_performance_rating(games, 2) == 2000
    assert recent_performance_rating(games, 50) == round_half_up(2000 + 800 / 3 - 400)


def test_recent_performance_rejects_non_positive_count(make_game):
    with pytest.raises(ValueError, match="positive"):
        recent_performance_rating([make_game()], 0)


def test_round_half_up():
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
