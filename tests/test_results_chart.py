"""Tests for best results and the rating series."""

from datetime import date

from ecf_insight.stats.chart import rating_range, rating_series
from ecf_insight.stats.results import best_results, comparison_score


def test_win_outranks_draw_against_same_opponent(make_game):
    win = make_game(opponent_rating=2000, score=1)
    draw = make_game(opponent_rating=2000, score=5)
    loss = make_game(opponent_rating=2000, score=0)

    assert comparison_score(win) == 2400
    assert comparison_score(draw) == 2000
    assert comparison_score(loss) == 0


def test_best_results_excludes_losses(make_game):
    games = [
        make_game(opponent_name="Strong", opponent_rating=2500, score=0),
        make_game(opponent_name="Drawn", opponent_rating=2300, score=5),
        make_game(opponent_name="Beaten", opponent_rating=2000, score=1),
        make_game(opponent_name="Weak", opponent_rating=1200, score=1),
        make_game(opponent_name="Weaker", opponent_rating=1000, score=1),
    ]

    best = best_results(games)

    assert [g.opponent_name for g in best] == ["Beaten", "Drawn", "Weak"]


def test_best_results_limit_and_empty(make_game):
    games = [make_game(score=1) for _ in range(5)]

    assert len(best_results(games, limit=1)) == 1
    assert best_results([]) == []
    assert best_results([make_game(score=0)]) == []


def test_rating_series_is_chronological(make_game):
    games = [
        make_game(game_date="2024-03-01", player_rating=1520),
        make_game(game_date="2024-01-01", player_rating=1500),
        make_game(game_date="2024-02-01", player_rating=None),
    ]

    points = rating_series(games)

    assert [(p.game_date, p.rating) for p in points] == [
        (date(2024, 1, 1), 1500),
        (date(2024, 3, 1), 1520),
    ]


def test_live_rating_replaces_last_point(make_game):
    games = [
        make_game(game_date="2024-01-01", player_rating=1500),
        make_game(game_date="2024-03-01", player_rating=1520),
    ]

    points = rating_series(games, live_rating=1544)

    assert [p.rating for p in points] == [1500, 1544]
    assert games[1].player_rating == 1520
    assert rating_range(points) == (1500, 1544)


def test_empty_series():
    assert rating_series([], live_rating=1500) == []
    assert rating_range([]) is None
