"""Tests for the live rating estimate."""

from datetime import date

import pytest

from ecf_insight.stats.live_rating import estimate_live_rating, rating_change


def test_no_games(today):
    assert estimate_live_rating([], today) is None


def test_latest_game_before_current_month(raw_game, today):
    raws = [raw_game(game_date="2024-04-30", player_rating=1500)]

    assert estimate_live_rating(raws, today) is None


def test_game_on_first_of_month_counts(raw_game, today):
    raws = [raw_game(game_date="2024-05-01", player_rating=1512)]

    assert estimate_live_rating(raws, today) == 1512


def test_latest_games_on_different_days(raw_game, today):
    raws = [
        raw_game(game_date="2024-05-12", player_rating=1520, increment=6),
        raw_game(game_date="2024-05-05", player_rating=1514, increment=4),
    ]

    assert estimate_live_rating(raws, today) == 1520


def test_same_day_second_entry_is_latest(raw_game, today):
    raws = [
        raw_game(game_date="2024-05-10", player_rating=1500, increment=8),
        raw_game(game_date="2024-05-10", player_rating=1490, increment=-9),
    ]

    # 1500 - (1490 + 8) = 2, 1490 - (1500 - 9) = -1
    assert estimate_live_rating(raws, today) == 1490


def test_same_day_first_entry_is_latest(raw_game, today):
    raws = [
        raw_game(game_date="2024-05-10", player_rating=1500, increment=10),
        raw_game(game_date="2024-05-10", player_rating=1490, increment=3),
    ]

    assert estimate_live_rating(raws, today) == 1500


def test_same_day_inconsistent_entries_fall_back_to_feed_order(raw_game, today):
    raws = [
        raw_game(game_date="2024-05-10", player_rating=1500, increment=8),
        raw_game(game_date="2024-05-10", player_rating=1490, increment=-12),
    ]

    assert estimate_live_rating(raws, today) == 1500


def test_only_first_two_records_are_inspected(raw_game, today):
    raws = [
        raw_game(game_date="2024-05-12", player_rating=1520),
        raw_game(game_date="2024-05-11", player_rating=1514),
        raw_game(game_date="2024-05-12", player_rating="garbage"),
    ]

    assert estimate_live_rating(raws, today) == 1520


def test_raw_records_are_used_before_filtering(raw_game, today):
    # A record that fails game validation still carries the running rating.
    raws = [raw_game(game_date="2024-05-12", score=9, player_rating=1533)]

    assert estimate_live_rating(raws, today) == 1533


@pytest.mark.parametrize(
    ("game_date", "player_rating"),
    [
        ("2024-05-12", None),
        ("2024-05-12", "n/a"),
        ("yesterday", 1500),
    ],
)
def test_unusable_latest_record(raw_game, today, game_date, player_rating):
    raws = [raw_game(game_date=game_date, player_rating=player_rating)]

    assert estimate_live_rating(raws, today) is None


def test_missing_fields_give_none(raw_game, today):
    no_rating = raw_game(game_date="2024-05-12")
    del no_rating["player_rating"]
    same_day = [
        raw_game(game_date="2024-05-10", player_rating=1500, increment=None),
        raw_game(game_date="2024-05-10", player_rating=1490, increment=-9),
    ]

    assert estimate_live_rating([no_rating], today) is None
    assert estimate_live_rating(same_day, today) is None


def test_accepts_game_models(make_game, today):
    games = [make_game(game_date="2024-05-15", player_rating=1600)]

    assert estimate_live_rating(games, today) == 1600


def test_month_boundary_uses_as_of(raw_game):
    raws = [raw_game(game_date="2024-05-31", player_rating=1500)]

    assert estimate_live_rating(raws, date(2024, 5, 31)) == 1500
    assert estimate_live_rating(raws, date(2024, 6, 1)) is None


def test_rating_change():
    assert rating_change(1540, 1500) == 40
    assert rating_change(1480, 1500) == -20
    assert rating_change(None, 1500) is None
    assert rating_change(1500, None) is None
