"""Tests for the most-common-opponents summary."""

from ecf_insight.stats.opponents import OpponentKey, group_by_opponent


def test_tallies_wins_losses_draws(make_game):
    games = [
        make_game(opponent_name="Smith, John", score=1),
        make_game(opponent_name="Smith, John", score=0),
        make_game(opponent_name="Smith, John", score=5),
        make_game(opponent_name="Smith, John", score=1),
        make_game(opponent_name="Jones, Amy", score=0),
    ]

    stats = group_by_opponent(games)

    assert [s.name for s in stats] == ["Smith, John", "Jones, Amy"]
    smith = stats[0]
    assert (smith.total_games, smith.wins, smith.losses, smith.draws) == (4, 2, 1, 1)
    assert len(smith.games) == 4


def test_top_ten_only(make_game):
    games = []
    for i in range(12):
        games.extend(make_game(opponent_name=f"Player {i:02d}", score=i % 2) for _ in range(i + 1))

    stats = group_by_opponent(games)

    assert len(stats) == 10
    assert stats[0].name == "Player 11"
    assert [s.total_games for s in stats] == sorted((s.total_games for s in stats), reverse=True)
    returned = {s.name for s in stats}
    in_top = [g for g in games if g.opponent_name in returned]
    assert sum(s.wins + s.losses + s.draws for s in stats) == len(in_top)


def test_ties_keep_first_seen_order(make_game):
    games = [
        make_game(opponent_name="Charlie"),
        make_game(opponent_name="Alpha"),
        make_game(opponent_name="Bravo"),
        make_game(opponent_name="Bravo"),
    ]

    assert [s.name for s in group_by_opponent(games)] == ["Bravo", "Charlie", "Alpha"]


def test_custom_limit(make_game):
    games = [make_game(opponent_name=name) for name in "ABCDE"]

    assert len(group_by_opponent(games, limit=2)) == 2
    assert group_by_opponent(games, limit=0) == []


def test_same_name_is_merged_by_default(make_game):
    games = [
        make_game(opponent_name="Smith, John", opponent_no="111111A"),
        make_game(opponent_name="Smith, John", opponent_no="222222B"),
    ]

    [stats] = group_by_opponent(games)

    assert stats.total_games == 2
    assert stats.opponent_no == "111111A"
    assert stats.opponent_codes == ("111111A", "222222B")
    assert stats.is_ambiguous


def test_grouping_by_code_separates_namesakes(make_game):
    games = [
        make_game(opponent_name="Smith, John", opponent_no="111111A"),
        make_game(opponent_name="Smith, John", opponent_no="222222B"),
        make_game(opponent_name="Smith, John", opponent_no="222222B"),
        make_game(opponent_name="Unknown", opponent_no=None),
    ]

    stats = group_by_opponent(games, key=OpponentKey.CODE)

    assert [(s.opponent_no, s.total_games) for s in stats] == [
        ("222222B", 2),
        ("111111A", 1),
        (None, 1),
    ]
    assert not any(s.is_ambiguous for s in stats)


def test_empty_input():
    assert group_by_opponent([]) == []
