"""Head-to-head summary of the most frequent opponents."""

from collections.abc import Iterable
from enum import Enum

from ecf_insight.models.aggregates import OpponentStats
from ecf_insight.models.game import Game, GameScore


class OpponentKey(str, Enum):
    """What identifies "the same opponent"."""

    NAME = "name"
    CODE = "code"


def _group_key(game: Game, key: OpponentKey) -> str:
    if key is OpponentKey.CODE and game.opponent_no:
        return game.opponent_no
    return game.opponent_name


def group_by_opponent(
    games: Iterable[Game],
    limit: int = 10,
    key: OpponentKey = OpponentKey.NAME,
) -> list[OpponentStats]:
    """
    Tally wins, losses and draws per opponent.

    Grouping is by display name unless ``key`` is ``OpponentKey.CODE``, so
    distinct players sharing a name are merged by default; every opponent
    code seen is kept on the aggregate. Games without a code fall back to
    their name when grouping by code.

    Returns:
        At most ``limit`` opponents, most games first. Opponents with equal
        game counts keep the order in which they were first seen.
    """
    buckets: dict[str, list[Game]] = {}
    for game in games:
        buckets.setdefault(_group_key(game, key), []).append(game)

    stats = []
    for opponent_games in buckets.values():
        codes = list(dict.fromkeys(g.opponent_no for g in opponent_games if g.opponent_no))
        first = opponent_games[0]
        stats.append(
            OpponentStats(
                name=first.opponent_name,
                opponent_no=first.opponent_no,
                opponent_codes=tuple(codes),
                total_games=len(opponent_games),
                wins=sum(1 for g in opponent_games if g.score is GameScore.WIN),
                losses=sum(1 for g in opponent_games if g.score is GameScore.LOSS),
                draws=sum(1 for g in opponent_games if g.score is GameScore.DRAW),
                games=tuple(opponent_games),
            )
        )

    stats.sort(key=lambda s: s.total_games, reverse=True)
    return stats[: max(limit, 0)]
