"""Performance rating over a window of games."""

import math
from collections.abc import Iterable

from ecf_insight.models.game import Game
from ecf_insight.stats.games import sort_games


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def compute_performance_rating(games: Iterable[Game]) -> int:
    """
    Compute the rating a player performed at over ``games``.

    Uses the linear approximation ``avg_opponent + 800 * p - 400`` where ``p``
    is the fraction of points scored, rather than the FIDE lookup table.
    Games without an opponent rating are left out. No games gives 0.

    Example:
        >>> compute_performance_rating([])
        0
    """
    rated = [game for game in games if game.opponent_rating is not None]
    game_count = len(rated)
    if game_count == 0:
        return 0

    avg_opponent_rating = sum(game.opponent_rating for game in rated) / game_count
    total_score = sum(game.score.points for game in rated)
    p = total_score / game_count
    rating_difference = 800 * p - 400

    return round_half_up(avg_opponent_rating + rating_difference)


def recent_performance_rating(games: Iterable[Game], count: int) -> int:
    """Performance rating over the ``count`` most recent games."""
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    return compute_performance_rating(sort_games(games)[:count])
