"""Rating-over-time series."""

from collections.abc import Iterable, Sequence

from ecf_insight.models.aggregates import RatingPoint
from ecf_insight.models.game import Game


def rating_series(games: Iterable[Game], live_rating: int | None = None) -> list[RatingPoint]:
    """
    Chronological player ratings, one point per game with a known rating.

    When ``live_rating`` is given the final point carries it instead of the
    rating recorded on the last game. Inputs are never modified.
    """
    rated = sorted(
        (game for game in games if game.player_rating is not None),
        key=lambda game: game.game_date,
    )
    points = [RatingPoint(game_date=game.game_date, rating=game.player_rating) for game in rated]
    if live_rating is not None and points:
        points[-1] = points[-1].model_copy(update={"rating": live_rating})
    return points


def rating_range(points: Sequence[RatingPoint]) -> tuple[int, int] | None:
    """(lowest, highest) rating in the series."""
    if not points:
        return None
    ratings = [point.rating for point in points]
    return min(ratings), max(ratings)
