"""Estimate of the next official rating from not-yet-published games.

The ECF attaches the player's running rating and the rating ``increment``
to every submitted game. When two results land on the same day the feed
order is not reliable, so the entry consistent with "other entry plus its
increment" is taken as the latest.
"""

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from pydantic import TypeAdapter

from ecf_insight.models.game import Game

_DATE = TypeAdapter(date)
_RATING = TypeAdapter(int)
_INCREMENT = TypeAdapter(float)

RawGame = Mapping[str, Any] | Game


def _field(record: RawGame, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def _game_date(record: RawGame) -> date:
    return _DATE.validate_python(_field(record, "game_date"))


def _rating(record: RawGame) -> int:
    return _RATING.validate_python(_field(record, "player_rating"))


def _increment(record: RawGame) -> float:
    return _INCREMENT.validate_python(_field(record, "increment"))


def _reconcile_same_day(game0: RawGame, game1: RawGame) -> int:
    rating0 = _rating(game0)
    rating1 = _rating(game1)

    if rating0 - (rating1 + _increment(game0)) < 1:
        return rating0
    if rating1 - (rating0 + _increment(game1)) < 1:
        return rating1
    # Neither entry follows from the other; trust feed order.
    return rating0


def estimate_live_rating(
    raw_games_most_recent_first: Sequence[RawGame],
    as_of: date,
) -> int | None:
    """
    Estimate the player's current rating from their latest raw game records.

    Works on the API records as received, before any filtering.

    Args:
        raw_games_most_recent_first: Raw records, newest first. Only the first
            two are inspected.
        as_of: Date the estimate is made for.

    Returns:
        The estimated rating, or None when unavailable: no games, the latest
        game predates the current calendar month, or the records lack a
        usable date, rating or increment.
    """
    if not raw_games_most_recent_first:
        return None

    first_of_month = as_of.replace(day=1)

    try:
        game0 = raw_games_most_recent_first[0]
        date0 = _game_date(game0)
        if date0 < first_of_month:
            return None

        if len(raw_games_most_recent_first) < 2:
            return _rating(game0)

        game1 = raw_games_most_recent_first[1]
        if _game_date(game1) != date0:
            return _rating(game0)

        return _reconcile_same_day(game0, game1)
    except (LookupError, AttributeError, TypeError, ValueError):
        return None


def rating_change(live_rating: int | None, official_rating: int | None) -> int | None:
    """Difference between live and official rating, None if either is unknown."""
    if live_rating is None or official_rating is None:
        return None
    return live_rating - official_rating
