"""Validation and canonical ordering of raw game records."""

from collections.abc import Iterable, Mapping
from typing import Any

import pydantic

from ecf_insight.models.game import Game


def game_sort_key(game: Game) -> tuple[int, str]:
    """Most recent first; same-day games alphabetical by opponent."""
    return -game.game_date.toordinal(), game.opponent_name


def sort_games(games: Iterable[Game]) -> list[Game]:
    """Return a new list of games in canonical order."""
    return sorted(games, key=game_sort_key)


def validate_game(raw: Mapping[str, Any] | Game) -> Game | None:
    """
    Validate one raw record.

    Returns None for records that cannot be aggregated: no opponent name,
    an outcome other than win/loss/draw, or no usable game date.
    """
    try:
        return Game.model_validate(raw)
    except pydantic.ValidationError:
        return None


def normalize_and_sort(
    raw_games: Iterable[Mapping[str, Any] | Game],
    batch: int = 0,
) -> list[Game]:
    """
    Filter a raw game history down to aggregatable games.

    Each kept game gets an ``id`` of the form ``game-<index>-<batch>``, where
    ``index`` counts kept records in input order. Ids are unique within the
    batch only.

    Args:
        raw_games: Records as returned by the ECF API (dicts) or Game models.
        batch: Distinguishes ids produced by separate calls.

    Returns:
        New list of Game models in canonical order.
    """
    kept: list[Game] = []
    for raw in raw_games:
        game = validate_game(raw)
        if game is None:
            continue
        kept.append(game.model_copy(update={"id": f"game-{len(kept)}-{batch}"}))
    return sort_games(kept)
