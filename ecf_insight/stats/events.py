"""Grouping of games into events."""

from collections.abc import Iterable

from ecf_insight.models.aggregates import Event
from ecf_insight.models.game import Game
from ecf_insight.stats.performance import compute_performance_rating


def group_by_event(games: Iterable[Game]) -> list[Event]:
    """
    Group games by ``event_code``.

    Each event spans the earliest to latest member game date and carries the
    performance rating over all of its games. Events are returned latest
    ``end_date`` first; events ending on the same day keep first-seen order.
    Games without an event code are grouped together under ``None``.
    """
    members: dict[str | None, list[Game]] = {}
    for game in games:
        members.setdefault(game.event_code, []).append(game)

    events = [
        Event(
            event_code=code,
            event_name=event_games[0].event_name,
            games=tuple(event_games),
            start_date=min(game.game_date for game in event_games),
            end_date=max(game.game_date for game in event_games),
            performance_rating=compute_performance_rating(event_games),
        )
        for code, event_games in members.items()
    ]
    return sorted(events, key=lambda event: event.end_date, reverse=True)


def is_reliable_event(event: Event, min_games: int = 3) -> bool:
    """Performance ratings from very few games are flagged as unreliable."""
    return event.game_count >= min_games
