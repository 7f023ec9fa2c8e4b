"""Trailing calendar windows over a game list."""

from collections.abc import Iterable
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from ecf_insight.models.game import Game
from ecf_insight.stats.games import sort_games


class TimeWindow(str, Enum):
    """Selectable look-back periods."""

    ALL = "all"
    FIVE_YEARS = "5y"
    TWO_YEARS = "2y"
    ONE_YEAR = "1y"
    SIX_MONTHS = "6m"
    THREE_MONTHS = "3m"

    @property
    def label(self) -> str:
        return "All-time" if self is TimeWindow.ALL else self.value

    @property
    def delta(self) -> relativedelta | None:
        """Calendar offset of the window, None for all-time."""
        return {
            TimeWindow.ALL: None,
            TimeWindow.FIVE_YEARS: relativedelta(years=5),
            TimeWindow.TWO_YEARS: relativedelta(years=2),
            TimeWindow.ONE_YEAR: relativedelta(years=1),
            TimeWindow.SIX_MONTHS: relativedelta(months=6),
            TimeWindow.THREE_MONTHS: relativedelta(months=3),
        }[self]

    def cutoff(self, today: date) -> date | None:
        """Earliest date inside the window (month ends are clamped)."""
        delta = self.delta
        return None if delta is None else today - delta


def filter_by_window(
    games: Iterable[Game],
    window: TimeWindow | str,
    today: date | None = None,
) -> list[Game]:
    """
    Keep games played on or after the window's cut-off date.

    The all-time window keeps every game. The result is always a new list in
    canonical order.
    """
    cutoff = TimeWindow(window).cutoff(today or date.today())
    if cutoff is None:
        return sort_games(games)
    return sort_games(game for game in games if game.game_date >= cutoff)
