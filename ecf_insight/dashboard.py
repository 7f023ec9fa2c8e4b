"""Assembly of the per-player dashboard.

``build_dashboard`` is pure and works on raw records already fetched;
``load_dashboard`` fetches them through the ECF client first.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

import structlog
from pydantic import BaseModel, Field

from ecf_insight.api.client import ECFClient, normalize_player_code
from ecf_insight.api.exceptions import APIError
from ecf_insight.models.aggregates import Event, OpponentStats, RatingPoint
from ecf_insight.models.game import Game, GameType
from ecf_insight.models.player import OfficialRating
from ecf_insight.stats.chart import rating_range, rating_series
from ecf_insight.stats.config import AnalyticsConfig
from ecf_insight.stats.events import group_by_event, is_reliable_event
from ecf_insight.stats.games import normalize_and_sort
from ecf_insight.stats.live_rating import estimate_live_rating, rating_change
from ecf_insight.stats.opponents import OpponentKey, group_by_opponent
from ecf_insight.stats.performance import recent_performance_rating
from ecf_insight.stats.results import best_results
from ecf_insight.stats.windows import TimeWindow, filter_by_window

logger = structlog.get_logger(__name__)


class DashboardEvent(BaseModel):
    """An event row with its reliability flag."""

    event: Event
    is_reliable: bool = Field(..., description="False when too few games for a meaningful rating")


class PlayerDashboard(BaseModel):
    """Everything shown for one player, game type and time window."""

    player_code: str
    player_name: str | None = None
    game_type: GameType
    window: TimeWindow
    as_of: date

    official_rating: int | None = None
    is_provisional: bool = False
    live_rating: int | None = None
    live_rating_change: int | None = None

    total_games: int = Field(default=0, description="Valid games across all time")
    excluded_records: int = Field(default=0, description="Raw records that failed validation")
    performance_game_count: int
    performance_rating: int | None = Field(
        None, description="Performance over the last N valid games, None without games"
    )

    games: list[Game] = Field(default_factory=list, description="Valid games inside the window")
    events: list[DashboardEvent] = Field(default_factory=list)
    opponents: list[OpponentStats] = Field(default_factory=list)
    best_results: list[Game] = Field(default_factory=list)
    rating_series: list[RatingPoint] = Field(default_factory=list)
    rating_range: tuple[int, int] | None = None


def build_dashboard(
    raw_games: Sequence[Mapping[str, Any] | Game],
    *,
    player_code: str,
    game_type: GameType | str = GameType.STANDARD,
    window: TimeWindow | str = TimeWindow.ALL,
    performance_games: int | None = None,
    config: AnalyticsConfig | None = None,
    today: date | None = None,
    official_rating: OfficialRating | None = None,
    player_name: str | None = None,
    opponent_key: OpponentKey = OpponentKey.NAME,
) -> PlayerDashboard:
    """
    Derive every dashboard section from one raw game history.

    Args:
        raw_games: Records as returned by the API, most recent first.
        player_code: Player the history belongs to.
        game_type: Game type of the history.
        window: Look-back period for the game list, events, opponents,
            best results and chart.
        performance_games: "Last N games" for the performance rating. Must be
            one of ``config.performance_game_counts``.
        config: Menus and limits. Defaults to the application settings.
        today: Reference date for windows and the live rating.
        official_rating: Published rating, if known.
        player_name: Display name, if known.
        opponent_key: How opponents are told apart.
    """
    config = config or AnalyticsConfig.from_settings()
    today = today or date.today()
    window = TimeWindow(window)
    count = config.check_performance_game_count(
        performance_games or config.default_performance_game_count
    )

    valid_games = normalize_and_sort(raw_games)
    windowed = filter_by_window(valid_games, window, today=today)

    live = estimate_live_rating(raw_games, today)
    official = official_rating.revised_rating if official_rating else None
    series = rating_series(windowed, live_rating=live)

    return PlayerDashboard(
        player_code=player_code,
        player_name=player_name,
        game_type=GameType(game_type),
        window=window,
        as_of=today,
        official_rating=official,
        is_provisional=official_rating.is_provisional if official_rating else False,
        live_rating=live,
        live_rating_change=rating_change(live, official),
        total_games=len(valid_games),
        excluded_records=len(raw_games) - len(valid_games),
        performance_game_count=count,
        performance_rating=recent_performance_rating(valid_games, count) if valid_games else None,
        games=windowed,
        events=[
            DashboardEvent(
                event=event,
                is_reliable=is_reliable_event(event, config.min_reliable_event_games),
            )
            for event in group_by_event(windowed)
        ],
        opponents=group_by_opponent(windowed, limit=config.top_opponents_limit, key=opponent_key),
        best_results=best_results(windowed, limit=config.best_results_limit),
        rating_series=series,
        rating_range=rating_range(series),
    )


def load_dashboard(
    client: ECFClient,
    player_code: str,
    *,
    game_type: GameType | str = GameType.STANDARD,
    window: TimeWindow | str = TimeWindow.ALL,
    performance_games: int | None = None,
    config: AnalyticsConfig | None = None,
    today: date | None = None,
    opponent_key: OpponentKey = OpponentKey.NAME,
) -> PlayerDashboard:
    """
    Fetch a player's data from the ECF API and build their dashboard.

    A failing game-history request propagates. Player details and the
    official rating are optional; if they cannot be fetched the dashboard is
    built without them.
    """
    code = normalize_player_code(player_code)
    game_type = GameType(game_type)
    log = logger.bind(player_code=code, game_type=game_type.value)

    raw_games = client.get_games(code, game_type)

    player_name = None
    try:
        details = client.get_player_details(code)
        player_name = details.full_name if details else None
    except APIError as e:
        log.warning("Player details unavailable", error=str(e))

    official = None
    try:
        official = client.get_official_rating(code, game_type, on_date=today)
    except APIError as e:
        log.warning("Official rating unavailable", error=str(e))

    dashboard = build_dashboard(
        raw_games,
        player_code=code,
        game_type=game_type,
        window=window,
        performance_games=performance_games,
        config=config,
        today=today,
        official_rating=official,
        player_name=player_name,
        opponent_key=opponent_key,
    )
    log.info(
        "Dashboard built",
        total_games=dashboard.total_games,
        window=dashboard.window.value,
        excluded_records=dashboard.excluded_records,
    )
    return dashboard


def paginate(games: Sequence[Game], page: int, per_page: int) -> tuple[list[Game], int]:
    """
    Slice one page out of a game list.

    ``page`` is 1-based and clamped to the available range.

    Returns:
        (games on the page, total number of pages)
    """
    if per_page <= 0:
        raise ValueError(f"per_page must be positive, got {per_page}")
    total_pages = math.ceil(len(games) / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page
    return list(games[start : start + per_page]), total_pages
