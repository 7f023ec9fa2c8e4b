"""Pure rating and aggregation functions over game records.

Nothing in this package talks to the network or mutates its inputs.
"""

from ecf_insight.stats.chart import rating_range, rating_series
from ecf_insight.stats.config import AnalyticsConfig
from ecf_insight.stats.events import group_by_event, is_reliable_event
from ecf_insight.stats.games import normalize_and_sort, sort_games, validate_game
from ecf_insight.stats.live_rating import estimate_live_rating, rating_change
from ecf_insight.stats.opponents import OpponentKey, group_by_opponent
from ecf_insight.stats.performance import compute_performance_rating, recent_performance_rating
from ecf_insight.stats.results import best_results
from ecf_insight.stats.windows import TimeWindow, filter_by_window

__all__ = [
    "AnalyticsConfig",
    "OpponentKey",
    "TimeWindow",
    "best_results",
    "compute_performance_rating",
    "estimate_live_rating",
    "filter_by_window",
    "group_by_event",
    "group_by_opponent",
    "is_reliable_event",
    "normalize_and_sort",
    "rating_change",
    "rating_range",
    "rating_series",
    "recent_performance_rating",
    "sort_games",
    "validate_game",
]
