"""Explicit configuration for dashboard aggregation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ecf_insight.models.game import GameType
from ecf_insight.stats.windows import TimeWindow
from ecf_insight.utils.config import DEFAULT_FEATURED_PLAYER_CODES, Settings, get_settings


class AnalyticsConfig(BaseModel):
    """Menus and limits used when assembling a player dashboard."""

    model_config = ConfigDict(frozen=True)

    featured_player_codes: tuple[str, ...] = Field(default=tuple(DEFAULT_FEATURED_PLAYER_CODES))
    game_types: tuple[GameType, ...] = Field(default=tuple(GameType))
    time_windows: tuple[TimeWindow, ...] = Field(default=tuple(TimeWindow))
    performance_game_counts: tuple[int, ...] = Field(default=(5, 10, 15, 20, 25, 30, 40, 50))
    default_performance_game_count: int = 10
    top_opponents_limit: int = 10
    best_results_limit: int = 3
    min_reliable_event_games: int = 3
    games_per_page: int = 20

    @model_validator(mode="after")
    def check_default_count(self) -> "AnalyticsConfig":
        if self.default_performance_game_count not in self.performance_game_counts:
            raise ValueError(
                f"default_performance_game_count {self.default_performance_game_count} "
                f"is not one of {self.performance_game_counts}"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AnalyticsConfig":
        """Build the configuration from application settings."""
        settings = settings or get_settings()
        return cls(
            featured_player_codes=tuple(settings.featured_player_codes),
            performance_game_counts=tuple(settings.performance_game_counts),
            default_performance_game_count=settings.default_performance_game_count,
            top_opponents_limit=settings.top_opponents_limit,
            best_results_limit=settings.best_results_limit,
            min_reliable_event_games=settings.min_reliable_event_games,
            games_per_page=settings.games_per_page,
        )

    def check_performance_game_count(self, count: int) -> int:
        """Reject 'last N games' values outside the menu."""
        if count not in self.performance_game_counts:
            allowed = ", ".join(str(c) for c in self.performance_game_counts)
            raise ValueError(f"Performance game count must be one of: {allowed}")
        return count
