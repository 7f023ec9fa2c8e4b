"""Configuration management using environment variables."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

DEFAULT_FEATURED_PLAYER_CODES = [
    "188586J",
    "293875D",
    "105483B",
    "170263E",
    "136665J",
    "245324B",
    "175386B",
    "263810B",
    "252763H",
    "300121A",
    "123515B",
    "103888G",
    "329301E",
    "305272C",
    "258871H",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # ECF API
    ecf_api_base_url: str = Field(
        default="https://rating.englishchess.org.uk/v2/new/api.php",
        description="Base URL of the ECF rating API",
    )
    ecf_api_timeout: int = Field(default=30, description="Request timeout in seconds")
    ecf_api_rate_limit: int = Field(default=30, description="Requests per minute to the ECF API")
    ecf_api_retry_attempts: int = Field(default=3, description="Number of retry attempts")
    ecf_api_retry_delay: int = Field(default=2, description="Initial retry delay in seconds")
    game_history_limit: int = Field(default=2000, description="Max games requested per player")

    # Cache Configuration
    cache_dir: str = Field(default="cache", description="Directory for cached responses")
    cache_enabled: bool = Field(default=True, description="Enable response caching")
    cache_ttl_games: int = Field(default=600, description="Game list cache lifetime (seconds)")
    cache_ttl_player: int = Field(
        default=64800, description="Player details / official rating cache lifetime (seconds)"
    )
    cache_ttl_search: int = Field(default=400800, description="Player search cache lifetime")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_dir: str = Field(default="logs", description="Directory for log files")

    # Dashboard defaults
    featured_player_codes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FEATURED_PLAYER_CODES),
        description="Players picked from when no player code is given",
    )
    performance_game_counts: list[int] = Field(
        default_factory=lambda: [5, 10, 15, 20, 25, 30, 40, 50],
        description="Menu of 'last N games' windows for performance rating",
    )
    default_performance_game_count: int = Field(default=10, description="Default 'last N games'")
    top_opponents_limit: int = Field(default=10, description="Opponents shown in the summary")
    best_results_limit: int = Field(default=3, description="Best results shown")
    min_reliable_event_games: int = Field(
        default=3, description="Events with fewer games get an unreliable-rating flag"
    )
    games_per_page: int = Field(default=20, description="Games per page in game listings")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid option."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is a valid option."""
        if v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    @field_validator("performance_game_counts")
    @classmethod
    def validate_performance_game_counts(cls, v: list[int]) -> list[int]:
        """Menu must be non-empty and hold positive counts."""
        if not v:
            raise ValueError("performance_game_counts must not be empty")
        if any(count <= 0 for count in v):
            raise ValueError("performance_game_counts must be positive")
        return sorted(set(v))


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings.
    """
    return Settings()


def ensure_directories() -> None:
    """
    Ensure all required directories exist.

    This creates the cache and logs directories if they don't exist.
    """
    settings = get_settings()

    for path_key in ["cache_dir", "log_dir"]:
        path = getattr(settings, path_key)
        Path(path).mkdir(parents=True, exist_ok=True)
