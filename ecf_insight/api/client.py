"""ECF rating API client.

Thin read-only wrapper around the English Chess Federation public API with
on-disk caching, rate limiting and retries. Every route is passed as the
query string of a single PHP endpoint, e.g.::

    api.php?v2/games/Standard/player/188586J/limit/2000
"""

import re
from datetime import date
from typing import Any
from urllib.parse import quote

import pydantic
import requests
import structlog

from ecf_insight.api.exceptions import (
    APIError,
    InvalidPlayerCodeError,
    InvalidResponseError,
    RateLimitError,
)
from ecf_insight.models.game import GameType
from ecf_insight.models.player import OfficialRating, PlayerDetails, PlayerSummary
from ecf_insight.utils.cache import ContentCache
from ecf_insight.utils.config import get_settings
from ecf_insight.utils.rate_limit import RateLimiter, retry_with_backoff

logger = structlog.get_logger(__name__)

PLAYER_CODE_PATTERN = re.compile(r"^\d{6}[A-Z]$")
MIN_SEARCH_LENGTH = 3


def normalize_player_code(player_code: str) -> str:
    """
    Upper-case and validate an ECF player code such as ``188586J``.

    Raises:
        InvalidPlayerCodeError: If the code is not six digits and a letter.
    """
    code = (player_code or "").strip().upper()
    if not PLAYER_CODE_PATTERN.match(code):
        raise InvalidPlayerCodeError(f"Invalid ECF player code: {player_code!r}")
    return code


class ECFClient:
    """
    Client for the ECF rating API.

    Provides:
    - A player's full game history for one game type
    - Player details by code
    - The published (official) rating for a game type
    - Player search by name
    """

    def __init__(
        self,
        cache: ContentCache | None = None,
        rate_limiter: RateLimiter | None = None,
        session: requests.Session | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        game_limit: int | None = None,
    ):
        """
        Initialize ECF client.

        Args:
            cache: Content cache for API responses. If None, creates default.
            rate_limiter: Rate limiter for requests. If None, creates default.
            session: HTTP session. If None, creates one.
            base_url: API endpoint. Defaults to the ``ecf_api_base_url`` setting.
            timeout: Request timeout in seconds.
            retry_attempts: Attempts per request for transient failures.
            retry_delay: Initial backoff delay in seconds.
            game_limit: Maximum number of games requested per history.
        """
        settings = get_settings()
        self.cache = cache or ContentCache()
        self.rate_limiter = rate_limiter or RateLimiter(rate=settings.ecf_api_rate_limit, per=60)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.base_url = base_url or settings.ecf_api_base_url
        self.timeout = timeout or settings.ecf_api_timeout
        self.retry_attempts = retry_attempts or settings.ecf_api_retry_attempts
        self.retry_delay = settings.ecf_api_retry_delay if retry_delay is None else retry_delay
        self.game_limit = game_limit or settings.game_history_limit
        self.ttl_games = settings.cache_ttl_games
        self.ttl_player = settings.cache_ttl_player
        self.ttl_search = settings.cache_ttl_search
        self.logger = logger.bind(component="ecf_client")

    def _url(self, route: str) -> str:
        return f"{self.base_url}?{route}"

    def _get_json(self, route: str) -> Any:
        """Perform one GET request and decode the JSON body."""
        self.rate_limiter.acquire()
        url = self._url(route)
        self.logger.info("Making ECF API request", route=route)

        response = self.session.get(url, timeout=self.timeout)

        if response.status_code == 429:
            self.logger.warning("ECF API rate limit hit (HTTP 429)", route=route)
            raise RateLimitError(f"ECF rate limit exceeded for '{route}'. Wait before retrying.")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            self.logger.error("ECF API request failed", route=route, status=response.status_code)
            raise APIError(f"ECF API returned HTTP {response.status_code} for '{route}'") from e

        try:
            return response.json()
        except ValueError as e:
            self.logger.error("ECF API returned invalid JSON", route=route)
            raise InvalidResponseError(f"ECF API returned invalid JSON for '{route}'") from e

    def _request(self, route: str, max_age: float | None) -> Any:
        """
        Fetch a route, using the cache when a fresh entry exists.

        Raises:
            RateLimitError: If the API keeps answering HTTP 429.
            APIError: If the request fails after retries.
            InvalidResponseError: If the body is not JSON.
        """
        cache_key = f"ecf_{route}"
        cached = self.cache.get(cache_key, max_age=max_age)
        if cached is not None:
            self.logger.debug("Cache hit", route=route)
            return cached

        def _fetch() -> Any:
            return self._get_json(route)

        try:
            data = retry_with_backoff(
                _fetch,
                max_attempts=self.retry_attempts,
                base_delay=self.retry_delay,
                exceptions=(requests.ConnectionError, requests.Timeout, RateLimitError),
            )
        except RateLimitError:
            raise
        except requests.Timeout as e:
            raise APIError(f"Request to '{route}' timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            self.logger.error("ECF API connection error", route=route, error=str(e))
            raise APIError(f"Cannot reach the ECF API for '{route}': {e}") from e

        self.cache.set(cache_key, data)
        return data

    def get_games(self, player_code: str, game_type: GameType | str) -> list[dict[str, Any]]:
        """
        Get a player's game history, most recent first.

        Args:
            player_code: ECF player code.
            game_type: Standard, Rapid or Blitz.

        Returns:
            Raw game records exactly as the API sends them.
        """
        code = normalize_player_code(player_code)
        game_type = GameType(game_type)
        route = f"v2/games/{game_type.value}/player/{code}/limit/{self.game_limit}"

        payload = self._request(route, max_age=self.ttl_games)
        if not isinstance(payload, dict):
            raise InvalidResponseError(f"Unexpected game history payload for {code}")

        games = payload.get("games") or []
        if not isinstance(games, list):
            raise InvalidResponseError(f"Unexpected 'games' field for {code}")

        self.logger.info(
            "Fetched game history", player_code=code, game_type=game_type.value, count=len(games)
        )
        return games

    def get_player_details(self, player_code: str) -> PlayerDetails | None:
        """Get player details, or None if the code is unknown."""
        code = normalize_player_code(player_code)
        payload = self._request(f"v2/players/code/{code}", max_age=self.ttl_player)

        if not isinstance(payload, dict):
            raise InvalidResponseError(f"Unexpected player payload for {code}")

        try:
            return PlayerDetails.model_validate({"ECF_code": code, **payload})
        except pydantic.ValidationError as e:
            self.logger.warning("Player not found", player_code=code, error=str(e))
            return None

    def get_official_rating(
        self,
        player_code: str,
        game_type: GameType | str,
        on_date: date | None = None,
    ) -> OfficialRating | None:
        """
        Get the published rating in force on ``on_date`` (default today).

        Returns:
            The rating, or None when the player has no rating of this type.
        """
        code = normalize_player_code(player_code)
        game_type = GameType(game_type)
        day = (on_date or date.today()).isoformat()
        route = f"v2/ratings/{game_type.rating_code}/{code}/{day}"

        payload = self._request(route, max_age=self.ttl_player)
        if not isinstance(payload, dict):
            raise InvalidResponseError(f"Unexpected rating payload for {code}")

        try:
            rating = OfficialRating.model_validate(payload)
        except pydantic.ValidationError as e:
            raise InvalidResponseError(f"Malformed rating payload for {code}: {e}") from e

        if not rating.success:
            self.logger.info("No official rating", player_code=code, game_type=game_type.value)
            return None
        return rating

    def search_players(self, name: str) -> list[PlayerSummary]:
        """
        Search players by name, sorted by surname then forename.

        Raises:
            ValueError: If fewer than three characters are given.
        """
        name = (name or "").strip()
        if len(name) < MIN_SEARCH_LENGTH:
            raise ValueError(f"Name must be at least {MIN_SEARCH_LENGTH} characters long")

        payload = self._request(f"v2/players/name/{quote(name)}", max_age=self.ttl_search)
        rows = payload.get("players") if isinstance(payload, dict) else None

        players: list[PlayerSummary] = []
        for row in rows or []:
            try:
                players.append(PlayerSummary.model_validate(row))
            except pydantic.ValidationError as e:
                self.logger.debug("Skipping player: mapping error", row=row, error=str(e))
                continue

        players.sort(key=lambda p: p.sort_key)
        self.logger.info("Player search complete", query=name, count=len(players))
        return players
