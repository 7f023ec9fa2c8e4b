"""Pytest configuration and fixtures."""

from datetime import date
from unittest.mock import Mock

import pytest


@pytest.fixture
def today():
    """Fixed reference date used for windows and live ratings."""
    return date(2024, 5, 20)


@pytest.fixture
def sample_settings(tmp_path):
    """Sample settings for testing."""
    from ecf_insight.utils.config import Settings

    return Settings(
        cache_dir=str(tmp_path / "cache"),
        log_dir=str(tmp_path / "logs"),
        cache_enabled=False,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def raw_game():
    """Factory for raw game records shaped like the ECF API's."""

    def _make(**overrides):
        record = {
            "game_date": "2024-05-10",
            "colour": "W",
            "score": 1,
            "opponent_name": "Smith, John",
            "opponent_no": "123456A",
            "opponent_rating": 1800,
            "player_rating": 1850,
            "increment": 5,
            "event_code": "E1",
            "event_name": "Club Championship",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_game(raw_game):
    """Factory for validated Game models."""
    from ecf_insight.models.game import Game

    def _make(**overrides):
        return Game.model_validate(raw_game(**overrides))

    return _make


@pytest.fixture
def mock_response():
    """Factory for a requests.Response stand-in."""

    def _make(payload=None, status_code=200, json_error=None):
        response = Mock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        response.raise_for_status = Mock()
        return response

    return _make


@pytest.fixture
def ecf_client(tmp_path):
    """ECF client with a mocked session, no cache and no retry delay."""
    from ecf_insight.api.client import ECFClient
    from ecf_insight.utils.cache import ContentCache
    from ecf_insight.utils.rate_limit import RateLimiter

    return ECFClient(
        cache=ContentCache(cache_dir=tmp_path / "cache", enabled=False),
        rate_limiter=RateLimiter(rate=1000, per=1),
        session=Mock(),
        base_url="https://example.test/api.php",
        timeout=5,
        retry_attempts=2,
        retry_delay=0,
        game_limit=2000,
    )
