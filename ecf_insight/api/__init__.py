"""Access to the ECF rating API."""

from ecf_insight.api.client import ECFClient, normalize_player_code
from ecf_insight.api.exceptions import (
    APIError,
    ECFError,
    InvalidPlayerCodeError,
    InvalidResponseError,
    RateLimitError,
)

__all__ = [
    "APIError",
    "ECFClient",
    "ECFError",
    "InvalidPlayerCodeError",
    "InvalidResponseError",
    "RateLimitError",
    "normalize_player_code",
]
