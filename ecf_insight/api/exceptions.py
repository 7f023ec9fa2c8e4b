"""Domain-specific exceptions for ECF API access."""


class ECFError(Exception):
    """Base exception for ECF API failures."""

    pass


class APIError(ECFError):
    """Raised when an ECF API request fails."""

    pass


class RateLimitError(APIError):
    """Raised when the ECF API responds with HTTP 429."""

    pass


class InvalidResponseError(APIError):
    """Raised when the ECF API returns something other than the expected JSON."""

    pass


class InvalidPlayerCodeError(ECFError, ValueError):
    """Raised when a player code does not look like an ECF code."""

    pass
