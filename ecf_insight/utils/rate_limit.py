"""Client-side throttling and retries for ECF API requests."""

import random
import time
from collections.abc import Callable
from typing import TypeVar

import structlog

from ecf_insight.utils.config import get_settings

logger = structlog.get_logger(__name__)
T = TypeVar("T")


class RateLimiter:
    """
    Token bucket allowing ``rate`` requests per ``per`` seconds.

    The bucket starts full, so up to ``rate`` requests may go out at once.
    """

    def __init__(self, rate: int, per: float = 60.0):
        self.rate = rate
        self.per = per
        self.tokens = float(rate)
        self.updated = time.monotonic()

    @property
    def tokens_per_second(self) -> float:
        return self.rate / self.per

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.updated
        self.tokens = min(float(self.rate), self.tokens + elapsed * self.tokens_per_second)
        self.updated = now

    def acquire(self, block: bool = True) -> bool:
        """
        Take one token.

        Returns:
            True once a request may be sent. With ``block=False`` returns False
            instead of waiting for the bucket to refill.
        """
        self._refill()
        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        if not block:
            return False

        wait = (1.0 - self.tokens) / self.tokens_per_second
        logger.debug("Throttling ECF request", wait=round(wait, 2))
        time.sleep(wait)
        self.tokens = 0.0
        self.updated = time.monotonic()
        return True


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Wait before retrying after failed ``attempt`` (1-based): doubling, with 20% jitter."""
    return base_delay * 2 ** (attempt - 1) * random.uniform(0.8, 1.2)  # noqa: S311


def retry_with_backoff(
    func: Callable[[], T],
    max_attempts: int | None = None,
    base_delay: float | None = None,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """
    Call ``func`` until it succeeds, retrying on ``exceptions``.

    Attempts and initial delay default to the ``ecf_api_retry_*`` settings.
    Other exceptions propagate immediately; after the last attempt the final
    error is re-raised.
    """
    settings = get_settings()
    attempts = max_attempts or settings.ecf_api_retry_attempts
    delay = settings.ecf_api_retry_delay if base_delay is None else base_delay

    for attempt in range(1, attempts):
        try:
            return func()
        except exceptions as e:
            wait = backoff_delay(attempt, delay)
            logger.warning(
                "ECF request failed, retrying",
                attempt=attempt,
                max_attempts=attempts,
                wait=round(wait, 2),
                error=str(e),
            )
            time.sleep(wait)

    try:
        return func()
    except exceptions as e:
        logger.error("ECF request failed, giving up", attempts=attempts, error=str(e))
        raise
