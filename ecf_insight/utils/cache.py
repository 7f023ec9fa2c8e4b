"""Content-addressable on-disk cache for ECF API responses."""

import hashlib
import json
import time
from pathlib import Path
from typing import Any

import structlog

from ecf_insight.utils.config import get_settings

logger = structlog.get_logger(__name__)


class ContentCache:
    """Content-addressable cache for API responses with per-read expiry."""

    def __init__(self, cache_dir: Path | None = None, enabled: bool | None = None):
        """
        Initialize cache.

        Args:
            cache_dir: Directory for cache storage. If None, uses settings.
            enabled: Override the ``cache_enabled`` setting.
        """
        settings = get_settings()
        self.cache_dir = Path(cache_dir or settings.cache_dir)
        self.enabled = settings.cache_enabled if enabled is None else enabled
        if self.enabled:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _get_hash(self, key: str) -> str:
        return hashlib.sha256(key.encode()).hexdigest()

    def _get_cache_path(self, key: str) -> Path:
        """
        Get cache file path for a key.

        Args:
            key: Cache key.

        Returns:
            Path to cache file.
        """
        hash_str = self._get_hash(key)
        # Use first 2 chars as subdirectory for better filesystem performance
        subdir = hash_str[:2]
        return self.cache_dir / subdir / f"{hash_str[2:]}.json"

    def get(self, key: str, max_age: float | None = None) -> Any | None:
        """
        Get cached response if available.

        Args:
            key: Cache key.
            max_age: Maximum entry age in seconds. None means entries never expire.

        Returns:
            Cached data if found, fresh and valid, None otherwise.
        """
        if not self.enabled:
            return None

        cache_path = self._get_cache_path(key)

        if not cache_path.exists():
            return None

        if max_age is not None:
            age = time.time() - cache_path.stat().st_mtime
            if age > max_age:
                logger.debug("Cache entry expired", key=key, age=round(age, 1), max_age=max_age)
                return None

        try:
            with cache_path.open(encoding="utf-8") as f:
                data = json.load(f)
            logger.debug("Cache hit", key=key)
            return data
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Cache file corrupted", key=key, error=str(e))
            return None

    def set(self, key: str, value: Any) -> None:
        """
        Store response in cache.

        Args:
            key: Cache key.
            value: Data to cache (must be JSON-serializable).
        """
        if not self.enabled:
            return

        cache_path = self._get_cache_path(key)
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with cache_path.open("w", encoding="utf-8") as f:
                json.dump(value, f)
            logger.debug("Cached response", key=key)
        except (TypeError, OSError) as e:
            logger.warning("Failed to cache response", key=key, error=str(e))

    def clear(self) -> int:
        """Clear all cached data and return the number of entries removed."""
        if not self.cache_dir.exists():
            return 0

        removed = 0
        for path in self.cache_dir.rglob("*.json"):
            path.unlink()
            removed += 1

        logger.info("Cache cleared", entries=removed)
        return removed

    def stats(self) -> dict[str, int | float]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats.
        """
        total_files = 0
        total_size = 0

        if self.cache_dir.exists():
            for path in self.cache_dir.rglob("*.json"):
                total_files += 1
                total_size += path.stat().st_size

        return {
            "files": total_files,
            "size_bytes": total_size,
            "size_mb": round(total_size / (1024 * 1024), 2),
        }
