"""Logging setup: structlog events rendered by handlers on the stdlib root logger."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog

from ecf_insight.utils.config import get_settings

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.ExceptionRenderer(),
]

_log_file: Path | None = None


def get_active_log_file() -> Path | None:
    """Log file written by this process, None when file logging is off."""
    return _log_file


def _file_handler(log_dir: Path) -> logging.FileHandler | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / f"ecf_insight_{datetime.now():%Y%m%d_%H%M%S}.log"
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        print(f"Warning: file logging disabled, cannot use '{log_dir}': {e}", file=sys.stderr)
        return None
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    return handler


def setup_logging() -> None:
    """
    Configure logging for one CLI run.

    Console output goes to stderr so stdout carries only command output
    (``--json`` stays parseable). It is human-readable, or JSON when
    ``log_format`` is ``json``. Each run also writes JSON lines to
    ``<log_dir>/ecf_insight_<timestamp>.log`` when that directory is usable.
    """
    global _log_file  # noqa: PLW0603

    settings = get_settings()
    level = getattr(logging, settings.log_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))
    root.addHandler(console)

    file_handler = _file_handler(Path(settings.log_dir))
    _log_file = Path(file_handler.baseFilename) if file_handler else None
    if file_handler is not None:
        root.addHandler(file_handler)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def log_context(**kwargs: Any) -> None:
    """Attach key-value pairs to every following log event."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context(*keys: str) -> None:
    """Drop the given context keys, or all of them when none are named."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
