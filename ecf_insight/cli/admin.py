"""Admin commands: cache-stats, cache-clear, show-config."""

import structlog
import typer

from ecf_insight.utils.cache import ContentCache
from ecf_insight.utils.config import get_settings

admin_app = typer.Typer(help="Cache and configuration commands.")

logger = structlog.get_logger(__name__)


@admin_app.command("cache-stats")
def cache_stats() -> None:
    """Show how much the response cache holds."""
    cache = ContentCache()
    stats = cache.stats()
    typer.echo(f"\nCache: {cache.cache_dir}")
    typer.echo(f"   Enabled: {cache.enabled}")
    typer.echo(f"   Entries: {stats['files']:,}")
    typer.echo(f"   Size: {stats['size_mb']:.2f} MB")


@admin_app.command("cache-clear")
def cache_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every cached API response."""
    cache = ContentCache()
    if not yes:
        typer.confirm(f"Delete all cached responses in {cache.cache_dir}?", abort=True)

    try:
        removed = cache.clear()
    except OSError as e:
        logger.error("Failed to clear cache", error=str(e))
        typer.echo(f"[FAIL] Failed to clear cache: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"[OK] Removed {removed:,} cached response(s)")


@admin_app.command("show-config")
def show_config() -> None:
    """Print the effective settings."""
    settings = get_settings()
    for name, value in settings.model_dump().items():
        typer.echo(f"  {name}: {value}")
