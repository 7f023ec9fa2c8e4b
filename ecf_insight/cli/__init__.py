"""Command-line interface for ECF Insight."""

import typer

from ecf_insight.utils.config import ensure_directories
from ecf_insight.utils.logging import setup_logging

from .admin import admin_app
from .players import players_app

ensure_directories()
setup_logging()

app = typer.Typer(
    name="ecf-insight",
    help="ECF Insight - Enhanced analytics for English Chess Federation ratings",
    add_completion=False,
)

app.add_typer(players_app, name="players")
app.add_typer(admin_app, name="admin")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
