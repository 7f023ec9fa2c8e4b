"""Player commands: search, show, games, events, opponents."""

import random
from datetime import date

import structlog
import typer
from pydantic import TypeAdapter

from ecf_insight.api.client import ECFClient
from ecf_insight.api.exceptions import ECFError
from ecf_insight.dashboard import DashboardEvent, PlayerDashboard, load_dashboard, paginate
from ecf_insight.models.game import Game, GameScore, GameType
from ecf_insight.stats.config import AnalyticsConfig
from ecf_insight.stats.opponents import OpponentKey
from ecf_insight.stats.windows import TimeWindow
from ecf_insight.utils.logging import log_context

players_app = typer.Typer(help="Player statistics from the ECF rating database.")

logger = structlog.get_logger(__name__)

_EVENT_LIST = TypeAdapter(list[DashboardEvent])


def _fmt_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _fmt_game(game: Game) -> str:
    return (
        f"  {_fmt_date(game.game_date)}  {game.score.label:>2}  "
        f"{game.colour or '-':<6} {game.opponent_name:<30} "
        f"{game.opponent_rating if game.opponent_rating is not None else '-':>5}  "
        f"{game.player_rating if game.player_rating is not None else '-':>5}"
    )


def _load(
    player_code: str | None,
    game_type: GameType,
    window: TimeWindow,
    performance_games: int | None = None,
    by_code: bool = False,
) -> PlayerDashboard:
    """Fetch and build a dashboard, turning failures into a CLI exit."""
    config = AnalyticsConfig.from_settings()
    code = player_code or random.choice(config.featured_player_codes)  # noqa: S311
    log_context(command="players", game_type=game_type.value)

    try:
        return load_dashboard(
            ECFClient(),
            code,
            game_type=game_type,
            window=window,
            performance_games=performance_games,
            config=config,
            opponent_key=OpponentKey.CODE if by_code else OpponentKey.NAME,
        )
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e
    except ECFError as e:
        logger.error("Failed to load player", player_code=code, error=str(e))
        typer.echo(f"[FAIL] Failed to load player {code}: {e}", err=True)
        raise typer.Exit(code=1) from e


GAME_TYPE_OPTION = typer.Option(GameType.STANDARD, "--game-type", "-t", help="Game type")
WINDOW_OPTION = typer.Option(TimeWindow.ALL, "--window", "-w", help="Look-back period")
JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of text")


@players_app.command()
def search(name: str = typer.Argument(..., help="At least three characters of a name")) -> None:
    """Search players by name."""
    try:
        players = ECFClient().search_players(name)
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e
    except ECFError as e:
        logger.error("Player search failed", query=name, error=str(e))
        typer.echo(f"[FAIL] Player search failed: {e}", err=True)
        raise typer.Exit(code=1) from e

    if not players:
        typer.echo("No players found.")
        return

    for player in players:
        club = f"  ({player.club_name})" if player.club_name else ""
        typer.echo(f"  {player.ecf_code}  {player.full_name}{club}")


@players_app.command()
def show(
    player_code: str = typer.Argument(
        None, help="ECF player code (random featured player if omitted)"
    ),
    game_type: GameType = GAME_TYPE_OPTION,
    window: TimeWindow = WINDOW_OPTION,
    performance_games: int = typer.Option(
        None, "--games", "-n", help="Performance rating over the last N games"
    ),
    as_json: bool = JSON_OPTION,
) -> None:
    """Show a player's rating summary."""
    dashboard = _load(player_code, game_type, window, performance_games)

    if as_json:
        typer.echo(dashboard.model_dump_json(indent=2))
        return

    typer.echo(f"\n{dashboard.player_name or 'Player Information'} ({dashboard.player_code})")
    official = dashboard.official_rating if dashboard.official_rating is not None else "n/a"
    provisional = " (provisional)" if dashboard.is_provisional else ""
    typer.echo(f"  Official {game_type.value} rating: {official}{provisional}")

    if dashboard.live_rating is None:
        typer.echo(f"  Live {game_type.value} rating:     Not available")
    else:
        change = dashboard.live_rating_change
        suffix = f" ({change:+d})" if change else ""
        typer.echo(f"  Live {game_type.value} rating:     {dashboard.live_rating}{suffix}")

    if dashboard.performance_rating is not None:
        typer.echo(
            f"  Performance (last {dashboard.performance_game_count} games): "
            f"{dashboard.performance_rating}"
        )

    typer.echo(f"\nGames ({window.label}): {len(dashboard.games)} of {dashboard.total_games}")
    if dashboard.rating_range is not None:
        low, high = dashboard.rating_range
        typer.echo(f"  Rating range: {low} - {high}")

    if dashboard.best_results:
        typer.echo(f"\nBest {game_type.value} results:")
        for game in dashboard.best_results:
            result = "Win" if game.score is GameScore.WIN else "Draw"
            typer.echo(f"  {result:<5} vs {game.opponent_name} ({game.opponent_rating})")


@players_app.command()
def games(
    player_code: str = typer.Argument(..., help="ECF player code"),
    game_type: GameType = GAME_TYPE_OPTION,
    window: TimeWindow = WINDOW_OPTION,
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
) -> None:
    """List a player's games, most recent first."""
    dashboard = _load(player_code, game_type, window)
    per_page = AnalyticsConfig.from_settings().games_per_page
    page_games, total_pages = paginate(dashboard.games, page, per_page)

    if not page_games:
        typer.echo("No games found for the selected time range.")
        return

    for game in page_games:
        typer.echo(_fmt_game(game))
    typer.echo(f"\nPage {min(max(page, 1), total_pages)} of {total_pages}")


@players_app.command()
def events(
    player_code: str = typer.Argument(..., help="ECF player code"),
    game_type: GameType = GAME_TYPE_OPTION,
    window: TimeWindow = WINDOW_OPTION,
    show_games: bool = typer.Option(False, "--show-games", "-g", help="List each event's games"),
    as_json: bool = JSON_OPTION,
) -> None:
    """List a player's events with per-event performance ratings."""
    dashboard = _load(player_code, game_type, window)

    if as_json:
        typer.echo(_EVENT_LIST.dump_json(dashboard.events, indent=2).decode())
        return

    if not dashboard.events:
        typer.echo("No games found for the selected time range.")
        return

    for row in dashboard.events:
        event = row.event
        flag = "" if row.is_reliable else "  (few games, unreliable)"
        typer.echo(
            f"  {_fmt_date(event.start_date)} - {_fmt_date(event.end_date)}  "
            f"{event.event_name or event.event_code or 'Unknown event'}: "
            f"{event.performance_rating} over {event.game_count} game(s){flag}"
        )
        if show_games:
            for game in event.games:
                typer.echo("  " + _fmt_game(game))


@players_app.command()
def opponents(
    player_code: str = typer.Argument(..., help="ECF player code"),
    game_type: GameType = GAME_TYPE_OPTION,
    window: TimeWindow = WINDOW_OPTION,
    by_code: bool = typer.Option(
        False, "--by-code", help="Tell opponents apart by ECF code instead of name"
    ),
) -> None:
    """Show the most common opponents."""
    dashboard = _load(player_code, game_type, window, by_code=by_code)

    if not dashboard.opponents:
        typer.echo("No games found for the selected time range.")
        return

    typer.echo(f"Most common {game_type.value} opponents:")
    typer.echo(f"  {'Opponent':<30} {'Games':>5} {'W':>3} {'L':>3} {'D':>3}")
    for stats in dashboard.opponents:
        marker = " *" if stats.is_ambiguous else ""
        typer.echo(
            f"  {stats.name:<30} {stats.total_games:>5} {stats.wins:>3} "
            f"{stats.losses:>3} {stats.draws:>3}{marker}"
        )
    if any(stats.is_ambiguous for stats in dashboard.opponents):
        typer.echo("\n  * several players share this name; use --by-code to separate them")
