from pathlib import Path
from typing import Annotated

import typer

from fantasy_points_tracker.cli._logging import configure_logging
from fantasy_points_tracker.cli._output import (
    console,
    print_daily_stats,
    print_error,
    print_replacement_report,
    print_weekly_points,
)
from fantasy_points_tracker.cli.factory import build_container
from fantasy_points_tracker.dates import league_today
from fantasy_points_tracker.db.connection import run_migrations
from fantasy_points_tracker.exceptions import FptException

app = typer.Typer(name="fpt", help="Fantasy points tracker for MLB box scores")

_ConfigOpt = Annotated[str, typer.Option("--config", help="Path to the YAML config file")]
_SeasonOpt = Annotated[int | None, typer.Option("--season", help="Season year")]
_TopOpt = Annotated[int | None, typer.Option("--top", help="Show only the top N players")]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Also write DEBUG logs to this file")] = None,
) -> None:
    """Fantasy points tracker for MLB box scores."""
    configure_logging(verbose=verbose, log_file=log_file)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@app.command("init-db")
def init_db(
    config: _ConfigOpt = "fpt.yaml",
    db_path: Annotated[str | None, typer.Option("--db", help="SQLite file to initialize")] = None,
) -> None:
    """Create or upgrade the stats cache schema."""
    with build_container(config, db_path=db_path) as container:
        version = run_migrations(container.connection)
        console.print(f"[bold green]Database ready[/bold green] at {container.settings.db_path} (schema v{version})")


@app.command()
def stats(
    date: Annotated[str | None, typer.Option("--date", help="Game date (YYYY-MM-DD); defaults to yesterday")] = None,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Skip the cache read and fetch live")] = False,
    config: _ConfigOpt = "fpt.yaml",
) -> None:
    """Show per-player fantasy points for one date."""
    with build_container(config) as container:
        try:
            daily = container.pipeline.get_stats(date, no_cache=no_cache)
        except FptException as e:
            print_error(e.user_message)
            raise typer.Exit(code=1) from e
        print_daily_stats(daily, league_today(container.settings.timezone, container.now))


@app.command()
def weekly(
    season: _SeasonOpt = None,
    end_date: Annotated[str | None, typer.Option("--end-date", help="Last date to include (YYYY-MM-DD)")] = None,
    top: _TopOpt = 50,
    config: _ConfigOpt = "fpt.yaml",
) -> None:
    """Show week-by-week fantasy points for a season."""
    with build_container(config) as container:
        try:
            report = container.weekly_aggregator.aggregate(season=season, end_date=end_date)
        except FptException as e:
            print_error(e.user_message)
            raise typer.Exit(code=1) from e
        print_weekly_points(report, top=top)


@app.command()
def replacement(
    season: _SeasonOpt = None,
    top: _TopOpt = 20,
    config: _ConfigOpt = "fpt.yaml",
) -> None:
    """Show season points by position with each position's replacement level."""
    with build_container(config) as container:
        try:
            report = container.replacement_service.build(season)
        except FptException as e:
            print_error(e.user_message)
            raise typer.Exit(code=1) from e
        print_replacement_report(report, top=top)


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port to listen on")] = 5000,
    config: _ConfigOpt = "fpt.yaml",
) -> None:
    """Run the HTTP API."""
    from fantasy_points_tracker.web.app import create_app

    with build_container(config) as container:
        flask_app = create_app(container)
        console.print(f"Serving on http://{host}:{port}")
        flask_app.run(host=host, port=port)
