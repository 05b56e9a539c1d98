from datetime import date

from rich.console import Console
from rich.table import Table

from fantasy_points_tracker.dates import next_valid_date, previous_valid_date
from fantasy_points_tracker.domain.player_weekly import latest_nonzero_points
from fantasy_points_tracker.domain.replacement import ReplacementReport
from fantasy_points_tracker.services.stats_pipeline import DailyStats
from fantasy_points_tracker.services.weekly_points import WeeklyPointsReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _fmt_points(points: float) -> str:
    return f"{points:.1f}"


def print_daily_stats(daily: DailyStats, today: date) -> None:
    source = " [dim](cached)[/dim]" if daily.from_cache else ""
    console.print(f"[bold]Fantasy points for {daily.date.isoformat()}[/bold]{source}")
    if daily.message:
        console.print(daily.message)
    if daily.stats:
        table = Table(show_header=True, show_edge=False, pad_edge=False)
        table.add_column("Player")
        table.add_column("Team")
        table.add_column("Opp")
        table.add_column("Pos")
        table.add_column("Pts", justify="right")
        for s in sorted(daily.stats, key=lambda s: (-s.points, s.id)):
            position = f"{s.position}*" if s.is_position_player_pitching else s.position
            opponent = s.opponent_team if s.is_home_team is not False else f"@{s.opponent_team}"
            table.add_row(s.name, s.team, opponent, position, _fmt_points(s.points))
        console.print(table)

    hints = [f"previous: {previous_valid_date(daily.date).isoformat()}"]
    following = next_valid_date(daily.date, today)
    if following is not None:
        hints.append(f"next: {following.isoformat()}")
    console.print(f"[dim]{'  '.join(hints)}[/dim]")


def print_weekly_points(report: WeeklyPointsReport, top: int | None = None) -> None:
    if not report.players:
        console.print(f"No weekly points found for {report.season}.")
        return
    console.print(f"[bold]Weekly fantasy points, {report.season}[/bold] ({len(report.weeks)} weeks)")
    last_complete = report.last_complete_week
    table = Table(show_header=True, show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("Team")
    table.add_column("Pos")
    table.add_column("Total", justify="right")
    table.add_column("Last Wk", justify="right")
    table.add_column("Rostered")
    players = report.players[:top] if top else report.players
    for rank, p in enumerate(players, start=1):
        table.add_row(
            str(rank),
            p.full_name,
            p.team_name,
            p.position_abbr,
            _fmt_points(p.total_points),
            _fmt_points(latest_nonzero_points(p.weekly_points, last_complete)),
            "yes" if p.is_rostered else "",
        )
    console.print(table)


def print_replacement_report(report: ReplacementReport, top: int | None = None) -> None:
    console.print(f"[bold]Replacement levels, {report.season}[/bold] ({report.team_count} teams)")
    for group in report.positions:
        console.print(
            f"\n[bold]{group.position_name}[/bold] ({group.position})"
            f"  replacement rank {group.replacement_rank}, {_fmt_points(group.replacement_points)} pts"
        )
        table = Table(show_header=True, show_edge=False, pad_edge=False)
        table.add_column("#", justify="right")
        table.add_column("Player")
        table.add_column("Team")
        table.add_column("Pts", justify="right")
        table.add_column("PAR", justify="right")
        players = group.players[:top] if top else group.players
        for ranked in players:
            style = None if ranked.is_startable else "dim"
            table.add_row(
                str(ranked.rank),
                ranked.player.full_name,
                ranked.player.team_name,
                _fmt_points(ranked.player.points),
                f"{ranked.points_above_replacement:+.1f}",
                style=style,
            )
        console.print(table)
