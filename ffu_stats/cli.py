"""CLI entrypoint using Typer.

Reads the season snapshots under the configured data directory and prints
career tables, power rankings, live-week state, the record book and
identity lookups.

Example:
    $ ffu-stats --help
    $ ffu-stats career --min-seasons 3 --sort total_wins
    $ ffu-stats power 2024 premier
    $ ffu-stats week --at 2025-10-03T20:00
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ffu_stats import __version__
from ffu_stats.config import get_settings
from ffu_stats.identity import IdentityResolver
from ffu_stats.logging import setup_logging
from ffu_stats.oracle.power import PowerRatingOracle
from ffu_stats.oracle.schedule import ScheduleError, ScheduleOracle, WeekState
from ffu_stats.seasons.aggregator import CareerAggregator, filter_careers
from ffu_stats.seasons.frames import CAREER_COLUMNS, career_frame
from ffu_stats.seasons.loader import all_standings, load_snapshots
from ffu_stats.seasons.models import SeasonDataError
from ffu_stats.seasons.records import GameRecord, SeasonRecord, all_time_records
from ffu_stats.types import LeagueTier

# Initialize console for rich output
console = Console()

app = typer.Typer(
    name="ffu-stats",
    help="FFU league statistics",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

STATE_COLORS = {
    WeekState.UPCOMING: "dim",
    WeekState.IN_PROGRESS: "yellow",
    WeekState.FINAL: "green",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ffu-stats[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """FFU league statistics.

    Career records, power rankings and live-season week state for the
    Premier / Masters / National league.
    """
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_dir=settings.log_dir_obj)


def _parse_tier(value: str) -> LeagueTier:
    try:
        return LeagueTier.parse(value)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _load(data_dir: Path | None, years: list[str] | None = None):
    settings = get_settings()
    root = data_dir if data_dir is not None else settings.data_dir_obj
    try:
        return load_snapshots(root, years=years)
    except SeasonDataError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


DataDirOption = Annotated[
    Path | None,
    typer.Option(
        "--data-dir",
        "-d",
        help="Snapshot directory (defaults to FFU_DATA_DIR)",
    ),
]


# =============================================================================
# Career
# =============================================================================


@app.command("career")
def career(
    min_seasons: Annotated[
        int,
        typer.Option("--min-seasons", "-m", help="Minimum seasons played", min=0),
    ] = 0,
    sort: Annotated[
        str,
        typer.Option("--sort", "-s", help="Column to sort by"),
    ] = "win_percentage",
    ascending: Annotated[
        bool,
        typer.Option("--asc", help="Sort ascending"),
    ] = False,
    tier: Annotated[
        str | None,
        typer.Option("--tier", "-t", help="Only franchises that played in this tier"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Rows to show (0 for all)", min=0),
    ] = 0,
    include_live: Annotated[
        bool,
        typer.Option(
            "--include-live",
            help="Count the live season's provisional power ratings in Avg UPR",
        ),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Show career records for every franchise.

    Avg UPR leaves out the live season unless --include-live is given.
    """
    if sort not in CAREER_COLUMNS:
        console.print(f"[red]Error: Unknown sort key '{sort}'[/red]")
        console.print(f"Choose from: {', '.join(CAREER_COLUMNS)}")
        raise typer.Exit(1)
    league_tier = _parse_tier(tier) if tier else None

    settings = get_settings()
    seasons = _load(data_dir)
    careers = CareerAggregator(
        playoff_cutoff=settings.playoff_cutoff,
        live_season=None if include_live else settings.live_season,
    ).aggregate(all_standings(seasons))
    records = filter_careers(careers.values(), min_seasons=min_seasons, tier=league_tier)

    df = career_frame(records, sort_key=sort, ascending=ascending)
    if df.empty:
        console.print("[yellow]No franchises match.[/yellow]")
        return
    if limit:
        df = df.head(limit)

    table = Table(title="Career Records")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Team", style="cyan")
    table.add_column("Seasons", justify="right")
    table.add_column("W-L-T", justify="right")
    table.add_column("Win %", justify="right", style="green")
    table.add_column("PF", justify="right")
    table.add_column("PPG", justify="right")
    table.add_column("Titles", justify="right")
    table.add_column("Last", justify="right")
    table.add_column("Avg Rank", justify="right")
    table.add_column("Avg UPR", justify="right")

    for i, row in enumerate(df.itertuples(index=False), start=1):
        cells = [
            str(i),
            row.team_name,
            str(row.seasons_played),
            f"{row.total_wins}-{row.total_losses}-{row.total_ties}",
            f"{row.win_percentage:.2f}",
            f"{row.total_points_for:.2f}",
            f"{row.average_points_per_game:.2f}",
            str(row.first_place_finishes),
            str(row.last_place_finishes),
            f"{row.average_season_rank:.2f}",
            f"{row.average_power_rating:.2f}",
        ]
        table.add_row(*cells)

    console.print(table)


# =============================================================================
# Power rankings
# =============================================================================


@app.command("power")
def power(
    year: Annotated[str, typer.Argument(help="Season year, e.g. 2024")],
    tier: Annotated[str, typer.Argument(help="PREMIER, MASTERS or NATIONAL")],
    data_dir: DataDirOption = None,
) -> None:
    """Show power rankings for one league season."""
    league_tier = _parse_tier(tier)
    season = next(
        (s for s in _load(data_dir, years=[year]) if s.tier == league_tier), None
    )
    if season is None:
        console.print(f"[red]Error: No snapshot for {league_tier.value} {year}[/red]")
        raise typer.Exit(1)

    settings = get_settings()
    ranked = PowerRatingOracle(settings.power_weights()).rank(
        season.standings, season.matchups_by_week
    )

    table = Table(title=f"{league_tier.value} {year} Power Rankings")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Team", style="cyan")
    table.add_column("UPR", justify="right", style="green")
    table.add_column("W-L", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("SOS", justify="right")
    for entry in ranked:
        table.add_row(
            str(entry.rank),
            entry.display_name,
            f"{entry.score:.2f}",
            f"{entry.wins}-{entry.losses}",
            f"{entry.average_score:.2f}",
            f"{entry.high_game:.2f}",
            f"{entry.low_game:.2f}",
            f"{entry.strength_of_schedule:.3f}",
        )
    console.print(table)


# =============================================================================
# Live week
# =============================================================================


@app.command("week")
def week(
    at: Annotated[
        str | None,
        typer.Option("--at", help="ISO date/time to evaluate instead of now"),
    ] = None,
) -> None:
    """Show the live season's current week and the state of every week."""
    settings = get_settings()
    if at is not None:
        try:
            now = datetime.fromisoformat(at)
        except ValueError:
            console.print(f"[red]Error: Invalid date/time '{at}'[/red]")
            raise typer.Exit(1) from None
    else:
        now = datetime.now(settings.tzinfo)

    try:
        oracle = ScheduleOracle(live_season=settings.live_season, tz=settings.tzinfo)
    except ScheduleError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    current = oracle.current_week(now)
    if current is None:
        console.print(f"[bold]{settings.live_season}:[/bold] no week in progress")
    else:
        console.print(f"[bold]{settings.live_season}:[/bold] week {current} in progress")

    table = Table(title=f"{settings.live_season} Schedule")
    table.add_column("Week", justify="right")
    table.add_column("Opens")
    table.add_column("Final")
    table.add_column("State")
    for window in oracle.windows:
        state = oracle.week_state(window.week, now)
        color = STATE_COLORS[state]
        table.add_row(
            str(window.week),
            window.start_date.isoformat(),
            window.grace_end_date.isoformat(),
            f"[{color}]{state.value}[/{color}]",
        )
    console.print(table)


# =============================================================================
# Records
# =============================================================================


def _describe(record: GameRecord | SeasonRecord | None, resolver: IdentityResolver) -> str:
    if record is None:
        return "N/A"
    name = resolver.display_name(record.franchise_id)
    if isinstance(record, SeasonRecord):
        return (
            f"{record.points:.2f} by {name} "
            f"({record.tier.value} {record.year}, {record.wins}-{record.losses})"
        )
    text = f"{record.score:.2f} by {name} ({record.tier.value} {record.year} wk {record.week})"
    if record.opponent_id is not None:
        text += f" vs {resolver.display_name(record.opponent_id)} {record.opponent_score:.2f}"
    return text


@app.command("records")
def records(
    include_live: Annotated[
        bool,
        typer.Option("--include-live", help="Count the season in progress"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Show the all-time league records."""
    settings = get_settings()
    resolver = IdentityResolver()
    book = all_time_records(
        _load(data_dir),
        resolver,
        exclude_years=() if include_live else (settings.live_season,),
    )

    table = Table(title="All-Time Records")
    table.add_column("Record", style="cyan")
    table.add_column("Holder")
    table.add_row("Highest single game", _describe(book.highest_single_game, resolver))
    table.add_row("Lowest single game", _describe(book.lowest_single_game, resolver))
    table.add_row("Most points in a season", _describe(book.most_points_season, resolver))
    table.add_row("Least points in a season", _describe(book.least_points_season, resolver))
    table.add_row("Most points in a loss", _describe(book.most_points_in_loss, resolver))
    table.add_row("Fewest points in a win", _describe(book.fewest_points_in_win, resolver))
    closest = book.closest_game
    if closest is None:
        table.add_row("Closest game", "N/A")
    else:
        table.add_row(
            "Closest game",
            f"{closest.margin:.2f}: {resolver.display_name(closest.winner)} "
            f"{closest.winner_score:.2f} - {resolver.display_name(closest.loser)} "
            f"{closest.loser_score:.2f} ({closest.tier.value} {closest.year} wk {closest.week})",
        )
    console.print(table)


# =============================================================================
# Identity
# =============================================================================


@app.command("resolve")
def resolve(
    raw_id: Annotated[str, typer.Argument(help="Platform user id, username or primary id")],
) -> None:
    """Show which franchise a raw id belongs to."""
    resolver = IdentityResolver()
    primary_id, unresolved = resolver.resolve(raw_id)
    if unresolved:
        console.print(f"[yellow]'{raw_id}' is not on the roster[/yellow]")
        raise typer.Exit(1)

    franchise = resolver.franchise(primary_id)
    console.print(f"[bold]{primary_id}[/bold] {franchise.display_name} ({franchise.abbreviation})")
    console.print(f"Active: {'yes' if franchise.is_active else 'no'}")
    if franchise.joined_year is not None:
        console.print(f"Joined: {franchise.joined_year}")
    if franchise.legacy_ids:
        console.print(f"Legacy ids: {', '.join(sorted(franchise.legacy_ids))}")
    for year, name in sorted(franchise.historical_names.items()):
        console.print(f"  {year}: {name}")


if __name__ == "__main__":
    app()
