"""Snapshot loading for precomputed season files.

Each completed season is stored as ``<data_dir>/<year>/<tier>.json`` with
standings, playoff results, promotions/relegations and the weekly results.
Playoff placements are merged into the matching standings so downstream
code sees a single ``SeasonStanding`` per franchise.

Example:
    >>> from ffu_stats.seasons.loader import load_snapshots
    >>> seasons = load_snapshots("data", years=["2023", "2024"])
    >>> sum(len(s.standings) for s in seasons)
    36
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from ffu_stats.logging import get_logger
from ffu_stats.seasons.eras import is_tier_available
from ffu_stats.seasons.models import (
    LeagueSeason,
    MalformedStandingError,
    PlayoffResult,
    SeasonDataError,
    SeasonStanding,
    WeekMatchup,
    parse_tier,
)
from ffu_stats.types import LeagueTier, Year

logger = get_logger(__name__)


class SnapshotError(SeasonDataError):
    """Raised when a snapshot file cannot be read or parsed."""


def parse_league_season(
    data: Mapping[str, Any],
    year: Year | None = None,
    tier: LeagueTier | str | None = None,
) -> LeagueSeason:
    """Build a ``LeagueSeason`` from a decoded snapshot document.

    Args:
        data: Decoded snapshot JSON.
        year: Season year; read from the document when omitted.
        tier: League tier; read from the document's ``league`` field when omitted.

    Returns:
        The parsed season, with playoff placements merged into standings.

    Raises:
        MalformedStandingError: If any record is missing a required field.
    """
    if not isinstance(data, Mapping):
        raise MalformedStandingError("snapshot must be a JSON object")

    year = str(year if year is not None else data.get("year") or "")
    if not year:
        raise MalformedStandingError("snapshot has no year")
    tier_value = tier if tier is not None else data.get("league")
    if not tier_value:
        raise MalformedStandingError(f"{year} snapshot has no league tier")
    league_tier = parse_tier(tier_value, f"{year} snapshot")
    context = f"{year} {league_tier.value}"

    raw_standings = data.get("standings")
    if not isinstance(raw_standings, list):
        raise MalformedStandingError(f"{context}: 'standings' must be a list")

    playoff_results = tuple(
        PlayoffResult.from_dict(r, context=f"{context} playoff result")
        for r in data.get("playoffResults") or []
    )
    placements = {r.franchise_id: r.placement for r in playoff_results}

    standings = []
    for raw in raw_standings:
        standing = SeasonStanding.from_dict(raw, year=year, tier=league_tier)
        if standing.playoff_finish is None:
            placement = placements.get(standing.franchise_id)
            if placement is None and isinstance(raw, Mapping):
                placement = placements.get(str(raw.get("userId")))
            if placement is not None:
                standing = replace(standing, playoff_finish=placement)
        standings.append(standing)

    matchups_by_week: dict[int, tuple[WeekMatchup, ...]] = {}
    for week_key, matchups in (data.get("matchupsByWeek") or {}).items():
        try:
            week = int(week_key)
        except (TypeError, ValueError):
            raise MalformedStandingError(
                f"{context}: invalid week key {week_key!r}"
            ) from None
        matchups_by_week[week] = tuple(
            WeekMatchup.from_dict(m, context=f"{context} week {week} matchup")
            for m in matchups or []
            if isinstance(m, Mapping) and m.get("winner") and m.get("loser")
        )

    return LeagueSeason(
        year=year,
        tier=league_tier,
        league_id=str(data.get("leagueId") or ""),
        standings=tuple(standings),
        playoff_results=playoff_results,
        promotions=tuple(str(p) for p in data.get("promotions") or []),
        relegations=tuple(str(r) for r in data.get("relegations") or []),
        matchups_by_week=matchups_by_week,
    )


def load_league_season(path: str | Path) -> LeagueSeason:
    """Read and parse one snapshot file.

    Year and tier default to the file's location (``<year>/<tier>.json``)
    when the document does not carry them.

    Raises:
        SnapshotError: If the file is unreadable or not valid JSON.
        MalformedStandingError: If a record inside is malformed.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise SnapshotError(f"Snapshot {path} is not a JSON object")

    year = data.get("year") or path.parent.name
    tier = data.get("league") or path.stem
    try:
        return parse_league_season(data, year=year, tier=tier)
    except MalformedStandingError as e:
        raise MalformedStandingError(f"{path}: {e}") from e


def load_snapshots(
    data_dir: str | Path,
    years: Iterable[Year] | None = None,
    tiers: Iterable[LeagueTier | str] | None = None,
) -> list[LeagueSeason]:
    """Load every snapshot under ``data_dir``.

    Args:
        data_dir: Root directory containing one sub-directory per year.
        years: Restrict to these years.
        tiers: Restrict to these tiers.

    Returns:
        Seasons ordered by year, then tier hierarchy.

    Raises:
        SnapshotError: If ``data_dir`` does not exist or a file is unreadable.
    """
    root = Path(data_dir)
    if not root.is_dir():
        raise SnapshotError(f"Snapshot directory {root} does not exist")

    wanted_years = {str(y) for y in years} if years is not None else None
    wanted_tiers = {LeagueTier.parse(t) for t in tiers} if tiers is not None else None

    seasons: list[LeagueSeason] = []
    for year_dir in sorted(p for p in root.iterdir() if p.is_dir() and p.name.isdigit()):
        if wanted_years is not None and year_dir.name not in wanted_years:
            continue
        for tier in LeagueTier:
            if wanted_tiers is not None and tier not in wanted_tiers:
                continue
            path = year_dir / f"{tier.value.lower()}.json"
            if not path.exists():
                if is_tier_available(tier, year_dir.name):
                    logger.debug("No snapshot for {} {}", tier.value, year_dir.name)
                continue
            season = load_league_season(path)
            seasons.append(season)
            logger.debug(
                "Loaded {} {} with {} teams",
                season.tier.value,
                season.year,
                len(season.standings),
            )

    logger.info("Loaded {} season snapshots from {}", len(seasons), root)
    return seasons


def all_standings(seasons: Iterable[LeagueSeason]) -> list[SeasonStanding]:
    """Flatten seasons into a single standings list."""
    return [standing for season in seasons for standing in season.standings]
