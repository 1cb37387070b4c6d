"""Era rules for the league's history.

The league ran on a legacy platform from 2018 through 2020 and on the
current platform from 2021. The eras differ in playoff weeks, season
length and which tiers existed (Masters started in 2022).

Example:
    >>> from ffu_stats.seasons.eras import playoff_weeks, regular_season_weeks
    >>> playoff_weeks("2019")
    (14, 15, 16)
    >>> regular_season_weeks("2024")[-1]
    14
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ffu_stats.types import LeagueTier, Week, Year

# =============================================================================
# Constants
# =============================================================================

LEGACY_ERA_START: int = 2018
LEGACY_ERA_END: int = 2020
MASTERS_START: int = 2022

PLAYOFF_ROUND_NAMES: tuple[str, ...] = ("Quarterfinal", "Semifinal", "Championship")


class Era(str, Enum):
    """Platform eras."""

    LEGACY = "LEGACY"
    CURRENT = "CURRENT"


@dataclass(frozen=True)
class LeagueConfig:
    """One tier's league in one year on its platform."""

    league_id: str
    year: Year
    tier: LeagueTier
    status: str


LEAGUES: tuple[LeagueConfig, ...] = (
    LeagueConfig("1256010768692805632", "2025", LeagueTier.PREMIER, "active"),
    LeagueConfig("1124841088360660992", "2024", LeagueTier.PREMIER, "completed"),
    LeagueConfig("989237166217723904", "2023", LeagueTier.PREMIER, "completed"),
    LeagueConfig("856271024054996992", "2022", LeagueTier.PREMIER, "completed"),
    LeagueConfig("710961812656455680", "2021", LeagueTier.PREMIER, "completed"),
    LeagueConfig("espn-2020-premier", "2020", LeagueTier.PREMIER, "completed"),
    LeagueConfig("espn-2019-premier", "2019", LeagueTier.PREMIER, "completed"),
    LeagueConfig("espn-2018-premier", "2018", LeagueTier.PREMIER, "completed"),
    LeagueConfig("1256011253583708161", "2025", LeagueTier.MASTERS, "active"),
    LeagueConfig("1124833010697379840", "2024", LeagueTier.MASTERS, "completed"),
    LeagueConfig("989238596353794048", "2023", LeagueTier.MASTERS, "completed"),
    LeagueConfig("856271401471029248", "2022", LeagueTier.MASTERS, "completed"),
    LeagueConfig("1256012193275576320", "2025", LeagueTier.NATIONAL, "active"),
    LeagueConfig("1124834889196134400", "2024", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("989240797381951488", "2023", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("856271753788403712", "2022", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("726573082608775168", "2021", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("espn-2020-national", "2020", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("espn-2019-national", "2019", LeagueTier.NATIONAL, "completed"),
    LeagueConfig("espn-2018-national", "2018", LeagueTier.NATIONAL, "completed"),
)


def _year(year: Year | int) -> int:
    try:
        return int(year)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid season year '{year}'") from None


def is_legacy_era(year: Year | int) -> bool:
    return LEGACY_ERA_START <= _year(year) <= LEGACY_ERA_END


def is_current_era(year: Year | int) -> bool:
    return _year(year) > LEGACY_ERA_END


def era_of(year: Year | int) -> Era:
    return Era.LEGACY if is_legacy_era(year) else Era.CURRENT


def playoff_weeks(year: Year | int) -> tuple[Week, ...]:
    return (14, 15, 16) if is_legacy_era(year) else (15, 16, 17)


def season_length(year: Year | int) -> int:
    """Total fantasy weeks, playoffs included."""
    return 16 if is_legacy_era(year) else 17


def regular_season_weeks(year: Year | int) -> tuple[Week, ...]:
    return tuple(range(1, min(playoff_weeks(year))))


def is_playoff_week(week: Week, year: Year | int) -> bool:
    return week in playoff_weeks(year)


def is_regular_season_week(week: Week, year: Year | int) -> bool:
    return week in regular_season_weeks(year)


def playoff_round_name(week: Week, year: Year | int) -> str | None:
    """Quarterfinal / Semifinal / Championship, or None outside playoffs."""
    weeks = playoff_weeks(year)
    if week not in weeks:
        return None
    return PLAYOFF_ROUND_NAMES[weeks.index(week)]


def available_tiers(year: Year | int) -> tuple[LeagueTier, ...]:
    """Tiers that existed in ``year``."""
    if _year(year) < MASTERS_START:
        return (LeagueTier.PREMIER, LeagueTier.NATIONAL)
    return (LeagueTier.PREMIER, LeagueTier.MASTERS, LeagueTier.NATIONAL)


def is_tier_available(tier: LeagueTier, year: Year | int) -> bool:
    return tier in available_tiers(year)


def league_id(tier: LeagueTier, year: Year | int) -> str | None:
    """Platform league id for a tier and year, if the league existed."""
    for league in LEAGUES:
        if league.tier == tier and league.year == str(year):
            return league.league_id
    return None


def all_years() -> list[Year]:
    """Every season year with a configured league, newest first."""
    return sorted({league.year for league in LEAGUES}, reverse=True)


def era_info(year: Year | int) -> dict[str, object]:
    """Summary of the era rules that apply to ``year``."""
    legacy = is_legacy_era(year)
    return {
        "era": era_of(year).value,
        "is_legacy_era": legacy,
        "total_weeks": season_length(year),
        "regular_season_weeks": regular_season_weeks(year),
        "playoff_weeks": playoff_weeks(year),
        "available_tiers": available_tiers(year),
        "data_format": "CSV" if legacy else "JSON",
        "has_real_time_data": not legacy,
    }
