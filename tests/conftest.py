"""Shared pytest fixtures for ffu-stats tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (test settings in a temporary directory)
- Standing factories
- Snapshot fixtures (a small 2023/2024 Premier history written to disk)

The 2024 Premier snapshot is a three-week season plus a championship game:

    week 1:  ffu-001 130 - 120 ffu-004    ffu-007 100 -  90 new
    week 2:  ffu-001 140 - 110 ffu-007    ffu-004 120 -  95 new
    week 3:  ffu-001 120 -  95 new        ffu-004 120 - 110 ffu-007
    week 15: ffu-001 150 - 100 ffu-004   (championship)

Example:
    def test_something(snapshot_dir):
        seasons = load_snapshots(snapshot_dir)
"""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from ffu_stats.config import Settings, get_settings, reset_settings
from ffu_stats.seasons.loader import parse_league_season
from ffu_stats.seasons.models import LeagueSeason, SeasonStanding
from ffu_stats.types import LeagueTier

# Raw ids used in the snapshots
STALLIONS_PLATFORM_ID = "331590801261883392"
BEERS_PLATFORM_ID = "398576262546735104"
NEW_MEMBER_ID = "someone-new"


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def test_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Settings, None, None]:
    """Provide test settings with temporary directories.

    Automatically resets settings singleton after test.
    """
    monkeypatch.setenv("FFU_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    reset_settings()
    settings = get_settings()
    settings.ensure_directories()

    yield settings

    reset_settings()


# =============================================================================
# Standings
# =============================================================================


@pytest.fixture
def make_standing() -> Callable[..., SeasonStanding]:
    """Factory for standings with sensible defaults."""

    def _make(
        franchise_id: str = "ffu-001",
        year: str = "2024",
        tier: LeagueTier = LeagueTier.PREMIER,
        wins: int = 7,
        losses: int = 7,
        points_for: float = 1400.0,
        points_against: float = 1400.0,
        rank: int = 1,
        **kwargs: Any,
    ) -> SeasonStanding:
        return SeasonStanding(
            franchise_id=franchise_id,
            year=year,
            league_tier=tier,
            wins=wins,
            losses=losses,
            points_for=points_for,
            points_against=points_against,
            rank=rank,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_group(
    make_standing: Callable[..., SeasonStanding],
) -> Callable[..., list[SeasonStanding]]:
    """Fill a (year, tier) group around one standing with filler teams.

    Fillers take every rank the given standing does not hold and use ids
    ``filler-<year>-<rank>`` so they never collide with roster ids.
    """

    def _make(standing: SeasonStanding, size: int = 12) -> list[SeasonStanding]:
        group = [standing]
        for rank in range(1, size + 1):
            if rank == standing.rank:
                continue
            group.append(
                make_standing(
                    franchise_id=f"filler-{standing.year}-{rank}",
                    year=standing.year,
                    tier=standing.league_tier,
                    rank=rank,
                )
            )
        return group

    return _make


# =============================================================================
# Snapshots
# =============================================================================


def _standing(
    user_id: str,
    wins: int,
    losses: int,
    points_for: float,
    points_against: float,
    rank: int,
    team_name: str,
    abbreviation: str,
    power_rating: float,
    high_game: float | None = None,
    low_game: float | None = None,
    ffu_user_id: str | None = None,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "userId": user_id,
        "wins": wins,
        "losses": losses,
        "ties": 0,
        "pointsFor": points_for,
        "pointsAgainst": points_against,
        "rank": rank,
        "unionPowerRating": power_rating,
        "userInfo": {"teamName": team_name, "abbreviation": abbreviation},
    }
    if high_game is not None:
        record["highGame"] = high_game
        record["lowGame"] = low_game
    if ffu_user_id is not None:
        record["ffuUserId"] = ffu_user_id
    return record


def _game(winner: str, loser: str, winner_score: float, loser_score: float) -> dict[str, Any]:
    return {
        "winner": winner,
        "loser": loser,
        "winnerScore": winner_score,
        "loserScore": loser_score,
    }


PREMIER_2024: dict[str, Any] = {
    "year": "2024",
    "league": "PREMIER",
    "leagueId": "1124841088360660992",
    "standings": [
        _standing(STALLIONS_PLATFORM_ID, 3, 0, 390.0, 325.0, 1, "The Stallions", "STA", 150.0, 140.0, 120.0, ffu_user_id="ffu-001"),
        _standing(BEERS_PLATFORM_ID, 2, 1, 360.0, 335.0, 2, "Blood, Sweat, and Beers", "BEER", 130.0, 120.0, 120.0),
        _standing("ffu-007", 1, 2, 320.0, 350.0, 3, "The Dark Knights", "BATS", 110.0, 110.0, 100.0),
        _standing(NEW_MEMBER_ID, 0, 3, 280.0, 340.0, 4, "New Kids", "NEW", 90.0, 95.0, 90.0),
    ],
    "playoffResults": [
        {"userId": STALLIONS_PLATFORM_ID, "placement": 1, "placementName": "Champion"},
        {"userId": BEERS_PLATFORM_ID, "placement": 2, "placementName": "Runner-up"},
        {"userId": "ffu-007", "placement": 3, "placementName": "Third Place"},
        {"userId": NEW_MEMBER_ID, "placement": 4, "placementName": "Fourth Place"},
    ],
    "promotions": [],
    "relegations": [NEW_MEMBER_ID],
    "matchupsByWeek": {
        "1": [
            _game(STALLIONS_PLATFORM_ID, BEERS_PLATFORM_ID, 130.0, 120.0),
            _game("ffu-007", NEW_MEMBER_ID, 100.0, 90.0),
        ],
        "2": [
            _game(STALLIONS_PLATFORM_ID, "ffu-007", 140.0, 110.0),
            _game(BEERS_PLATFORM_ID, NEW_MEMBER_ID, 120.0, 95.0),
        ],
        "3": [
            _game(STALLIONS_PLATFORM_ID, NEW_MEMBER_ID, 120.0, 95.0),
            _game(BEERS_PLATFORM_ID, "ffu-007", 120.0, 110.0),
        ],
        "15": [
            {**_game(STALLIONS_PLATFORM_ID, BEERS_PLATFORM_ID, 150.0, 100.0), "placementType": "championship"},
        ],
    },
}

PREMIER_2023: dict[str, Any] = {
    "year": "2023",
    "league": "PREMIER",
    "leagueId": "989237166217723904",
    "standings": [
        _standing("ffu-004", 3, 0, 400.0, 290.0, 1, "Blood, Sweat, and Beers", "BEER", 140.0),
        _standing("ffu-007", 2, 1, 330.0, 310.0, 2, "The Dark Knights", "BATS", 120.0),
        _standing("stallions", 1, 2, 300.0, 330.0, 3, "Stallions Reborn", "STA", 100.0),
        _standing("ffu-010", 0, 3, 270.0, 370.0, 4, "ChicagoPick6", "CP6", 80.0),
    ],
    "playoffResults": [],
    "promotions": [],
    "relegations": ["ffu-010"],
    "matchupsByWeek": {},
}


def write_snapshot(root: Path, document: dict[str, Any]) -> Path:
    """Write a snapshot document to ``<root>/<year>/<tier>.json``."""
    path = root / str(document["year"]) / f"{document['league'].lower()}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Directory holding the 2023 and 2024 Premier snapshots."""
    root = tmp_path / "snapshots"
    write_snapshot(root, PREMIER_2023)
    write_snapshot(root, PREMIER_2024)
    return root


@pytest.fixture
def premier_2024() -> LeagueSeason:
    """The 2024 Premier season, parsed."""
    return parse_league_season(PREMIER_2024)


@pytest.fixture
def premier_2023() -> LeagueSeason:
    """The 2023 Premier season, parsed."""
    return parse_league_season(PREMIER_2023)


@pytest.fixture
def snapshot_writer() -> Callable[[Path, dict[str, Any]], Path]:
    """The ``write_snapshot`` helper, for tests that build their own files."""
    return write_snapshot


@pytest.fixture
def premier_2024_document() -> dict[str, Any]:
    """A deep copy of the raw 2024 Premier snapshot document."""
    return json.loads(json.dumps(PREMIER_2024))
