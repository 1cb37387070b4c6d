"""Tests for DataFrame views of career records."""

from __future__ import annotations

import pandas as pd
import pytest

from ffu_stats.seasons.aggregator import aggregate
from ffu_stats.seasons.frames import (
    CAREER_COLUMNS,
    HISTORY_COLUMNS,
    career_frame,
    season_history_frame,
)
from ffu_stats.seasons.loader import all_standings
from ffu_stats.seasons.models import CareerRecord, LeagueSeason


@pytest.fixture
def careers(premier_2023: LeagueSeason, premier_2024: LeagueSeason) -> dict[str, CareerRecord]:
    return aggregate(all_standings([premier_2023, premier_2024]))


class TestCareerFrame:
    """Tests for career_frame."""

    def test_columns_and_rows(self, careers: dict[str, CareerRecord]) -> None:
        df = career_frame(careers.values())

        assert list(df.columns) == CAREER_COLUMNS
        assert len(df) == 5

    def test_default_sort_is_win_percentage_desc(self, careers: dict[str, CareerRecord]) -> None:
        df = career_frame(careers.values())

        assert df["win_percentage"].is_monotonic_decreasing
        assert df.iloc[0]["franchise_id"] == "ffu-004"

    def test_ascending_sort_breaks_ties_by_id(self, careers: dict[str, CareerRecord]) -> None:
        df = career_frame(careers.values(), sort_key="seasons_played", ascending=True)

        assert list(df["franchise_id"]) == [
            "ffu-010",
            "someone-new",
            "ffu-001",
            "ffu-004",
            "ffu-007",
        ]

    def test_min_seasons(self, careers: dict[str, CareerRecord]) -> None:
        df = career_frame(careers.values(), min_seasons=2)

        assert set(df["franchise_id"]) == {"ffu-001", "ffu-004", "ffu-007"}

    def test_unknown_sort_key(self, careers: dict[str, CareerRecord]) -> None:
        with pytest.raises(ValueError, match="Unknown sort key"):
            career_frame(careers.values(), sort_key="vibes")

    def test_empty(self) -> None:
        df = career_frame([])

        assert isinstance(df, pd.DataFrame)
        assert df.empty
        assert list(df.columns) == CAREER_COLUMNS


def test_season_history_frame(careers: dict[str, CareerRecord]) -> None:
    df = season_history_frame(careers["ffu-001"])

    assert list(df.columns) == HISTORY_COLUMNS
    assert list(df["year"]) == ["2024", "2023"]
    assert list(df["team_name"]) == ["The Stallions", "Stallions Reborn"]
    assert df.iloc[0]["average_points_per_game"] == 130.0
