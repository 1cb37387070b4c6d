"""Tabular views of career records.

Builds pandas DataFrames for display and export. Columns are the scalar
fields of ``CareerRecord.to_dict`` so any of them can be used as a sort key.

Example:
    >>> df = career_frame(careers.values(), sort_key="win_percentage", min_seasons=3)
    >>> df[["team_name", "win_percentage"]].head()
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from ffu_stats.seasons.models import CareerRecord

CAREER_COLUMNS: list[str] = [
    "franchise_id",
    "team_name",
    "abbreviation",
    "total_wins",
    "total_losses",
    "total_ties",
    "win_percentage",
    "playoff_wins",
    "playoff_losses",
    "total_points_for",
    "total_points_against",
    "point_differential",
    "average_points_per_game",
    "career_high_game",
    "career_low_game",
    "first_place_finishes",
    "second_place_finishes",
    "third_place_finishes",
    "last_place_finishes",
    "playoff_appearances",
    "seasons_played",
    "premier_seasons",
    "masters_seasons",
    "national_seasons",
    "average_season_rank",
    "average_power_rating",
]

HISTORY_COLUMNS: list[str] = [
    "year",
    "league_tier",
    "team_name",
    "wins",
    "losses",
    "ties",
    "points_for",
    "points_against",
    "average_points_per_game",
    "rank",
    "playoff_finish",
    "power_rating",
]


def career_frame(
    records: Iterable[CareerRecord],
    sort_key: str = "win_percentage",
    ascending: bool = False,
    min_seasons: int = 0,
) -> pd.DataFrame:
    """Career records as a DataFrame, one row per franchise.

    Args:
        records: Career records to tabulate.
        sort_key: Column to sort by.
        ascending: Sort direction.
        min_seasons: Drop franchises with fewer seasons played.

    Returns:
        DataFrame with ``CAREER_COLUMNS``; ties on ``sort_key`` are broken by
        franchise id.

    Raises:
        ValueError: If ``sort_key`` is not a known column.
    """
    if sort_key not in CAREER_COLUMNS:
        raise ValueError(
            f"Unknown sort key '{sort_key}'. Choose from: {', '.join(CAREER_COLUMNS)}"
        )

    rows = [r.to_dict() for r in records if r.seasons_played >= min_seasons]
    df = pd.DataFrame(rows, columns=CAREER_COLUMNS)
    if df.empty:
        return df

    df = df.sort_values(
        [sort_key, "franchise_id"], ascending=[ascending, True], kind="mergesort"
    )
    return df.reset_index(drop=True)


def season_history_frame(record: CareerRecord) -> pd.DataFrame:
    """One franchise's season history, newest first."""
    rows = [
        {
            "year": entry.year,
            "league_tier": entry.league_tier.value,
            "team_name": entry.team_name,
            "wins": entry.wins,
            "losses": entry.losses,
            "ties": entry.ties,
            "points_for": entry.points_for,
            "points_against": entry.points_against,
            "average_points_per_game": entry.average_points_per_game,
            "rank": entry.rank,
            "playoff_finish": entry.playoff_finish,
            "power_rating": entry.power_rating,
        }
        for entry in record.season_history
    ]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)
