"""Power rankings and live-season week state."""

from __future__ import annotations

from ffu_stats.oracle.power import (
    DEFAULT_WEIGHTS,
    FranchiseScore,
    PowerRatingOracle,
    PowerRatingWeights,
    power_rating,
    progression,
    rank,
)
from ffu_stats.oracle.schedule import (
    LIVE_SEASON_2025,
    InvalidScheduleError,
    ScheduleError,
    ScheduleOracle,
    WeekState,
    WeekWindow,
    windows_for,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "LIVE_SEASON_2025",
    "FranchiseScore",
    "InvalidScheduleError",
    "PowerRatingOracle",
    "PowerRatingWeights",
    "ScheduleError",
    "ScheduleOracle",
    "WeekState",
    "WeekWindow",
    "power_rating",
    "progression",
    "rank",
    "windows_for",
]
