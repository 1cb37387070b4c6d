"""Season data, era rules and career aggregation.

Example:
    >>> from ffu_stats.seasons import aggregate, all_standings, load_snapshots
    >>> careers = aggregate(all_standings(load_snapshots("data")))
"""

from __future__ import annotations

from ffu_stats.seasons.aggregator import (
    DEFAULT_PLAYOFF_CUTOFF,
    PLAYOFF_RECORD_BY_PLACEMENT,
    CareerAggregator,
    aggregate,
    filter_careers,
    playoff_record,
)
from ffu_stats.seasons.loader import (
    SnapshotError,
    all_standings,
    load_league_season,
    load_snapshots,
    parse_league_season,
)
from ffu_stats.seasons.models import (
    CareerRecord,
    InvalidSeasonGroupError,
    LeagueSeason,
    MalformedStandingError,
    PlayoffResult,
    SeasonDataError,
    SeasonEntry,
    SeasonStanding,
    WeekMatchup,
    validate_season_group,
)
from ffu_stats.seasons.records import (
    AllTimeRecords,
    HeadToHeadIndex,
    HeadToHeadSummary,
    all_time_records,
)
from ffu_stats.seasons.standings import display_ranks, rank_standings, teams_tied

__all__ = [
    "DEFAULT_PLAYOFF_CUTOFF",
    "PLAYOFF_RECORD_BY_PLACEMENT",
    "AllTimeRecords",
    "CareerAggregator",
    "CareerRecord",
    "HeadToHeadIndex",
    "HeadToHeadSummary",
    "InvalidSeasonGroupError",
    "LeagueSeason",
    "MalformedStandingError",
    "PlayoffResult",
    "SeasonDataError",
    "SeasonEntry",
    "SeasonStanding",
    "SnapshotError",
    "WeekMatchup",
    "aggregate",
    "display_ranks",
    "all_standings",
    "all_time_records",
    "filter_careers",
    "load_league_season",
    "load_snapshots",
    "parse_league_season",
    "playoff_record",
    "rank_standings",
    "teams_tied",
    "validate_season_group",
]
