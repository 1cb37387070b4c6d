"""Career aggregation over season standings.

Folds every ``SeasonStanding`` into the ``CareerRecord`` of the franchise it
belongs to. The fold only ever adds to integer and float totals; every ratio
is computed afterwards from those totals, so the result does not depend on
the order standings arrive in.

Playoff records are approximated from final placement using
``PLAYOFF_RECORD_BY_PLACEMENT``, which models a six-team single-elimination
bracket with byes for the top two seeds and a third-place game. Eras whose
real bracket differed are not replayed exactly.

Example:
    >>> from ffu_stats.seasons.aggregator import aggregate
    >>> careers = aggregate(standings)
    >>> careers["ffu-001"].win_percentage
    53.84...
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from ffu_stats.identity import IdentityResolver
from ffu_stats.logging import get_logger
from ffu_stats.seasons.models import CareerRecord, SeasonEntry, SeasonStanding
from ffu_stats.types import FranchiseId, LeagueTier, Year

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_PLAYOFF_CUTOFF: int = 6

PLAYOFF_RECORD_BY_PLACEMENT: dict[int, tuple[int, int]] = {
    1: (2, 0),
    2: (2, 1),
    3: (1, 2),
    4: (1, 2),
    5: (0, 1),
    6: (0, 1),
}


def playoff_record(placement: int | None) -> tuple[int, int]:
    """Approximate (wins, losses) for a final playoff placement.

    Placements outside the table, including None, give (0, 0).
    """
    if placement is None:
        return (0, 0)
    return PLAYOFF_RECORD_BY_PLACEMENT.get(placement, (0, 0))


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator."""
    return numerator / denominator if denominator else 0.0


def _recency(standing: SeasonStanding) -> tuple[int, str, str]:
    return (int(standing.year), standing.league_tier.value, standing.team_name or "")


@dataclass
class _Totals:
    """Running sums for one franchise during the fold."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: list[float] = field(default_factory=list)
    points_against: list[float] = field(default_factory=list)
    rank_sum: int = 0
    ranked_seasons: int = 0
    power_ratings: list[float] = field(default_factory=list)
    high_game: float | None = None
    low_game: float | None = None


class CareerAggregator:
    """Builds career records from season standings.

    Attributes:
        resolver: Maps raw franchise ids onto roster primary ids.
        playoff_cutoff: Worst regular-season rank that makes the playoffs.
        live_season: Season in progress; its provisional power ratings are
            left out of career power-rating averages.
    """

    def __init__(
        self,
        resolver: IdentityResolver | None = None,
        playoff_cutoff: int = DEFAULT_PLAYOFF_CUTOFF,
        live_season: Year | None = None,
    ) -> None:
        if playoff_cutoff < 1:
            raise ValueError(f"playoff_cutoff must be at least 1, got {playoff_cutoff}")
        self.resolver = resolver if resolver is not None else IdentityResolver()
        self.playoff_cutoff = playoff_cutoff
        self.live_season = str(live_season) if live_season is not None else None

    def aggregate(
        self, standings: Iterable[SeasonStanding]
    ) -> dict[FranchiseId, CareerRecord]:
        """Fold standings into one career record per franchise.

        Args:
            standings: Standings from any number of years and tiers.

        Returns:
            Mapping of primary id to career record.
        """
        standings = list(standings)
        group_sizes = Counter(s.group_key for s in standings)

        records: dict[FranchiseId, CareerRecord] = {}
        totals: dict[FranchiseId, _Totals] = {}
        latest_name: dict[FranchiseId, SeasonStanding] = {}
        unresolved: set[str] = set()

        for standing in standings:
            primary_id, is_unresolved = self.resolver.resolve(standing.franchise_id)
            if is_unresolved and primary_id not in unresolved:
                unresolved.add(primary_id)
                logger.warning(
                    "No roster entry for franchise id '{}' ({} {}); aggregating under raw id",
                    primary_id,
                    standing.year,
                    standing.league_tier.value,
                )

            record = records.get(primary_id)
            if record is None:
                record = CareerRecord(
                    franchise_id=primary_id, display_name="", abbreviation=""
                )
                records[primary_id] = record
                totals[primary_id] = _Totals()

            seen = latest_name.get(primary_id)
            if seen is None or _recency(standing) > _recency(seen):
                latest_name[primary_id] = standing

            self._fold(
                record,
                totals[primary_id],
                standing,
                group_sizes[standing.group_key],
            )

        for primary_id, record in records.items():
            self._finalize(record, totals[primary_id], latest_name[primary_id])

        logger.debug(
            "Aggregated {} standings into {} careers ({} unresolved ids)",
            len(standings),
            len(records),
            len(unresolved),
        )
        return records

    def _fold(
        self,
        record: CareerRecord,
        totals: _Totals,
        standing: SeasonStanding,
        group_size: int,
    ) -> None:
        totals.wins += standing.wins
        totals.losses += standing.losses
        totals.ties += standing.ties
        totals.points_for.append(standing.points_for)
        totals.points_against.append(standing.points_against)
        # Seasons without games say nothing about where a team finishes
        if standing.games_played > 0:
            totals.rank_sum += standing.rank
            totals.ranked_seasons += 1

        if standing.high_game:
            if totals.high_game is None or standing.high_game > totals.high_game:
                totals.high_game = standing.high_game
        if standing.low_game:
            if totals.low_game is None or standing.low_game < totals.low_game:
                totals.low_game = standing.low_game

        if standing.power_rating is not None and standing.year != self.live_season:
            totals.power_ratings.append(standing.power_rating)

        record.seasons_played += 1
        tier = standing.league_tier
        record.tier_seasons[tier] = record.tier_seasons.get(tier, 0) + 1

        if standing.rank == 1:
            record.first_place_finishes += 1
        elif standing.rank == 2:
            record.second_place_finishes += 1
        elif standing.rank == 3:
            record.third_place_finishes += 1
        # Counted on its own so a three-team group still records a last place
        if standing.rank == group_size:
            record.last_place_finishes += 1

        playoff_finish = None
        if standing.rank <= self.playoff_cutoff:
            record.playoff_appearances += 1
            playoff_finish = standing.playoff_finish or standing.rank
            wins, losses = playoff_record(playoff_finish)
            record.playoff_wins += wins
            record.playoff_losses += losses

        record.season_history.append(
            SeasonEntry(
                year=standing.year,
                league_tier=tier,
                wins=standing.wins,
                losses=standing.losses,
                ties=standing.ties,
                points_for=standing.points_for,
                points_against=standing.points_against,
                rank=standing.rank,
                playoff_finish=playoff_finish,
                power_rating=standing.power_rating,
                team_name=self.resolver.display_name(
                    standing.franchise_id,
                    standing.team_name,
                    year=standing.year,
                    current=False,
                ),
            )
        )

    def _finalize(
        self, record: CareerRecord, totals: _Totals, latest: SeasonStanding
    ) -> None:
        record.display_name = self.resolver.display_name(
            record.franchise_id, latest.team_name, year=latest.year
        )
        record.abbreviation = self.resolver.abbreviation(
            record.franchise_id, latest.abbreviation
        )

        record.total_wins = totals.wins
        record.total_losses = totals.losses
        record.total_ties = totals.ties
        # fsum is exactly rounded, so totals match for any input order
        record.total_points_for = math.fsum(totals.points_for)
        record.total_points_against = math.fsum(totals.points_against)
        record.career_high_game = totals.high_game or 0.0
        record.career_low_game = totals.low_game or 0.0

        record.win_percentage = safe_ratio(totals.wins, totals.wins + totals.losses) * 100
        record.average_points_per_game = safe_ratio(
            record.total_points_for, record.total_games
        )
        record.point_differential = record.total_points_for - record.total_points_against
        record.average_season_rank = safe_ratio(totals.rank_sum, totals.ranked_seasons)
        record.average_power_rating = safe_ratio(
            math.fsum(totals.power_ratings), len(totals.power_ratings)
        )

        # Newest first; tier order keeps same-year entries deterministic
        tier_order = {tier: i for i, tier in enumerate(LeagueTier)}
        record.season_history.sort(
            key=lambda e: (-int(e.year), tier_order[e.league_tier], e.rank)
        )


def aggregate(
    standings: Iterable[SeasonStanding],
    resolver: IdentityResolver | None = None,
    playoff_cutoff: int = DEFAULT_PLAYOFF_CUTOFF,
    live_season: Year | None = None,
) -> dict[FranchiseId, CareerRecord]:
    """Convenience wrapper around ``CareerAggregator.aggregate``."""
    return CareerAggregator(
        resolver=resolver,
        playoff_cutoff=playoff_cutoff,
        live_season=live_season,
    ).aggregate(standings)


def filter_careers(
    records: Iterable[CareerRecord],
    min_seasons: int = 0,
    tier: LeagueTier | None = None,
) -> list[CareerRecord]:
    """Keep careers with at least ``min_seasons`` seasons (optionally in one tier)."""
    kept = []
    for record in records:
        seasons = record.tier_seasons.get(tier, 0) if tier else record.seasons_played
        if seasons >= min_seasons and (tier is None or seasons > 0):
            kept.append(record)
    return kept
