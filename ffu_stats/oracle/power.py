"""Composite power rating for one season's standings.

The league's power rating blends scoring level, scoring range and winning:

    score = (avg * w_avg + (high + low) * w_hl + win_pct * w_wp + sos * w_sos) / divisor

where ``win_pct`` and ``sos`` are fractions in [0, 1]. With the default
weights (6, 2, 400, 0, 10) this is the rating the league has always
published. Scores are rounded to two decimals.

When weekly results are supplied the inputs are rebuilt from regular-season
games only, so playoff weeks never move a team's rating. Strength of
schedule is then the mean win fraction of the opponents faced, one entry
per game.

Example:
    >>> oracle = PowerRatingOracle()
    >>> ranked = oracle.rank(season.standings, season.matchups_by_week)
    >>> ranked[0].franchise_id, ranked[0].score
    ('ffu-004', 143.27)
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace

from ffu_stats.identity import IdentityResolver
from ffu_stats.logging import get_logger
from ffu_stats.seasons.eras import is_regular_season_week, regular_season_weeks
from ffu_stats.seasons.models import SeasonStanding, WeekMatchup
from ffu_stats.types import FranchiseId, Week, Year

logger = get_logger(__name__)

# =============================================================================
# Weights
# =============================================================================


@dataclass(frozen=True)
class PowerRatingWeights:
    """Coefficients of the power-rating formula.

    Attributes:
        average_score: Weight of points per game.
        high_low: Weight of (high game + low game).
        win_percentage: Weight of win fraction.
        strength_of_schedule: Weight of opponents' mean win fraction.
        divisor: Overall scale.
    """

    average_score: float = 6.0
    high_low: float = 2.0
    win_percentage: float = 400.0
    strength_of_schedule: float = 0.0
    divisor: float = 10.0

    def __post_init__(self) -> None:
        if self.divisor <= 0:
            raise ValueError(f"divisor must be positive, got {self.divisor}")


DEFAULT_WEIGHTS = PowerRatingWeights()


def power_rating(
    average_score: float,
    high_game: float,
    low_game: float,
    win_percentage: float,
    strength_of_schedule: float = 0.0,
    weights: PowerRatingWeights = DEFAULT_WEIGHTS,
) -> float:
    """Compute one power rating, rounded to two decimals.

    Args:
        average_score: Points per game.
        high_game: Best single-week score.
        low_game: Worst single-week score.
        win_percentage: Win fraction in [0, 1].
        strength_of_schedule: Opponents' mean win fraction in [0, 1].
        weights: Formula coefficients.
    """
    raw = (
        average_score * weights.average_score
        + (high_game + low_game) * weights.high_low
        + win_percentage * weights.win_percentage
        + strength_of_schedule * weights.strength_of_schedule
    ) / weights.divisor
    return round(raw, 2)


def win_fraction(wins: int, losses: int) -> float:
    """Wins over decided games; 0.0 with none."""
    decided = wins + losses
    return wins / decided if decided > 0 else 0.0


# =============================================================================
# Season inputs
# =============================================================================


@dataclass
class SeasonStats:
    """Power-rating inputs for one franchise."""

    wins: int = 0
    losses: int = 0
    scores: list[float] = field(default_factory=list)
    opponents: list[FranchiseId] = field(default_factory=list)

    @property
    def games(self) -> int:
        return len(self.scores)

    @property
    def points_for(self) -> float:
        return math.fsum(self.scores)

    @property
    def average_score(self) -> float:
        return self.points_for / self.games if self.scores else 0.0

    @property
    def high_game(self) -> float:
        return max(self.scores) if self.scores else 0.0

    @property
    def low_game(self) -> float:
        return min(self.scores) if self.scores else 0.0

    @property
    def win_percentage(self) -> float:
        return win_fraction(self.wins, self.losses)


def season_stats_from_matchups(
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]],
    year: Year,
    resolver: IdentityResolver | None = None,
    through_week: Week | None = None,
) -> dict[FranchiseId, SeasonStats]:
    """Regular-season stats for every franchise in the weekly results.

    Args:
        matchups_by_week: Decided games keyed by week.
        year: Season year; selects which weeks are regular season.
        resolver: Maps raw ids in the results to primary ids.
        through_week: Ignore weeks after this one.
    """
    resolver = resolver if resolver is not None else IdentityResolver()
    stats: dict[FranchiseId, SeasonStats] = defaultdict(SeasonStats)
    for week in sorted(matchups_by_week):
        if not is_regular_season_week(week, year):
            continue
        if through_week is not None and week > through_week:
            continue
        for matchup in matchups_by_week[week]:
            winner = resolver.resolve_id(matchup.winner)
            loser = resolver.resolve_id(matchup.loser)
            stats[winner].wins += 1
            stats[winner].scores.append(matchup.winner_score)
            stats[winner].opponents.append(loser)
            stats[loser].losses += 1
            stats[loser].scores.append(matchup.loser_score)
            stats[loser].opponents.append(winner)
    return dict(stats)


def strength_of_schedule(
    franchise_id: FranchiseId, stats: Mapping[FranchiseId, SeasonStats]
) -> float:
    """Mean win fraction of the opponents ``franchise_id`` faced."""
    own = stats.get(franchise_id)
    if own is None or not own.opponents:
        return 0.0
    fractions = [
        stats[o].win_percentage if o in stats else 0.0 for o in own.opponents
    ]
    return math.fsum(fractions) / len(fractions)


# =============================================================================
# Ranking
# =============================================================================


@dataclass(frozen=True)
class FranchiseScore:
    """A franchise's place in the power rankings."""

    franchise_id: FranchiseId
    display_name: str
    score: float
    rank: int
    wins: int
    losses: int
    points_for: float
    average_score: float
    high_game: float
    low_game: float
    win_percentage: float
    strength_of_schedule: float


class PowerRatingOracle:
    """Ranks one (year, tier) group by power rating.

    Attributes:
        weights: Formula coefficients.
        resolver: Maps raw ids to primary ids and display names.
    """

    def __init__(
        self,
        weights: PowerRatingWeights | None = None,
        resolver: IdentityResolver | None = None,
    ) -> None:
        self.weights = weights if weights is not None else DEFAULT_WEIGHTS
        self.resolver = resolver if resolver is not None else IdentityResolver()

    def rank(
        self,
        standings: Sequence[SeasonStanding],
        matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None = None,
        through_week: Week | None = None,
    ) -> list[FranchiseScore]:
        """Score and order every franchise in ``standings``.

        Without weekly results the standings' own totals are used and
        strength of schedule is zero.

        Returns:
            Scores ordered by score desc, points for desc, then primary id.
        """
        if not standings:
            return []
        year = standings[0].year

        game_stats = None
        if matchups_by_week:
            game_stats = season_stats_from_matchups(
                matchups_by_week, year, self.resolver, through_week
            )

        unranked = []
        for standing in standings:
            primary_id = self.resolver.resolve_id(standing.franchise_id)
            if game_stats is not None:
                season = game_stats.get(primary_id, SeasonStats())
                wins, losses = season.wins, season.losses
                points_for = season.points_for
                average = season.average_score
                high, low = season.high_game, season.low_game
                sos = strength_of_schedule(primary_id, game_stats)
            else:
                wins, losses = standing.wins, standing.losses
                points_for = standing.points_for
                games = standing.games_played
                average = standing.points_for / games if games > 0 else 0.0
                high = standing.high_game or 0.0
                low = standing.low_game or 0.0
                sos = 0.0

            pct = win_fraction(wins, losses)
            unranked.append(
                FranchiseScore(
                    franchise_id=primary_id,
                    display_name=self.resolver.display_name(
                        primary_id, standing.team_name, year=standing.year
                    ),
                    score=power_rating(average, high, low, pct, sos, self.weights),
                    rank=0,
                    wins=wins,
                    losses=losses,
                    points_for=points_for,
                    average_score=average,
                    high_game=high,
                    low_game=low,
                    win_percentage=pct,
                    strength_of_schedule=sos,
                )
            )

        unranked.sort(key=lambda s: (-s.score, -s.points_for, s.franchise_id))
        ranked = [replace(s, rank=i) for i, s in enumerate(unranked, start=1)]

        logger.debug(
            "Ranked {} franchises for {} {}",
            len(ranked),
            standings[0].league_tier.value,
            year,
        )
        return ranked

    def progression(
        self,
        standings: Sequence[SeasonStanding],
        matchups_by_week: Mapping[Week, Sequence[WeekMatchup]],
    ) -> dict[Week, list[FranchiseScore]]:
        """Power rankings as they stood after each regular-season week played."""
        if not standings:
            return {}
        year = standings[0].year
        played = [w for w in regular_season_weeks(year) if matchups_by_week.get(w)]
        return {
            week: self.rank(standings, matchups_by_week, through_week=week)
            for week in played
        }


def rank(
    standings: Sequence[SeasonStanding],
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None = None,
    weights: PowerRatingWeights | None = None,
    resolver: IdentityResolver | None = None,
) -> list[FranchiseScore]:
    """Convenience wrapper around ``PowerRatingOracle.rank``."""
    return PowerRatingOracle(weights, resolver).rank(standings, matchups_by_week)


def progression(
    standings: Sequence[SeasonStanding],
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]],
    weights: PowerRatingWeights | None = None,
    resolver: IdentityResolver | None = None,
) -> dict[Week, list[FranchiseScore]]:
    """Convenience wrapper around ``PowerRatingOracle.progression``."""
    return PowerRatingOracle(weights, resolver).progression(standings, matchups_by_week)


def score_history(
    progression_by_week: Mapping[Week, Iterable[FranchiseScore]],
) -> dict[FranchiseId, list[tuple[Week, float]]]:
    """Pivot a progression into each franchise's (week, score) series."""
    history: dict[FranchiseId, list[tuple[Week, float]]] = defaultdict(list)
    for week in sorted(progression_by_week):
        for entry in progression_by_week[week]:
            history[entry.franchise_id].append((week, entry.score))
    return dict(history)
