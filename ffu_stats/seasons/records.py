"""League records and head-to-head history.

``HeadToHeadIndex`` indexes every decided game in both directions so the
meeting history of any two franchises is a dictionary lookup.
``all_time_records`` scans the same games, plus season totals, for the
league's record book.

Example:
    >>> index = HeadToHeadIndex.from_seasons(seasons, resolver)
    >>> summary = index.summary("ffu-001", "ffu-004")
    >>> summary.first_wins, summary.second_wins
    (5, 3)
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from ffu_stats.identity import IdentityResolver
from ffu_stats.seasons.eras import is_playoff_week
from ffu_stats.seasons.models import LeagueSeason
from ffu_stats.types import FranchiseId, LeagueTier, Week, Year

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class IndexedMatchup:
    """A decided game with its season context, ids already resolved."""

    year: Year
    tier: LeagueTier
    week: Week
    winner: FranchiseId
    loser: FranchiseId
    winner_score: float
    loser_score: float
    is_playoff: bool
    placement_type: str | None = None

    @property
    def margin(self) -> float:
        return self.winner_score - self.loser_score


@dataclass(frozen=True)
class HeadToHeadSummary:
    """Meeting history between two franchises, from the first one's view."""

    first: FranchiseId
    second: FranchiseId
    first_wins: int
    second_wins: int
    total_games: int
    first_average_score: float
    second_average_score: float


@dataclass(frozen=True)
class GameRecord:
    """A single-game record holder."""

    franchise_id: FranchiseId
    score: float
    year: Year
    tier: LeagueTier
    week: Week
    opponent_id: FranchiseId | None = None
    opponent_score: float | None = None


@dataclass(frozen=True)
class SeasonRecord:
    """A season-total record holder."""

    franchise_id: FranchiseId
    points: float
    year: Year
    tier: LeagueTier
    wins: int
    losses: int


@dataclass(frozen=True)
class AllTimeRecords:
    """The league record book; any entry is None when there is no data."""

    highest_single_game: GameRecord | None = None
    lowest_single_game: GameRecord | None = None
    most_points_season: SeasonRecord | None = None
    least_points_season: SeasonRecord | None = None
    most_points_in_loss: GameRecord | None = None
    fewest_points_in_win: GameRecord | None = None
    closest_game: IndexedMatchup | None = None


# =============================================================================
# Indexing
# =============================================================================


def index_matchups(
    seasons: Iterable[LeagueSeason],
    resolver: IdentityResolver | None = None,
) -> list[IndexedMatchup]:
    """Flatten every decided game, resolving franchise ids."""
    resolver = resolver if resolver is not None else IdentityResolver()
    games = []
    for season in seasons:
        for week, matchup in season.all_matchups():
            games.append(
                IndexedMatchup(
                    year=season.year,
                    tier=season.tier,
                    week=week,
                    winner=resolver.resolve_id(matchup.winner),
                    loser=resolver.resolve_id(matchup.loser),
                    winner_score=matchup.winner_score,
                    loser_score=matchup.loser_score,
                    is_playoff=is_playoff_week(week, season.year),
                    placement_type=matchup.placement_type,
                )
            )
    return games


class HeadToHeadIndex:
    """Both-direction lookup of games between franchise pairs."""

    def __init__(self, games: Iterable[IndexedMatchup]) -> None:
        self._index: dict[FranchiseId, dict[FranchiseId, list[IndexedMatchup]]] = (
            defaultdict(lambda: defaultdict(list))
        )
        for game in games:
            self._index[game.winner][game.loser].append(game)
            self._index[game.loser][game.winner].append(game)

    @classmethod
    def from_seasons(
        cls,
        seasons: Iterable[LeagueSeason],
        resolver: IdentityResolver | None = None,
    ) -> HeadToHeadIndex:
        return cls(index_matchups(seasons, resolver))

    def opponents(self, franchise_id: FranchiseId) -> list[FranchiseId]:
        return sorted(self._index.get(franchise_id, {}))

    def games(self, first: FranchiseId, second: FranchiseId) -> list[IndexedMatchup]:
        """Games between two franchises, one per (year, tier, week), newest first."""
        games = self._index.get(first, {}).get(second, [])
        unique: dict[tuple[Year, LeagueTier, Week], IndexedMatchup] = {}
        for game in games:
            unique.setdefault((game.year, game.tier, game.week), game)
        return sorted(
            unique.values(), key=lambda g: (int(g.year), g.week), reverse=True
        )

    def summary(self, first: FranchiseId, second: FranchiseId) -> HeadToHeadSummary:
        games = self.games(first, second)
        first_scores = [g.winner_score if g.winner == first else g.loser_score for g in games]
        second_scores = [g.winner_score if g.winner == second else g.loser_score for g in games]
        return HeadToHeadSummary(
            first=first,
            second=second,
            first_wins=sum(1 for g in games if g.winner == first),
            second_wins=sum(1 for g in games if g.winner == second),
            total_games=len(games),
            first_average_score=math.fsum(first_scores) / len(games) if games else 0.0,
            second_average_score=math.fsum(second_scores) / len(games) if games else 0.0,
        )


# =============================================================================
# Record book
# =============================================================================


def _game_sort_key(game: IndexedMatchup) -> tuple[int, str, int]:
    return (int(game.year), game.tier.value, game.week)


def all_time_records(
    seasons: Iterable[LeagueSeason],
    resolver: IdentityResolver | None = None,
    exclude_years: Iterable[Year] = (),
) -> AllTimeRecords:
    """Scan seasons for the league's single-game and single-season records.

    Ties keep the earliest occurrence.

    Args:
        seasons: Seasons to scan.
        resolver: Resolves franchise ids; defaults to the built-in roster.
        exclude_years: Seasons to leave out, such as the one in progress.
    """
    resolver = resolver if resolver is not None else IdentityResolver()
    excluded = {str(y) for y in exclude_years}
    seasons = [s for s in seasons if s.year not in excluded]

    games = sorted(index_matchups(seasons, resolver), key=_game_sort_key)

    highest = lowest = most_in_loss = fewest_in_win = None
    closest: IndexedMatchup | None = None
    for game in games:
        winner = GameRecord(
            game.winner, game.winner_score, game.year, game.tier, game.week,
            game.loser, game.loser_score,
        )
        loser = GameRecord(
            game.loser, game.loser_score, game.year, game.tier, game.week,
            game.winner, game.winner_score,
        )
        if highest is None or winner.score > highest.score:
            highest = winner
        if lowest is None or loser.score < lowest.score:
            lowest = loser
        if most_in_loss is None or loser.score > most_in_loss.score:
            most_in_loss = loser
        if fewest_in_win is None or winner.score < fewest_in_win.score:
            fewest_in_win = winner
        if closest is None or game.margin < closest.margin:
            closest = game

    most_season = least_season = None
    for season in sorted(seasons, key=lambda s: (int(s.year), s.tier.value)):
        for standing in season.standings:
            record = SeasonRecord(
                franchise_id=resolver.resolve_id(standing.franchise_id),
                points=standing.points_for,
                year=season.year,
                tier=season.tier,
                wins=standing.wins,
                losses=standing.losses,
            )
            if most_season is None or record.points > most_season.points:
                most_season = record
            if least_season is None or record.points < least_season.points:
                least_season = record

    return AllTimeRecords(
        highest_single_game=highest,
        lowest_single_game=lowest,
        most_points_season=most_season,
        least_points_season=least_season,
        most_points_in_loss=most_in_loss,
        fewest_points_in_win=fewest_in_win,
        closest_game=closest,
    )
