"""Season data model.

Standings, playoff placements and weekly results for one league tier in one
year, plus the career record they aggregate into. Snapshot records are
parsed strictly: a missing or ill-typed required field raises
``MalformedStandingError`` instead of being coerced.

Example:
    >>> standing = SeasonStanding.from_dict(
    ...     {"userId": "ffu-001", "wins": 10, "losses": 3, "pointsFor": 1500.2,
    ...      "pointsAgainst": 1320.0, "rank": 1},
    ...     year="2024", tier="PREMIER",
    ... )
    >>> standing.games_played
    13
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ffu_stats.types import FranchiseId, LeagueTier, Week, Year

# =============================================================================
# Exceptions
# =============================================================================


class SeasonDataError(Exception):
    """Base exception for season data errors."""


class MalformedStandingError(SeasonDataError):
    """Raised when a snapshot record is missing or mistypes a required field."""


class InvalidSeasonGroupError(SeasonDataError):
    """Raised when a (year, tier) group breaks its ranking invariants."""


# =============================================================================
# Field parsing
# =============================================================================


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data or data[key] is None:
        raise MalformedStandingError(f"{context}: missing required field '{key}'")
    return data[key]


def _int(value: Any, key: str, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedStandingError(
            f"{context}: field '{key}' must be an integer, got {value!r}"
        )
    if isinstance(value, float) and not value.is_integer():
        raise MalformedStandingError(
            f"{context}: field '{key}' must be an integer, got {value!r}"
        )
    if value < 0:
        raise MalformedStandingError(f"{context}: field '{key}' cannot be negative")
    return int(value)


def _float(value: Any, key: str, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedStandingError(
            f"{context}: field '{key}' must be a number, got {value!r}"
        )
    return float(value)


def _optional_float(data: Mapping[str, Any], key: str, context: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    return _float(value, key, context)


def _optional_str(data: Mapping[str, Any], key: str, context: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedStandingError(
            f"{context}: field '{key}' must be a string, got {value!r}"
        )
    return value


def parse_tier(value: Any, context: str) -> LeagueTier:
    """``LeagueTier.parse`` that reports an unknown tier as malformed data."""
    try:
        return LeagueTier.parse(value)
    except ValueError as e:
        raise MalformedStandingError(f"{context}: {e}") from None


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class WeekMatchup:
    """A decided head-to-head game.

    Attributes:
        winner: Franchise id of the winner.
        loser: Franchise id of the loser.
        winner_score: Winner's points.
        loser_score: Loser's points.
        placement_type: Playoff placement game label, if any.
    """

    winner: FranchiseId
    loser: FranchiseId
    winner_score: float
    loser_score: float
    placement_type: str | None = None

    @property
    def margin(self) -> float:
        return self.winner_score - self.loser_score

    def involves(self, franchise_id: FranchiseId) -> bool:
        return franchise_id in (self.winner, self.loser)

    def score_for(self, franchise_id: FranchiseId) -> float | None:
        if franchise_id == self.winner:
            return self.winner_score
        if franchise_id == self.loser:
            return self.loser_score
        return None

    def opponent_of(self, franchise_id: FranchiseId) -> FranchiseId | None:
        if franchise_id == self.winner:
            return self.loser
        if franchise_id == self.loser:
            return self.winner
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], context: str = "matchup") -> WeekMatchup:
        winner = _require(data, "winner", context)
        loser = _require(data, "loser", context)
        return cls(
            winner=str(winner),
            loser=str(loser),
            winner_score=_float(_require(data, "winnerScore", context), "winnerScore", context),
            loser_score=_float(_require(data, "loserScore", context), "loserScore", context),
            placement_type=data.get("placementType"),
        )


@dataclass(frozen=True)
class PlayoffResult:
    """Final playoff placement of one franchise."""

    franchise_id: FranchiseId
    placement: int
    placement_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], context: str = "playoff result") -> PlayoffResult:
        franchise_id = data.get("ffuUserId") or _require(data, "userId", context)
        placement = _int(_require(data, "placement", context), "placement", context)
        return cls(
            franchise_id=str(franchise_id),
            placement=placement,
            placement_name=str(data.get("placementName") or ""),
        )


@dataclass(frozen=True)
class SeasonStanding:
    """One franchise's result in one league tier in one year.

    Attributes:
        franchise_id: Raw or primary id of the franchise.
        year: Season year.
        league_tier: Tier the franchise played in.
        wins: Regular-season wins.
        losses: Regular-season losses.
        ties: Regular-season ties.
        points_for: Regular-season points scored.
        points_against: Regular-season points allowed.
        rank: Final regular-season rank, 1 = best.
        high_game: Best single-week score.
        low_game: Worst single-week score.
        playoff_finish: Final playoff placement, distinct from ``rank``.
        power_rating: Season power rating.
        team_name: Team name used that season.
        abbreviation: Abbreviation used that season.
    """

    franchise_id: FranchiseId
    year: Year
    league_tier: LeagueTier
    wins: int
    losses: int
    points_for: float
    points_against: float
    rank: int
    ties: int = 0
    high_game: float | None = None
    low_game: float | None = None
    playoff_finish: int | None = None
    power_rating: float | None = None
    team_name: str | None = None
    abbreviation: str | None = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def group_key(self) -> tuple[Year, LeagueTier]:
        return (self.year, self.league_tier)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        year: Year | int,
        tier: LeagueTier | str,
    ) -> SeasonStanding:
        """Parse one snapshot standings record.

        The platform-independent ``ffuUserId`` is preferred over the
        platform ``userId`` when present.

        Raises:
            MalformedStandingError: On a missing or ill-typed required field.
        """
        if not isinstance(data, Mapping):
            raise MalformedStandingError(f"standing must be an object, got {type(data).__name__}")

        raw_id = data.get("userId")
        ffu_id = data.get("ffuUserId")
        franchise_id = ffu_id if ffu_id and ffu_id != "unknown" else raw_id
        if not franchise_id:
            raise MalformedStandingError(f"{year} {tier}: standing has no userId")
        context = f"{year} {tier} standing for '{franchise_id}'"

        user_info = data.get("userInfo") or {}
        if not isinstance(user_info, Mapping):
            raise MalformedStandingError(
                f"{context}: field 'userInfo' must be an object, got {user_info!r}"
            )
        playoff_finish = data.get("playoffFinish")

        return cls(
            franchise_id=str(franchise_id),
            year=str(year),
            league_tier=parse_tier(tier, context),
            wins=_int(_require(data, "wins", context), "wins", context),
            losses=_int(_require(data, "losses", context), "losses", context),
            ties=_int(data.get("ties") or 0, "ties", context),
            points_for=_float(_require(data, "pointsFor", context), "pointsFor", context),
            points_against=_float(
                _require(data, "pointsAgainst", context), "pointsAgainst", context
            ),
            rank=_int(_require(data, "rank", context), "rank", context),
            high_game=_optional_float(data, "highGame", context),
            low_game=_optional_float(data, "lowGame", context),
            playoff_finish=(
                _int(playoff_finish, "playoffFinish", context)
                if playoff_finish is not None
                else None
            ),
            power_rating=_optional_float(data, "unionPowerRating", context),
            team_name=_optional_str(user_info, "teamName", context),
            abbreviation=_optional_str(user_info, "abbreviation", context),
        )


@dataclass(frozen=True)
class LeagueSeason:
    """Everything known about one tier in one year.

    Attributes:
        year: Season year.
        tier: League tier.
        league_id: Platform league id.
        standings: Final standings, one per franchise.
        playoff_results: Final playoff placements.
        promotions: Franchises promoted to a higher tier.
        relegations: Franchises relegated to a lower tier.
        matchups_by_week: Decided games keyed by week number.
    """

    year: Year
    tier: LeagueTier
    standings: tuple[SeasonStanding, ...]
    league_id: str = ""
    playoff_results: tuple[PlayoffResult, ...] = ()
    promotions: tuple[FranchiseId, ...] = ()
    relegations: tuple[FranchiseId, ...] = ()
    matchups_by_week: Mapping[Week, tuple[WeekMatchup, ...]] = field(
        default_factory=dict, hash=False
    )

    @property
    def group_size(self) -> int:
        return len(self.standings)

    def playoff_placement(self, franchise_id: FranchiseId) -> int | None:
        for result in self.playoff_results:
            if result.franchise_id == franchise_id:
                return result.placement
        return None

    def all_matchups(self) -> list[tuple[Week, WeekMatchup]]:
        return [
            (week, matchup)
            for week in sorted(self.matchups_by_week)
            for matchup in self.matchups_by_week[week]
        ]


@dataclass(frozen=True)
class SeasonEntry:
    """One line of a franchise's season history."""

    year: Year
    league_tier: LeagueTier
    wins: int
    losses: int
    ties: int
    points_for: float
    points_against: float
    rank: int
    playoff_finish: int | None = None
    power_rating: float | None = None
    team_name: str | None = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def average_points_per_game(self) -> float:
        games = self.games_played
        return self.points_for / games if games > 0 else 0.0


@dataclass
class CareerRecord:
    """Cumulative statistics of one franchise across all its seasons.

    Ratio fields are filled in from the totals once every season has been
    folded in.
    """

    franchise_id: FranchiseId
    display_name: str
    abbreviation: str
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    total_points_for: float = 0.0
    total_points_against: float = 0.0
    first_place_finishes: int = 0
    second_place_finishes: int = 0
    third_place_finishes: int = 0
    last_place_finishes: int = 0
    playoff_appearances: int = 0
    playoff_wins: int = 0
    playoff_losses: int = 0
    career_high_game: float = 0.0
    career_low_game: float = 0.0
    seasons_played: int = 0
    tier_seasons: dict[LeagueTier, int] = field(default_factory=dict)
    win_percentage: float = 0.0
    point_differential: float = 0.0
    average_points_per_game: float = 0.0
    average_season_rank: float = 0.0
    average_power_rating: float = 0.0
    season_history: list[SeasonEntry] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return self.total_wins + self.total_losses + self.total_ties

    @property
    def premier_seasons(self) -> int:
        return self.tier_seasons.get(LeagueTier.PREMIER, 0)

    @property
    def masters_seasons(self) -> int:
        return self.tier_seasons.get(LeagueTier.MASTERS, 0)

    @property
    def national_seasons(self) -> int:
        return self.tier_seasons.get(LeagueTier.NATIONAL, 0)

    def to_dict(self) -> dict[str, Any]:
        """Flatten the record's scalar statistics."""
        return {
            "franchise_id": self.franchise_id,
            "team_name": self.display_name,
            "abbreviation": self.abbreviation,
            "total_wins": self.total_wins,
            "total_losses": self.total_losses,
            "total_ties": self.total_ties,
            "win_percentage": self.win_percentage,
            "playoff_wins": self.playoff_wins,
            "playoff_losses": self.playoff_losses,
            "total_points_for": self.total_points_for,
            "total_points_against": self.total_points_against,
            "point_differential": self.point_differential,
            "average_points_per_game": self.average_points_per_game,
            "career_high_game": self.career_high_game,
            "career_low_game": self.career_low_game,
            "first_place_finishes": self.first_place_finishes,
            "second_place_finishes": self.second_place_finishes,
            "third_place_finishes": self.third_place_finishes,
            "last_place_finishes": self.last_place_finishes,
            "playoff_appearances": self.playoff_appearances,
            "seasons_played": self.seasons_played,
            "premier_seasons": self.premier_seasons,
            "masters_seasons": self.masters_seasons,
            "national_seasons": self.national_seasons,
            "average_season_rank": self.average_season_rank,
            "average_power_rating": self.average_power_rating,
        }


def validate_season_group(standings: Iterable[SeasonStanding]) -> None:
    """Check that one (year, tier) group is ranked 1..N without gaps.

    Raises:
        InvalidSeasonGroupError: If the group mixes years or tiers, or its
            ranks are not exactly 1..N.
    """
    group = list(standings)
    if not group:
        return

    keys = {s.group_key for s in group}
    if len(keys) > 1:
        raise InvalidSeasonGroupError(f"Standings span several groups: {sorted(keys)}")

    year, tier = group[0].group_key
    ranks = sorted(s.rank for s in group)
    expected = list(range(1, len(group) + 1))
    if ranks != expected:
        raise InvalidSeasonGroupError(
            f"{year} {tier.value}: ranks {ranks} are not a dense 1..{len(group)} sequence"
        )
