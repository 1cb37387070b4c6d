"""Standings order for a season that has not finished yet.

Completed seasons carry their final ranks in the snapshot. For the live
season ranks are derived here: win percentage first (a tie counts as half
a win), then the head-to-head record between the tied teams, then points
for, then primary id, so ranks always run 1..N. ``display_ranks`` gives the
shared ranks (1, 2, 2, 4) used when showing a table.

Example:
    >>> ranked = rank_standings(standings, matchups_by_week, is_week_complete=oracle_check)
    >>> [s.rank for s in ranked]
    [1, 2, 3, 4]
    >>> display_ranks(ranked, matchups_by_week, is_week_complete=oracle_check)
    [1, 2, 2, 4]
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from itertools import combinations

from ffu_stats.seasons.models import SeasonStanding, WeekMatchup
from ffu_stats.types import FranchiseId, Week


def standings_win_fraction(wins: int, losses: int, ties: int = 0) -> float:
    """Win fraction with ties counted as half a win; 0.0 with no games."""
    games = wins + losses + ties
    return (wins + ties * 0.5) / games if games > 0 else 0.0


def head_to_head(
    team_a: FranchiseId,
    team_b: FranchiseId,
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]],
    is_week_complete: Callable[[Week], bool] | None = None,
) -> tuple[int, int]:
    """Wins of ``team_a`` and ``team_b`` against each other.

    Weeks rejected by ``is_week_complete`` are ignored so provisional
    scores never decide a tiebreak.
    """
    a_wins = b_wins = 0
    for week, matchups in matchups_by_week.items():
        if is_week_complete is not None and not is_week_complete(week):
            continue
        for matchup in matchups:
            if matchup.winner == team_a and matchup.loser == team_b:
                a_wins += 1
            elif matchup.winner == team_b and matchup.loser == team_a:
                b_wins += 1
    return a_wins, b_wins


def _ordered_block(
    block: list[SeasonStanding],
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None,
    is_week_complete: Callable[[Week], bool] | None,
) -> list[SeasonStanding]:
    """Order teams level on win percentage.

    Head-to-head decides only when every pair in the block agrees with the
    order it produces; a cycle (A beat B, B beat C, C beat A) falls through
    to points for, then primary id.
    """
    by_points = sorted(block, key=lambda s: (-s.points_for, s.franchise_id))
    if len(block) < 2 or not matchups_by_week:
        return by_points

    results = {
        (a.franchise_id, b.franchise_id): head_to_head(
            a.franchise_id, b.franchise_id, matchups_by_week, is_week_complete
        )
        for a, b in combinations(by_points, 2)
    }

    def wins_over(a: SeasonStanding, b: SeasonStanding) -> tuple[int, int]:
        key = (a.franchise_id, b.franchise_id)
        if key in results:
            return results[key]
        b_wins, a_wins = results[(b.franchise_id, a.franchise_id)]
        return a_wins, b_wins

    net: dict[FranchiseId, int] = {s.franchise_id: 0 for s in block}
    for (a_id, b_id), (a_wins, b_wins) in results.items():
        net[a_id] += a_wins - b_wins
        net[b_id] += b_wins - a_wins

    by_h2h = sorted(by_points, key=lambda s: -net[s.franchise_id])
    for a, b in combinations(by_h2h, 2):
        a_wins, b_wins = wins_over(a, b)
        if b_wins > a_wins:
            return by_points
    return by_h2h


def rank_standings(
    standings: Sequence[SeasonStanding],
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None = None,
    is_week_complete: Callable[[Week], bool] | None = None,
) -> list[SeasonStanding]:
    """Order standings and assign ranks 1..N.

    The result does not depend on the order of ``standings``, and no two
    teams share a rank, so it can be fed straight back into
    ``validate_season_group`` and ``aggregate``.

    Args:
        standings: One standing per franchise in a single (year, tier) group.
        matchups_by_week: Weekly results; enables the head-to-head tiebreak.
        is_week_complete: Filter for which weeks count towards head-to-head.

    Returns:
        New standings, best first, with ``rank`` filled in.
    """
    blocks: dict[float, list[SeasonStanding]] = {}
    for standing in standings:
        fraction = standings_win_fraction(standing.wins, standing.losses, standing.ties)
        blocks.setdefault(fraction, []).append(standing)

    ordered: list[SeasonStanding] = []
    for fraction in sorted(blocks, reverse=True):
        ordered.extend(_ordered_block(blocks[fraction], matchups_by_week, is_week_complete))

    return [replace(standing, rank=i) for i, standing in enumerate(ordered, start=1)]


def display_ranks(
    ranked: Sequence[SeasonStanding],
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None = None,
    is_week_complete: Callable[[Week], bool] | None = None,
) -> list[int]:
    """Competition ranks for showing ``rank_standings`` output (1, 2, 2, 4).

    Neighbours share a rank when nothing but the primary id separates them:
    same win percentage, an even head-to-head record and equal points for.
    """
    ranks: list[int] = []
    for i, standing in enumerate(ranked):
        if i > 0 and _level(ranked[i - 1], standing, matchups_by_week, is_week_complete):
            ranks.append(ranks[-1])
        else:
            ranks.append(i + 1)
    return ranks


def _level(
    a: SeasonStanding,
    b: SeasonStanding,
    matchups_by_week: Mapping[Week, Sequence[WeekMatchup]] | None,
    is_week_complete: Callable[[Week], bool] | None,
) -> bool:
    if standings_win_fraction(a.wins, a.losses, a.ties) != standings_win_fraction(
        b.wins, b.losses, b.ties
    ):
        return False
    if a.points_for != b.points_for:
        return False
    if matchups_by_week:
        a_wins, b_wins = head_to_head(
            a.franchise_id, b.franchise_id, matchups_by_week, is_week_complete
        )
        return a_wins == b_wins
    return True


def teams_tied(a: SeasonStanding, b: SeasonStanding) -> bool:
    """Level on win percentage, points for and points against."""
    return (
        standings_win_fraction(a.wins, a.losses, a.ties)
        == standings_win_fraction(b.wins, b.losses, b.ties)
        and a.points_for == b.points_for
        and a.points_against == b.points_against
    )
