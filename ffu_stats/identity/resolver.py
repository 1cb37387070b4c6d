"""Raw platform id to franchise resolution.

Standings coming from either platform identify members by whatever id that
platform used. ``IdentityResolver`` maps those onto the roster's primary ids
so a member's seasons fold into one career.

Resolution order:
    1. The id already is a known primary id.
    2. The id is one of a franchise's legacy ids.
    3. Otherwise the id is returned unchanged and flagged ``unresolved``.

The third step fails open on purpose: a member missing from the roster
still aggregates correctly under the raw id, and the flag lets callers log
the drift between roster and data.

Example:
    >>> resolver = IdentityResolver()
    >>> resolver.resolve("stallions")
    ResolvedIdentity(primary_id='ffu-001', unresolved=False)
    >>> resolver.resolve("someone-new")
    ResolvedIdentity(primary_id='someone-new', unresolved=True)
"""

from __future__ import annotations

from typing import NamedTuple

from ffu_stats.identity.roster import DEFAULT_ROSTER, FranchiseIdentity, RosterTable
from ffu_stats.types import FranchiseId, RawId, Year

UNKNOWN_TEAM_NAME = "Unknown Team"
UNKNOWN_ABBREVIATION = "UNK"


class ResolvedIdentity(NamedTuple):
    """Outcome of a resolution: the primary id and whether it was a guess."""

    primary_id: FranchiseId
    unresolved: bool


class IdentityResolver:
    """Maps raw platform ids and display names onto roster franchises.

    Attributes:
        roster: Franchise table consulted for every lookup.
    """

    def __init__(self, roster: RosterTable | None = None) -> None:
        self.roster = roster if roster is not None else DEFAULT_ROSTER

    def resolve(self, raw_id: RawId) -> ResolvedIdentity:
        """Resolve a raw id to its franchise primary id."""
        if raw_id in self.roster:
            return ResolvedIdentity(raw_id, False)

        primary_id = self.roster.primary_for_legacy(raw_id)
        if primary_id is not None:
            return ResolvedIdentity(primary_id, False)

        return ResolvedIdentity(raw_id, True)

    def resolve_id(self, raw_id: RawId) -> FranchiseId:
        """Resolve a raw id, dropping the unresolved flag."""
        return self.resolve(raw_id).primary_id

    def franchise(self, raw_id: RawId) -> FranchiseIdentity | None:
        """Return the roster entry behind ``raw_id``, if there is one."""
        return self.roster.get(self.resolve_id(raw_id))

    def display_name(
        self,
        franchise_id: RawId,
        season_name: str | None = None,
        year: Year | None = None,
        current: bool = True,
    ) -> str:
        """Pick the team name to show for a franchise.

        Active franchises show their current name in current-context views.
        Retired franchises, and any franchise in a historical view
        (``current=False``), show the name used that season: the observed
        ``season_name`` first, then the roster's name for ``year``.

        Args:
            franchise_id: Primary or raw id.
            season_name: Name observed in the season's data.
            year: Season the name was observed in.
            current: Whether the view is a current-context view.

        Returns:
            The name to display.
        """
        franchise = self.franchise(franchise_id)
        if franchise is None:
            return season_name or UNKNOWN_TEAM_NAME

        if franchise.is_active and current:
            return franchise.display_name
        if season_name:
            return season_name
        if year is not None:
            return franchise.name_for_year(str(year))
        return franchise.display_name

    def abbreviation(
        self,
        franchise_id: RawId,
        season_abbreviation: str | None = None,
        current: bool = True,
    ) -> str:
        """Pick the abbreviation to show; same rule as ``display_name``."""
        franchise = self.franchise(franchise_id)
        if franchise is None:
            return season_abbreviation or UNKNOWN_ABBREVIATION
        if franchise.is_active and current:
            return franchise.abbreviation
        return season_abbreviation or franchise.abbreviation

    def team_name_for_year(self, franchise_id: RawId, year: Year) -> str | None:
        """Roster name a franchise used in ``year``; None when not rostered."""
        franchise = self.franchise(franchise_id)
        if franchise is None:
            return None
        return franchise.name_for_year(str(year))

    def has_historical_name(self, franchise_id: RawId, year: Year) -> bool:
        franchise = self.franchise(franchise_id)
        return franchise is not None and str(year) in franchise.historical_names
