"""Shared type aliases and enums.

Example:
    >>> from ffu_stats.types import LeagueTier
    >>> LeagueTier.parse("premier")
    <LeagueTier.PREMIER: 'PREMIER'>
"""

from __future__ import annotations

from enum import Enum

# =============================================================================
# Type Aliases
# =============================================================================

FranchiseId = str
RawId = str
Year = str
Week = int


# =============================================================================
# Enums
# =============================================================================


class LeagueTier(str, Enum):
    """Competitive divisions, best first."""

    PREMIER = "PREMIER"
    MASTERS = "MASTERS"
    NATIONAL = "NATIONAL"

    @classmethod
    def parse(cls, value: str | LeagueTier) -> LeagueTier:
        """Parse a tier name case-insensitively.

        Raises:
            ValueError: If the name is not a known tier.
        """
        if isinstance(value, LeagueTier):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown league tier '{value}'. Expected one of: {valid}") from None


LEAGUE_HIERARCHY: tuple[LeagueTier, ...] = (
    LeagueTier.PREMIER,
    LeagueTier.MASTERS,
    LeagueTier.NATIONAL,
)
