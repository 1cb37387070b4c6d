"""Franchise identity: the roster table and raw-id resolution.

Example:
    >>> from ffu_stats.identity import IdentityResolver
    >>> IdentityResolver().resolve_id("331590801261883392")
    'ffu-001'
"""

from __future__ import annotations

from ffu_stats.identity.resolver import (
    UNKNOWN_ABBREVIATION,
    UNKNOWN_TEAM_NAME,
    IdentityResolver,
    ResolvedIdentity,
)
from ffu_stats.identity.roster import (
    DEFAULT_ROSTER,
    DuplicateIdentityError,
    FranchiseIdentity,
    IdentityError,
    RosterTable,
)

__all__ = [
    "DEFAULT_ROSTER",
    "UNKNOWN_ABBREVIATION",
    "UNKNOWN_TEAM_NAME",
    "DuplicateIdentityError",
    "FranchiseIdentity",
    "IdentityError",
    "IdentityResolver",
    "ResolvedIdentity",
    "RosterTable",
]
