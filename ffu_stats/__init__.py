"""FFU league statistics engine.

Career aggregation, power ratings and live-season schedule state for the
Premier / Masters / National fantasy football league. Everything here is a
pure transformation over already-loaded snapshot data.

Example:
    >>> from ffu_stats.seasons import aggregate, load_snapshots
    >>> seasons = load_snapshots("data")
    >>> careers = aggregate(s for season in seasons for s in season.standings)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "FFU Stats Team"

# Public API exports
from ffu_stats.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
