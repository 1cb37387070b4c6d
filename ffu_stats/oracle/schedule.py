"""Week state for the live season.

Every NFL week of the live season has a window: it opens on the Thursday
``start_date`` and its results become final at midnight starting
``grace_end_date`` (the Tuesday after Monday Night Football). Windows are
half-open, ``[start, grace_end)``, consecutive and non-overlapping, so at
any moment at most one week is in progress.

Callers always pass ``now``; nothing here reads the clock. A naive
datetime is taken as league-local time, an aware one is converted to the
league timezone first.

Example:
    >>> oracle = ScheduleOracle()
    >>> oracle.current_week(datetime(2025, 10, 3, 20, 0))
    5
    >>> oracle.is_week_complete(4, datetime(2025, 10, 3, 20, 0))
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo

from ffu_stats.types import Week, Year

# =============================================================================
# Exceptions
# =============================================================================


class ScheduleError(Exception):
    """Base exception for schedule errors."""


class InvalidScheduleError(ScheduleError):
    """Raised when a window table is empty, unordered or has gaps."""


# =============================================================================
# Constants
# =============================================================================

DEFAULT_LIVE_SEASON: Year = "2025"
DEFAULT_TIMEZONE: str = "America/New_York"


class WeekState(str, Enum):
    """Where a week stands relative to ``now``."""

    UPCOMING = "UPCOMING"
    IN_PROGRESS = "IN_PROGRESS"
    FINAL = "FINAL"


@dataclass(frozen=True)
class WeekWindow:
    """One week's calendar window.

    Attributes:
        week: NFL week number, 1..18.
        start_date: Thursday the week opens.
        grace_end_date: Day the week's results are final.
    """

    week: Week
    start_date: date
    grace_end_date: date

    def __post_init__(self) -> None:
        if not 1 <= self.week <= 18:
            raise InvalidScheduleError(f"week must be 1..18, got {self.week}")
        if self.grace_end_date <= self.start_date:
            raise InvalidScheduleError(
                f"week {self.week}: grace end {self.grace_end_date} "
                f"is not after start {self.start_date}"
            )


def _window(week: Week, start: str, grace_end: str) -> WeekWindow:
    return WeekWindow(week, date.fromisoformat(start), date.fromisoformat(grace_end))


LIVE_SEASON_2025: tuple[WeekWindow, ...] = (
    _window(1, "2025-09-04", "2025-09-09"),
    _window(2, "2025-09-10", "2025-09-16"),
    _window(3, "2025-09-17", "2025-09-23"),
    _window(4, "2025-09-24", "2025-09-30"),
    _window(5, "2025-10-01", "2025-10-07"),
    _window(6, "2025-10-08", "2025-10-14"),
    _window(7, "2025-10-15", "2025-10-21"),
    _window(8, "2025-10-22", "2025-10-28"),
    _window(9, "2025-10-29", "2025-11-04"),
    _window(10, "2025-11-05", "2025-11-11"),
    _window(11, "2025-11-12", "2025-11-18"),
    _window(12, "2025-11-19", "2025-11-25"),
    _window(13, "2025-11-26", "2025-12-02"),
    _window(14, "2025-12-03", "2025-12-09"),
    _window(15, "2025-12-10", "2025-12-16"),
    _window(16, "2025-12-17", "2025-12-23"),
    _window(17, "2025-12-24", "2025-12-30"),
    _window(18, "2025-12-31", "2026-01-06"),
)

WINDOW_TABLES: dict[Year, tuple[WeekWindow, ...]] = {
    "2025": LIVE_SEASON_2025,
}


def windows_for(year: Year) -> tuple[WeekWindow, ...]:
    """Shipped window table for ``year``.

    Raises:
        InvalidScheduleError: If no table ships for that season.
    """
    windows = WINDOW_TABLES.get(str(year))
    if windows is None:
        known = ", ".join(sorted(WINDOW_TABLES))
        raise InvalidScheduleError(
            f"No week windows for live season {year} (available: {known})"
        )
    return windows


def validate_windows(windows: Sequence[WeekWindow]) -> None:
    """Check a table is non-empty, numbered consecutively and overlap-free.

    Each window must start on or after the previous window's grace end.

    Raises:
        InvalidScheduleError: On an empty, unordered or overlapping table.
    """
    if not windows:
        raise InvalidScheduleError("schedule has no weeks")
    for previous, current in zip(windows, windows[1:]):
        if current.week != previous.week + 1:
            raise InvalidScheduleError(
                f"week {current.week} follows week {previous.week}"
            )
        if current.start_date < previous.grace_end_date:
            raise InvalidScheduleError(
                f"week {current.week} starts {current.start_date}, "
                f"before week {previous.week} is final on {previous.grace_end_date}"
            )


# =============================================================================
# Oracle
# =============================================================================


class ScheduleOracle:
    """Answers week-state questions for the live season.

    Without an explicit ``windows`` table the shipped table for
    ``live_season`` is used.

    Attributes:
        windows: Validated window table.
        live_season: Year the table belongs to.
        tz: League timezone used to interpret ``now``.
    """

    def __init__(
        self,
        windows: Iterable[WeekWindow] | None = None,
        live_season: Year = DEFAULT_LIVE_SEASON,
        tz: tzinfo | None = None,
    ) -> None:
        self.live_season = str(live_season)
        self.windows = tuple(windows) if windows is not None else windows_for(self.live_season)
        validate_windows(self.windows)
        self.tz = tz if tz is not None else ZoneInfo(DEFAULT_TIMEZONE)
        self._by_week = {w.week: w for w in self.windows}

    def _local(self, now: datetime) -> datetime:
        """``now`` as a naive league-local datetime."""
        if now.tzinfo is None:
            return now
        return now.astimezone(self.tz).replace(tzinfo=None)

    @staticmethod
    def _midnight(day: date) -> datetime:
        return datetime.combine(day, time.min)

    def window(self, week: Week) -> WeekWindow | None:
        return self._by_week.get(week)

    def current_week(self, now: datetime) -> Week | None:
        """Week whose window contains ``now``, or None between or outside windows."""
        local = self._local(now)
        for window in self.windows:
            if self._midnight(window.start_date) <= local < self._midnight(
                window.grace_end_date
            ):
                return window.week
        return None

    def is_week_complete(self, week: Week, now: datetime) -> bool:
        """True once ``week`` is past its grace end; unknown weeks count as complete."""
        window = self._by_week.get(week)
        if window is None:
            return True
        return self._local(now) >= self._midnight(window.grace_end_date)

    def week_state(self, week: Week, now: datetime) -> WeekState:
        window = self._by_week.get(week)
        if window is None:
            return WeekState.FINAL
        local = self._local(now)
        if local < self._midnight(window.start_date):
            return WeekState.UPCOMING
        if local < self._midnight(window.grace_end_date):
            return WeekState.IN_PROGRESS
        return WeekState.FINAL

    def should_show_result_coloring(self, year: Year, week: Week, now: datetime) -> bool:
        """Whether win/loss colouring may be shown for ``week`` of ``year``.

        Past seasons are always final; the live season waits for the grace end.
        """
        if str(year) != self.live_season:
            return True
        return self.is_week_complete(week, now)

    def last_completed_week(self, now: datetime) -> Week | None:
        completed = [w.week for w in self.windows if self.is_week_complete(w.week, now)]
        return completed[-1] if completed else None

    def week_info(self, week: Week, now: datetime) -> dict[str, object]:
        """Summary of one week's window and state."""
        window = self._by_week.get(week)
        return {
            "week": week,
            "start_date": window.start_date if window else None,
            "grace_end_date": window.grace_end_date if window else None,
            "state": self.week_state(week, now),
            "is_complete": self.is_week_complete(week, now),
            "is_current": self.current_week(now) == week,
        }


# =============================================================================
# Module-level helpers
# =============================================================================

_DEFAULT_ORACLE: ScheduleOracle | None = None


def default_oracle() -> ScheduleOracle:
    """Shared oracle over the shipped live-season table."""
    global _DEFAULT_ORACLE
    if _DEFAULT_ORACLE is None:
        _DEFAULT_ORACLE = ScheduleOracle()
    return _DEFAULT_ORACLE


def current_week(now: datetime) -> Week | None:
    return default_oracle().current_week(now)


def is_week_complete(week: Week, now: datetime) -> bool:
    return default_oracle().is_week_complete(week, now)


def should_show_result_coloring(year: Year, week: Week, now: datetime) -> bool:
    return default_oracle().should_show_result_coloring(year, week, now)
