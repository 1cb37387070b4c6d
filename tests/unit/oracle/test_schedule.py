"""Tests for live-season week state."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from ffu_stats.oracle import schedule
from ffu_stats.oracle.schedule import (
    LIVE_SEASON_2025,
    InvalidScheduleError,
    ScheduleError,
    ScheduleOracle,
    WeekState,
    WeekWindow,
    validate_windows,
    windows_for,
)


@pytest.fixture
def oracle() -> ScheduleOracle:
    return ScheduleOracle()


class TestWindowTable:
    """Tests for the shipped table and validation."""

    def test_shipped_table(self) -> None:
        assert [w.week for w in LIVE_SEASON_2025] == list(range(1, 19))
        assert LIVE_SEASON_2025[0].start_date == date(2025, 9, 4)
        assert LIVE_SEASON_2025[-1].grace_end_date == date(2026, 1, 6)
        validate_windows(LIVE_SEASON_2025)

    def test_window_must_end_after_start(self) -> None:
        with pytest.raises(InvalidScheduleError, match="not after start"):
            WeekWindow(1, date(2025, 9, 9), date(2025, 9, 9))

    @pytest.mark.parametrize("week", [0, 19])
    def test_week_number_range(self, week: int) -> None:
        with pytest.raises(InvalidScheduleError):
            WeekWindow(week, date(2025, 9, 4), date(2025, 9, 9))

    def test_rejects_empty_table(self) -> None:
        with pytest.raises(InvalidScheduleError, match="no weeks"):
            ScheduleOracle(windows=[])

    def test_rejects_skipped_week(self) -> None:
        windows = [LIVE_SEASON_2025[0], LIVE_SEASON_2025[2]]

        with pytest.raises(InvalidScheduleError, match="follows week"):
            ScheduleOracle(windows=windows)

    def test_rejects_overlap(self) -> None:
        windows = [
            WeekWindow(1, date(2025, 9, 4), date(2025, 9, 12)),
            WeekWindow(2, date(2025, 9, 10), date(2025, 9, 16)),
        ]

        with pytest.raises(InvalidScheduleError, match="before week 1 is final"):
            validate_windows(windows)

    def test_table_chosen_by_live_season(self) -> None:
        assert windows_for("2025") is LIVE_SEASON_2025
        assert ScheduleOracle(live_season="2025").windows == LIVE_SEASON_2025

    def test_live_season_without_table(self) -> None:
        with pytest.raises(InvalidScheduleError, match="No week windows for live season 2026"):
            ScheduleOracle(live_season="2026")

    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidScheduleError, ScheduleError)


class TestCurrentWeek:
    """Tests for current_week."""

    def test_inside_window(self, oracle: ScheduleOracle) -> None:
        assert oracle.current_week(datetime(2025, 10, 3, 20, 0)) == 5

    def test_start_is_inclusive(self, oracle: ScheduleOracle) -> None:
        assert oracle.current_week(datetime(2025, 9, 4)) == 1

    def test_grace_end_is_exclusive(self, oracle: ScheduleOracle) -> None:
        assert oracle.current_week(datetime(2025, 9, 8, 23, 59)) == 1
        assert oracle.current_week(datetime(2025, 9, 9)) is None

    def test_before_and_after_season(self, oracle: ScheduleOracle) -> None:
        assert oracle.current_week(datetime(2025, 8, 1)) is None
        assert oracle.current_week(datetime(2026, 2, 1)) is None

    def test_aware_datetime_converted_to_league_time(self, oracle: ScheduleOracle) -> None:
        # 03:30 UTC on Sep 9 is still Sep 8 in New York
        now = datetime(2025, 9, 9, 3, 30, tzinfo=timezone.utc)

        assert oracle.current_week(now) == 1
        assert oracle.is_week_complete(1, now) is False


class TestWeekCompletion:
    """Tests for is_week_complete and week_state."""

    def test_complete_at_grace_end(self, oracle: ScheduleOracle) -> None:
        assert oracle.is_week_complete(1, datetime(2025, 9, 8, 23, 59, 59)) is False
        assert oracle.is_week_complete(1, datetime(2025, 9, 9)) is True

    def test_unknown_week_is_complete(self, oracle: ScheduleOracle) -> None:
        assert oracle.is_week_complete(25, datetime(2025, 9, 1)) is True
        assert oracle.week_state(25, datetime(2025, 9, 1)) is WeekState.FINAL

    def test_states(self, oracle: ScheduleOracle) -> None:
        assert oracle.week_state(5, datetime(2025, 9, 30)) is WeekState.UPCOMING
        assert oracle.week_state(5, datetime(2025, 10, 1)) is WeekState.IN_PROGRESS
        assert oracle.week_state(5, datetime(2025, 10, 7)) is WeekState.FINAL

    def test_completion_is_monotonic(self, oracle: ScheduleOracle) -> None:
        order = [WeekState.UPCOMING, WeekState.IN_PROGRESS, WeekState.FINAL]
        now = datetime(2025, 8, 25)
        end = datetime(2026, 1, 15)
        previous_complete = {w.week: False for w in oracle.windows}
        previous_state = {w.week: WeekState.UPCOMING for w in oracle.windows}
        while now < end:
            for window in oracle.windows:
                complete = oracle.is_week_complete(window.week, now)
                state = oracle.week_state(window.week, now)
                assert complete or not previous_complete[window.week]
                assert order.index(state) >= order.index(previous_state[window.week])
                previous_complete[window.week] = complete
                previous_state[window.week] = state
            now += timedelta(hours=7)
        assert all(previous_complete.values())

    def test_last_completed_week(self, oracle: ScheduleOracle) -> None:
        assert oracle.last_completed_week(datetime(2025, 9, 1)) is None
        assert oracle.last_completed_week(datetime(2025, 10, 3)) == 4

    def test_week_info(self, oracle: ScheduleOracle) -> None:
        info = oracle.week_info(5, datetime(2025, 10, 3))

        assert info["start_date"] == date(2025, 10, 1)
        assert info["state"] is WeekState.IN_PROGRESS
        assert info["is_current"] is True
        assert info["is_complete"] is False


class TestResultColoring:
    """Tests for should_show_result_coloring."""

    @pytest.mark.parametrize(
        "now",
        [datetime(2020, 1, 1), datetime(2025, 10, 2), datetime(2030, 6, 1)],
    )
    def test_past_seasons_always_colored(self, oracle: ScheduleOracle, now: datetime) -> None:
        assert oracle.should_show_result_coloring("2023", 5, now) is True

    def test_live_season_waits_for_grace_end(self, oracle: ScheduleOracle) -> None:
        assert oracle.should_show_result_coloring("2025", 5, datetime(2025, 10, 6, 23)) is False
        assert oracle.should_show_result_coloring("2025", 5, datetime(2025, 10, 7)) is True

    def test_live_season_is_configurable(self) -> None:
        oracle = ScheduleOracle(
            windows=LIVE_SEASON_2025, live_season="2026", tz=ZoneInfo("America/Chicago")
        )

        assert oracle.should_show_result_coloring("2025", 5, datetime(2025, 10, 2)) is True


def test_module_level_helpers() -> None:
    now = datetime(2025, 10, 3, 20, 0)

    assert schedule.current_week(now) == 5
    assert schedule.is_week_complete(4, now) is True
    assert schedule.should_show_result_coloring("2025", 5, now) is False
    assert schedule.default_oracle() is schedule.default_oracle()
