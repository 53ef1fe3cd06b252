#!/usr/bin/env python3
"""Tests for due-date calculation helpers."""
import pytest
from datetime import date, datetime, timedelta

from models import (
    DueStatus,
    HealthStatus,
    IntervalType,
    MaintenanceTask,
    ReminderStatus,
    TaskDue,
    assess_health,
    calc_next_due_date,
    classify,
    days_until,
    first_due_date,
    reminder_status,
)
from models.calculations import DUE_SOON_DAYS, NO_DUE_DATE_DAYS, UPCOMING_DAYS

TODAY = date(2025, 6, 15)


class TestDaysUntil:
    """Tests for days_until helper function."""

    def test_same_day(self):
        assert days_until(TODAY, TODAY) == 0

    def test_future_and_past(self):
        assert days_until(TODAY, date(2025, 6, 25)) == 10
        assert days_until(TODAY, date(2025, 6, 10)) == -5

    def test_datetimes_normalized_to_midnight(self):
        """Time of day never produces a partial day."""
        ref = datetime(2025, 6, 15, 23, 59)
        due = datetime(2025, 6, 16, 0, 1)
        assert days_until(ref, due) == 1
        assert days_until(datetime(2025, 6, 15, 18, 0), TODAY) == 0


class TestClassify:
    """Tests for classify helper function."""

    def test_due_today_is_due_soon(self):
        """Due today counts as due soon, never overdue."""
        for is_required in (True, False):
            result = classify(TODAY, TODAY, is_required)
            assert result.days_until_due == 0
            assert result.status == DueStatus.DUE_SOON

    def test_one_day_overdue_required(self):
        result = classify(TODAY, TODAY - timedelta(days=1), True)
        assert result.status == DueStatus.OVERDUE_REQUIRED
        assert result.days_until_due == -1

    def test_one_day_overdue_optional(self):
        result = classify(TODAY, TODAY - timedelta(days=1), False)
        assert result.status == DueStatus.OVERDUE_OPTIONAL
        assert result.days_until_due == -1

    @pytest.mark.parametrize(
        "offset,expected",
        [
            (DUE_SOON_DAYS, DueStatus.DUE_SOON),
            (DUE_SOON_DAYS + 1, DueStatus.UPCOMING),
            (UPCOMING_DAYS, DueStatus.UPCOMING),
            (UPCOMING_DAYS + 1, DueStatus.FUTURE),
        ],
    )
    def test_boundaries(self, offset, expected):
        result = classify(TODAY, TODAY + timedelta(days=offset), False)
        assert result.status == expected
        assert result.days_until_due == offset

    def test_no_due_date(self):
        """Missing due date is FUTURE with the sentinel day count."""
        result = classify(TODAY, None, True)
        assert result.status == DueStatus.FUTURE
        assert result.days_until_due == NO_DUE_DATE_DAYS == 999

    def test_datetime_reference(self):
        result = classify(datetime(2025, 6, 15, 14, 30), date(2025, 6, 15), False)
        assert result.days_until_due == 0
        assert result.status == DueStatus.DUE_SOON

    def test_result_unpacks(self):
        status, days = classify(TODAY, TODAY + timedelta(days=45), False)
        assert status == DueStatus.UPCOMING
        assert days == 45


class TestReminderStatus:
    """Tests for reminder_status helper function."""

    def test_overdue(self):
        assert reminder_status(TODAY, TODAY - timedelta(days=3)) == ReminderStatus.OVERDUE

    def test_within_horizon(self):
        assert reminder_status(TODAY, TODAY) == ReminderStatus.DUE_SOON
        assert reminder_status(TODAY, TODAY + timedelta(days=30)) == ReminderStatus.DUE_SOON

    def test_beyond_horizon(self):
        assert reminder_status(TODAY, TODAY + timedelta(days=31)) == ReminderStatus.UPCOMING

    def test_custom_horizon(self):
        due = TODAY + timedelta(days=45)
        assert reminder_status(TODAY, due, horizon_days=60) == ReminderStatus.DUE_SOON
        assert reminder_status(TODAY, due, horizon_days=7) == ReminderStatus.UPCOMING


class TestCalcNextDueDate:
    """Tests for calc_next_due_date helper function."""

    def test_time_interval(self):
        task = MaintenanceTask(task_name="Filter", interval_type=IntervalType.TIME, interval_days=90)
        assert calc_next_due_date(task, date(2025, 1, 1)) == date(2025, 4, 1)

    def test_hybrid_interval_uses_days(self):
        task = MaintenanceTask(
            task_name="Oil",
            interval_type=IntervalType.HYBRID,
            interval_days=180,
            interval_miles=7500,
        )
        assert calc_next_due_date(task, date(2025, 1, 1)) == date(2025, 6, 30)

    def test_time_without_days(self):
        task = MaintenanceTask(task_name="Filter", interval_type=IntervalType.TIME)
        assert calc_next_due_date(task, TODAY) is None

    def test_usage_interval_has_no_date(self):
        task = MaintenanceTask(
            task_name="Rotate tires", interval_type=IntervalType.USAGE, interval_miles=7500
        )
        assert calc_next_due_date(task, TODAY) is None

    def test_date_interval_rolls_forward(self):
        """Specific date rolls forward by whole years past the completion."""
        task = MaintenanceTask(
            task_name="Tune-up",
            interval_type=IntervalType.DATE,
            specific_date=date(2023, 10, 1),
        )
        assert calc_next_due_date(task, date(2025, 10, 1)) == date(2026, 10, 1)
        assert calc_next_due_date(task, date(2025, 9, 30)) == date(2025, 10, 1)

    def test_date_interval_future_specific_date(self):
        task = MaintenanceTask(
            task_name="Inspection",
            interval_type=IntervalType.DATE,
            specific_date=date(2026, 3, 1),
        )
        assert calc_next_due_date(task, TODAY) == date(2026, 3, 1)

    def test_date_interval_without_specific_date(self):
        task = MaintenanceTask(task_name="Inspection", interval_type=IntervalType.DATE)
        assert calc_next_due_date(task, TODAY) is None


def make_due(status):
    return TaskDue(task=MaintenanceTask(task_name="t"), status=status, days_until_due=0)


class TestAssessHealth:
    """Tests for assess_health helper function."""

    def test_no_tasks_is_excellent(self):
        assert assess_health([]) == (100, HealthStatus.EXCELLENT)

    def test_due_soon_deducts_five(self):
        assert assess_health([make_due(DueStatus.DUE_SOON)] * 2) == (90, HealthStatus.EXCELLENT)

    def test_overdue_optional(self):
        score, health = assess_health([make_due(DueStatus.OVERDUE_OPTIONAL)] * 2)
        assert score == 80
        assert health == HealthStatus.GOOD

    def test_overdue_required(self):
        score, health = assess_health([make_due(DueStatus.OVERDUE_REQUIRED)] * 2)
        assert score == 50
        assert health == HealthStatus.ATTENTION

    def test_floor_at_zero(self):
        score, health = assess_health([make_due(DueStatus.OVERDUE_REQUIRED)] * 5)
        assert score == 0
        assert health == HealthStatus.CRITICAL

    def test_upcoming_and_future_ignored(self):
        dues = [make_due(DueStatus.UPCOMING), make_due(DueStatus.FUTURE)]
        assert assess_health(dues) == (100, HealthStatus.EXCELLENT)


class TestFirstDueDate:
    """Tests for first_due_date helper function."""

    def test_from_last_completion(self):
        task = MaintenanceTask(
            task_name="Filter", interval_days=90, last_completed_date=date(2025, 1, 1)
        )
        assert first_due_date(task, TODAY) == date(2025, 4, 1)

    def test_specific_date_today_counts(self):
        task = MaintenanceTask(
            task_name="Tune-up", interval_type=IntervalType.DATE, specific_date=date(2020, 6, 15)
        )
        assert first_due_date(task, TODAY) == date(2025, 6, 15)

    def test_specific_date_passed_this_year(self):
        task = MaintenanceTask(
            task_name="Tune-up", interval_type=IntervalType.DATE, specific_date=date(2020, 3, 1)
        )
        assert first_due_date(task, TODAY) == date(2026, 3, 1)

    def test_nothing_to_count_from(self):
        task = MaintenanceTask(task_name="Filter", interval_days=90)
        assert first_due_date(task, TODAY) is None
