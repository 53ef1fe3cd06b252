#!/usr/bin/env python3
"""Tests for status enums."""

from models import DueStatus, HealthStatus, ReminderStatus


class TestDueStatus:
    """Tests for DueStatus enum ordering and helpers."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert DueStatus.OVERDUE_REQUIRED.value < DueStatus.OVERDUE_OPTIONAL.value
        assert DueStatus.OVERDUE_OPTIONAL.value < DueStatus.DUE_SOON.value
        assert DueStatus.DUE_SOON.value < DueStatus.UPCOMING.value
        assert DueStatus.UPCOMING.value < DueStatus.FUTURE.value

    def test_label(self):
        assert DueStatus.OVERDUE_REQUIRED.label == "overdue-required"
        assert DueStatus.DUE_SOON.label == "due-soon"
        assert DueStatus.FUTURE.label == "future"

    def test_is_overdue(self):
        assert DueStatus.OVERDUE_REQUIRED.is_overdue
        assert DueStatus.OVERDUE_OPTIONAL.is_overdue
        assert not DueStatus.DUE_SOON.is_overdue
        assert not DueStatus.FUTURE.is_overdue


class TestStoredValues:
    """String-valued enums round-trip through their stored values."""

    def test_reminder_status_values(self):
        assert ReminderStatus("overdue") == ReminderStatus.OVERDUE
        assert ReminderStatus("due_soon") == ReminderStatus.DUE_SOON
        assert ReminderStatus("upcoming") == ReminderStatus.UPCOMING

    def test_health_status_values(self):
        assert [h.value for h in HealthStatus] == [
            "excellent",
            "good",
            "attention",
            "critical",
        ]
