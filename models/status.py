"""Status enums for maintenance urgency and asset health."""

from enum import Enum


class DueStatus(Enum):
    """Due-date urgency categories. Lower value = more urgent."""

    OVERDUE_REQUIRED = 1
    OVERDUE_OPTIONAL = 2
    DUE_SOON = 3
    UPCOMING = 4
    FUTURE = 5  # Also used when there is no due date

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @property
    def is_overdue(self) -> bool:
        return self in (DueStatus.OVERDUE_REQUIRED, DueStatus.OVERDUE_OPTIONAL)


class ReminderStatus(Enum):
    """Buckets shown on the reminders view."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


class HealthStatus(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ATTENTION = "attention"
    CRITICAL = "critical"
