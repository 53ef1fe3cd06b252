"""Helper functions for due-date calculations."""

import math
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from typing import Iterable, NamedTuple, Optional, Tuple, Union, TYPE_CHECKING

from .maintenance_task import IntervalType, MaintenanceTask
from .status import DueStatus, HealthStatus, ReminderStatus

if TYPE_CHECKING:
    from .task_due import TaskDue

DUE_SOON_DAYS = 30
UPCOMING_DAYS = 90
NO_DUE_DATE_DAYS = 999  # Sentinel for "never"

DateLike = Union[date, datetime]


class DueResult(NamedTuple):
    status: DueStatus
    days_until_due: int


def normalize_date(value: DateLike) -> date:
    """Strip time-of-day so comparisons happen at midnight."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until(reference_date: DateLike, due_date: DateLike) -> int:
    """Whole days from reference_date to due_date (negative when past)."""
    delta = normalize_date(due_date) - normalize_date(reference_date)
    return math.ceil(delta.total_seconds() / 86400)


def classify(
    reference_date: DateLike, due_date: Optional[DateLike], is_required: bool
) -> DueResult:
    """
    Classify a due date relative to reference_date.

    - No due date: FUTURE with the NO_DUE_DATE_DAYS sentinel
    - Past due: OVERDUE_REQUIRED / OVERDUE_OPTIONAL depending on is_required
    - 0..30 days: DUE_SOON (due today is day 0, never overdue)
    - 31..90 days: UPCOMING
    - Beyond that: FUTURE
    """
    if due_date is None:
        return DueResult(DueStatus.FUTURE, NO_DUE_DATE_DAYS)

    days = days_until(reference_date, due_date)
    if days < 0:
        status = DueStatus.OVERDUE_REQUIRED if is_required else DueStatus.OVERDUE_OPTIONAL
    elif days <= DUE_SOON_DAYS:
        status = DueStatus.DUE_SOON
    elif days <= UPCOMING_DAYS:
        status = DueStatus.UPCOMING
    else:
        status = DueStatus.FUTURE
    return DueResult(status, days)


def reminder_status(
    reference_date: DateLike, due_date: DateLike, horizon_days: int = DUE_SOON_DAYS
) -> ReminderStatus:
    """Bucket a due date for the reminders view using its own horizon."""
    days = days_until(reference_date, due_date)
    if days < 0:
        return ReminderStatus.OVERDUE
    if days <= horizon_days:
        return ReminderStatus.DUE_SOON
    return ReminderStatus.UPCOMING


def calc_next_due_date(task: MaintenanceTask, completed_on: date) -> Optional[date]:
    """
    Calculate the next due date after completing a task.

    - time/hybrid: completed_on + interval_days
    - date: specific_date rolled forward by years until after completed_on
    - usage: no date-based due point
    """
    if task.interval_type in (IntervalType.TIME, IntervalType.HYBRID):
        if not task.interval_days:
            return None
        return completed_on + relativedelta(days=task.interval_days)
    if task.interval_type == IntervalType.DATE:
        if task.specific_date is None:
            return None
        next_date = task.specific_date
        years = 0
        while next_date <= completed_on:
            years += 1
            next_date = task.specific_date + relativedelta(years=years)
        return next_date
    return None


def assess_health(task_dues: Iterable["TaskDue"]) -> Tuple[int, HealthStatus]:
    """Derive a 0-100 health score and badge from an asset's task statuses."""
    score = 100
    for due in task_dues:
        if due.status == DueStatus.OVERDUE_REQUIRED:
            score -= 25
        elif due.status == DueStatus.OVERDUE_OPTIONAL:
            score -= 10
        elif due.status == DueStatus.DUE_SOON:
            score -= 5
    score = max(score, 0)

    if score >= 90:
        return score, HealthStatus.EXCELLENT
    if score >= 70:
        return score, HealthStatus.GOOD
    if score >= 40:
        return score, HealthStatus.ATTENTION
    return score, HealthStatus.CRITICAL


def first_due_date(task: MaintenanceTask, reference_date: date) -> Optional[date]:
    """
    Due date for a newly added task that has no explicit one.

    Counts from the last completion when known. Date intervals fall on the
    next occurrence of specific_date, today included.
    """
    if task.last_completed_date is not None:
        return calc_next_due_date(task, task.last_completed_date)
    if task.interval_type == IntervalType.DATE and task.specific_date is not None:
        return calc_next_due_date(task, reference_date - timedelta(days=1))
    return None
