"""Maintenance schedule: every active task with its due status."""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from .aggregator import fetch_collections
from .asset import Asset
from .calculations import classify
from .maintenance_task import MaintenanceTask, Priority
from .requirement import Requirement
from .status import DueStatus
from .task_due import TaskDue

logger = logging.getLogger(__name__)

TIME_RANGES = (7, 30, 90, 999)
DEFAULT_TIME_RANGE = 90
PRIORITY_FILTERS = ("all", "required", "high")

SCHEDULE_GROUPS = (
    DueStatus.OVERDUE_REQUIRED,
    DueStatus.OVERDUE_OPTIONAL,
    DueStatus.DUE_SOON,
    DueStatus.UPCOMING,
)

SCHEDULE_COLLECTIONS = (
    "maintenanceTasks",
    "assets",
    "contractRequirements",
    "warrantyRequirements",
)


def build_schedule(
    tasks: Iterable[MaintenanceTask],
    assets: Iterable[Asset],
    requirements: Iterable[Requirement],
    reference_date: date,
) -> List[TaskDue]:
    """
    Classify every active task.

    A task counts as required when it is flagged as required by a contract
    or when any linked requirement is marked required. The first linked
    requirement is kept for display (consequence if missed, etc.).
    """
    assets_by_id = {a.id: a for a in assets}
    reqs_by_task: Dict[str, List[Requirement]] = {}
    for req in requirements:
        reqs_by_task.setdefault(req.maintenance_task_id, []).append(req)

    entries = []
    for task in tasks:
        if not task.is_active:
            continue
        task_reqs = reqs_by_task.get(task.id, [])
        is_required = task.is_required_by_contract or any(r.is_required for r in task_reqs)
        status, days = classify(reference_date, task.next_due_date, is_required)
        entries.append(
            TaskDue(
                task=task,
                status=status,
                days_until_due=days,
                is_required=is_required,
                asset=assets_by_id.get(task.asset_id),
                requirement=task_reqs[0] if task_reqs else None,
            )
        )
    return entries


def filter_schedule(
    entries: Iterable[TaskDue],
    asset_id: Optional[str] = None,
    priority: str = "all",
    time_range: int = DEFAULT_TIME_RANGE,
) -> List[TaskDue]:
    """
    Filter schedule entries.

    Args:
        asset_id: keep only this asset's tasks (None = all assets)
        priority: "all", "required", or "high" (high/critical or required)
        time_range: keep tasks due within this many days (999 = everything)
    """
    filtered = list(entries)
    if asset_id:
        filtered = [e for e in filtered if e.task.asset_id == asset_id]

    if priority == "required":
        filtered = [e for e in filtered if e.is_required]
    elif priority == "high":
        filtered = [
            e for e in filtered
            if e.is_required or e.task.priority in (Priority.HIGH, Priority.CRITICAL)
        ]

    if time_range > 0:
        filtered = [e for e in filtered if e.days_until_due <= time_range]
    return filtered


def group_by_status(entries: Iterable[TaskDue]) -> Dict[DueStatus, List[TaskDue]]:
    """Bucket entries by status (FUTURE is left out), most urgent first."""
    groups: Dict[DueStatus, List[TaskDue]] = {status: [] for status in SCHEDULE_GROUPS}
    for entry in entries:
        if entry.status in groups:
            groups[entry.status].append(entry)
    for bucket in groups.values():
        bucket.sort(key=lambda e: (e.days_until_due, e.task.task_name))
    return groups


def group_by_asset(entries: Iterable[TaskDue]) -> Dict[str, List[TaskDue]]:
    """Group entries by asset id, preserving first-seen order."""
    grouped: Dict[str, List[TaskDue]] = {}
    for entry in entries:
        key = entry.asset.id if entry.asset else "no-asset"
        grouped.setdefault(key, []).append(entry)
    return grouped


def fetch_schedule(store, reference_date: date) -> List[TaskDue]:
    """Fetch and classify the schedule; empty list on failure."""
    try:
        data = fetch_collections(store, SCHEDULE_COLLECTIONS)
    except Exception:
        logger.exception("Error fetching maintenance schedule")
        return []

    return build_schedule(
        data["maintenanceTasks"],
        data["assets"],
        data["contractRequirements"] + data["warrantyRequirements"],
        reference_date,
    )
