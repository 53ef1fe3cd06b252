"""
Asset maintenance tracking models.

This package provides data models for tracking assets and their upkeep:
- DueStatus / ReminderStatus / HealthStatus: urgency and health levels
- Asset, MaintenanceTask, Warranty, ServiceContract: stored records
- Requirement, AssetLink: coverage requirements and asset links
- ServiceRecord: performed maintenance
- TaskDue, ReminderItem: derived, never-persisted views
- YamlStore: CRUD access to the YAML data file
"""

from .status import DueStatus, ReminderStatus, HealthStatus
from .asset import Asset, AssetStatus
from .maintenance_task import MaintenanceTask, IntervalType, Priority
from .warranty import Warranty, RegistrationStatus
from .service_contract import ServiceContract, CostType, RenewalType
from .requirement import Requirement, AssetLink
from .service_record import PERFORMED_BY, ServiceRecord
from .task_due import TaskDue
from .reminder import ReminderItem, ReminderType
from .calculations import (
    NO_DUE_DATE_DAYS,
    DueResult,
    assess_health,
    calc_next_due_date,
    classify,
    first_due_date,
    days_until,
    reminder_status,
)
from .aggregator import aggregate, fetch_reminders
from .schedule import (
    TIME_RANGES,
    build_schedule,
    fetch_schedule,
    filter_schedule,
    group_by_asset,
    group_by_status,
)
from .loader import (
    YamlStore,
    RecordNotFound,
    add_coverage,
    add_requirement,
    add_task,
    complete_task,
    create_data_file,
)

__all__ = [
    "DueStatus",
    "ReminderStatus",
    "HealthStatus",
    "Asset",
    "AssetStatus",
    "MaintenanceTask",
    "IntervalType",
    "Priority",
    "Warranty",
    "RegistrationStatus",
    "ServiceContract",
    "CostType",
    "RenewalType",
    "Requirement",
    "AssetLink",
    "PERFORMED_BY",
    "ServiceRecord",
    "TaskDue",
    "ReminderItem",
    "ReminderType",
    "NO_DUE_DATE_DAYS",
    "DueResult",
    "assess_health",
    "calc_next_due_date",
    "classify",
    "first_due_date",
    "days_until",
    "reminder_status",
    "aggregate",
    "fetch_reminders",
    "TIME_RANGES",
    "build_schedule",
    "fetch_schedule",
    "filter_schedule",
    "group_by_asset",
    "group_by_status",
    "YamlStore",
    "RecordNotFound",
    "add_coverage",
    "add_requirement",
    "add_task",
    "complete_task",
    "create_data_file",
]
