"""MaintenanceTask class for recurring service actions."""

from datetime import date
from enum import Enum
from typing import Optional


class IntervalType(Enum):
    TIME = "time"
    USAGE = "usage"
    DATE = "date"
    HYBRID = "hybrid"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MaintenanceTask:
    """A recurring service action tied to an asset."""

    def __init__(
            self,
            task_name: str,
            asset_id: Optional[str] = None,
            id: Optional[str] = None,
            description: Optional[str] = None,
            category: Optional[str] = None,
            interval_type: Optional[IntervalType] = None,
            interval_days: Optional[int] = None,
            interval_miles: Optional[int] = None,
            interval_hours: Optional[int] = None,
            specific_date: Optional[date] = None,
            last_completed_date: Optional[date] = None,
            last_completed_mileage: Optional[int] = None,
            next_due_date: Optional[date] = None,
            next_due_mileage: Optional[int] = None,
            estimated_cost: Optional[float] = None,
            is_active: bool = True,
            is_required_by_contract: bool = False,
            priority: Optional[Priority] = None,
    ):
        self.id = id
        self.asset_id = asset_id
        self.task_name = task_name
        self.description = description
        self.category = category
        self.interval_type = interval_type or IntervalType.TIME
        self.interval_days = interval_days
        self.interval_miles = interval_miles
        self.interval_hours = interval_hours
        self.specific_date = specific_date
        self.last_completed_date = last_completed_date
        self.last_completed_mileage = last_completed_mileage
        self.next_due_date = next_due_date
        self.next_due_mileage = next_due_mileage
        self.estimated_cost = estimated_cost
        # YAML null means "not set", which defaults to active
        self.is_active = True if is_active is None else is_active
        self.is_required_by_contract = is_required_by_contract or False
        self.priority = priority or Priority.MEDIUM

    @property
    def interval_label(self) -> str:
        """Short description of the interval, e.g. '90 days / 5,000 mi'."""
        parts = []
        if self.interval_days:
            parts.append(f"{self.interval_days} days")
        if self.interval_miles:
            parts.append(f"{self.interval_miles:,} mi")
        if self.interval_hours:
            parts.append(f"{self.interval_hours:,} h")
        if self.interval_type == IntervalType.DATE and self.specific_date:
            parts.append(f"yearly on {self.specific_date.strftime('%b %d')}")
        return " / ".join(parts) if parts else "-"
