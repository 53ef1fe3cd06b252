"""ReminderItem dataclass for derived, non-persisted reminders."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .status import ReminderStatus


class ReminderType(Enum):
    MAINTENANCE = "maintenance"
    WARRANTY = "warranty"
    CONTRACT = "contract"
    REGISTRATION = "registration"


@dataclass
class ReminderItem:
    """One actionable due date across tasks, warranties or contracts."""

    id: str
    title: str
    due_date: date
    type: ReminderType
    status: ReminderStatus
    asset_name: str
    details: str
    cost: Optional[float] = None
