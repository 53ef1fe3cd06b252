"""TaskDue dataclass for calculated task status."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .status import DueStatus

if TYPE_CHECKING:
    from .asset import Asset
    from .maintenance_task import MaintenanceTask
    from .requirement import Requirement


@dataclass
class TaskDue:
    """Calculated due information for a maintenance task."""

    task: "MaintenanceTask"
    status: DueStatus
    days_until_due: int
    is_required: bool = False
    asset: Optional["Asset"] = None
    requirement: Optional["Requirement"] = None

    @property
    def is_due(self) -> bool:
        return self.status in (
            DueStatus.OVERDUE_REQUIRED,
            DueStatus.OVERDUE_OPTIONAL,
            DueStatus.DUE_SOON,
        )

    @property
    def asset_name(self) -> str:
        return self.asset.name if self.asset else "Unknown Asset"
