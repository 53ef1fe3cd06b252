"""ServiceRecord class for performed maintenance."""
from datetime import date
from typing import Optional

# Who performed the work
PERFORMED_BY = ("self", "shop", "dealer", "mobile")


class ServiceRecord:
    """A record of maintenance performed on an asset."""

    def __init__(
            self,
            asset_id: str,
            service_name: str,
            service_date: date,
            id: Optional[str] = None,
            maintenance_task_id: Optional[str] = None,
            performed_by: Optional[str] = None,
            total_cost: Optional[float] = None,
            mileage_at_service: Optional[int] = None,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.asset_id = asset_id
        self.maintenance_task_id = maintenance_task_id
        self.service_name = service_name
        self.service_date = service_date
        self.performed_by = performed_by
        self.total_cost = total_cost
        self.mileage_at_service = mileage_at_service
        self.notes = notes
