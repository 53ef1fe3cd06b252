"""Asset class for tracked physical items."""

from datetime import date
from enum import Enum
from typing import Optional

from .status import HealthStatus


class AssetStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SOLD = "sold"
    RETIRED = "retired"


class Asset:
    """A vehicle, appliance or piece of equipment."""

    def __init__(
        self,
        name: str,
        category: str,
        id: Optional[str] = None,
        purchase_date: Optional[date] = None,
        purchase_price: Optional[float] = None,
        in_service_date: Optional[date] = None,
        manufacturer: Optional[str] = None,
        model: Optional[str] = None,
        serial_number: Optional[str] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
        current_mileage: Optional[int] = None,
        current_hours: Optional[int] = None,
        status: Optional[AssetStatus] = None,
        health_status: Optional[HealthStatus] = None,
        health_score: Optional[int] = None,
    ):
        self.id = id
        self.name = name
        self.category = category
        self.purchase_date = purchase_date
        self.purchase_price = purchase_price
        self.in_service_date = in_service_date
        self.manufacturer = manufacturer
        self.model = model
        self.serial_number = serial_number
        self.location = location
        self.notes = notes
        self.current_mileage = current_mileage
        self.current_hours = current_hours
        self.status = status or AssetStatus.ACTIVE
        self.health_status = health_status
        self.health_score = health_score

    @property
    def display_name(self) -> str:
        """Human-readable asset name."""
        details = " ".join(p for p in (self.manufacturer, self.model) if p)
        return f"{self.name} ({details})" if details else self.name
