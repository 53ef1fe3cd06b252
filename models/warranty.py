"""Warranty class for coverage periods and registration deadlines."""

from datetime import date
from enum import Enum
from typing import Optional


class RegistrationStatus(Enum):
    REGISTERED = "registered"
    REGISTRATION_REQUIRED = "registration_required"
    NOT_REQUIRED = "not_required"
    PENDING = "pending"
    EXPIRED = "expired"


class Warranty:
    """Manufacturer, extended or third-party warranty coverage."""

    def __init__(
            self,
            warranty_name: str,
            provider_name: str,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            id: Optional[str] = None,
            warranty_type: Optional[str] = None,
            is_active: bool = True,
            registration_status: Optional[RegistrationStatus] = None,
            registration_deadline: Optional[date] = None,
            deductible: Optional[float] = None,
            purchase_price: Optional[float] = None,
    ):
        self.id = id
        self.warranty_name = warranty_name
        self.provider_name = provider_name
        self.warranty_type = warranty_type
        self.start_date = start_date
        self.end_date = end_date
        self.is_active = True if is_active is None else is_active
        self.registration_status = registration_status or RegistrationStatus.NOT_REQUIRED
        self.registration_deadline = registration_deadline
        self.deductible = deductible
        self.purchase_price = purchase_price

    @property
    def needs_registration(self) -> bool:
        return (
            self.registration_status == RegistrationStatus.REGISTRATION_REQUIRED
            and self.registration_deadline is not None
        )
