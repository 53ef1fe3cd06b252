"""ServiceContract class for maintenance plans and service agreements."""

from datetime import date
from enum import Enum
from typing import Optional


class CostType(Enum):
    ONE_TIME = "one_time"
    MONTHLY = "monthly"
    ANNUAL = "annual"
    PER_SERVICE = "per_service"


class RenewalType(Enum):
    AUTO_RENEW = "auto_renew"
    MANUAL_RENEW = "manual_renew"
    NON_RENEWABLE = "non_renewable"


class ServiceContract:
    """A service contract covering one or more assets."""

    def __init__(
            self,
            contract_name: str,
            provider_name: str,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            id: Optional[str] = None,
            contract_type: Optional[str] = None,
            is_active: bool = True,
            renewal_type: Optional[RenewalType] = None,
            cost_type: Optional[CostType] = None,
            cost_amount: Optional[float] = None,
    ):
        self.id = id
        self.contract_name = contract_name
        self.provider_name = provider_name
        self.contract_type = contract_type
        self.start_date = start_date
        self.end_date = end_date
        self.is_active = True if is_active is None else is_active
        self.renewal_type = renewal_type or RenewalType.MANUAL_RENEW
        self.cost_type = cost_type
        self.cost_amount = cost_amount

    @property
    def auto_renews(self) -> bool:
        return self.renewal_type == RenewalType.AUTO_RENEW

    @property
    def annual_cost(self) -> float:
        """Yearly cost: monthly x 12, annual and one-time as-is."""
        if not self.cost_amount:
            return 0.0
        if self.cost_type == CostType.MONTHLY:
            return self.cost_amount * 12
        if self.cost_type in (CostType.ANNUAL, CostType.ONE_TIME):
            return self.cost_amount
        return 0.0

    @property
    def monthly_cost(self) -> float:
        if self.cost_type == CostType.MONTHLY and self.cost_amount:
            return self.cost_amount
        return 0.0
