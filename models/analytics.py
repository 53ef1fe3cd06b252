"""Dashboard counts and cost analytics."""

from dataclasses import dataclass
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Dict, Iterable, List

from .asset import Asset
from .calculations import DUE_SOON_DAYS, days_until
from .maintenance_task import MaintenanceTask
from .service_contract import ServiceContract
from .service_record import ServiceRecord
from .status import HealthStatus


@dataclass
class DashboardStats:
    total_assets: int = 0
    healthy_assets: int = 0
    attention_assets: int = 0
    critical_assets: int = 0
    upcoming_maintenance: int = 0
    overdue_tasks: int = 0


@dataclass
class CostMetrics:
    total_asset_value: float = 0.0
    total_maintenance_cost: float = 0.0
    total_contract_cost: float = 0.0
    avg_monthly_spend: float = 0.0


def dashboard_stats(
    assets: List[Asset], tasks: Iterable[MaintenanceTask], reference_date: date
) -> DashboardStats:
    """Asset health counts plus upcoming (0..30 days) and overdue task counts."""
    stats = DashboardStats(total_assets=len(assets))
    for asset in assets:
        if asset.health_status in (HealthStatus.EXCELLENT, HealthStatus.GOOD):
            stats.healthy_assets += 1
        elif asset.health_status == HealthStatus.ATTENTION:
            stats.attention_assets += 1
        elif asset.health_status == HealthStatus.CRITICAL:
            stats.critical_assets += 1

    for task in tasks:
        if not task.is_active or task.next_due_date is None:
            continue
        days = days_until(reference_date, task.next_due_date)
        if days < 0:
            stats.overdue_tasks += 1
        elif days <= DUE_SOON_DAYS:
            stats.upcoming_maintenance += 1
    return stats


def cost_metrics(
    assets: Iterable[Asset],
    records: Iterable[ServiceRecord],
    contracts: Iterable[ServiceContract],
) -> CostMetrics:
    """
    Portfolio-wide cost figures.

    Contract cost is annualised (monthly x 12). Average monthly spend is
    maintenance / 12 plus the monthly contract payments.
    """
    contracts = list(contracts)
    maintenance = sum(r.total_cost or 0 for r in records)
    return CostMetrics(
        total_asset_value=sum(a.purchase_price or 0 for a in assets),
        total_maintenance_cost=maintenance,
        total_contract_cost=sum(c.annual_cost for c in contracts),
        avg_monthly_spend=maintenance / 12 + sum(c.monthly_cost for c in contracts),
    )


def cost_trend(
    records: Iterable[ServiceRecord],
    contracts: Iterable[ServiceContract],
    reference_date: date,
    months: int = 6,
) -> List[Dict]:
    """Per-month maintenance and contract cost, oldest month first."""
    records = list(records)
    monthly_contracts = sum(c.monthly_cost for c in contracts if c.is_active)
    first_of_month = reference_date.replace(day=1)

    trend = []
    for offset in range(months - 1, -1, -1):
        month = first_of_month - relativedelta(months=offset)
        maintenance = sum(
            r.total_cost or 0
            for r in records
            if r.service_date
            and (r.service_date.year, r.service_date.month) == (month.year, month.month)
        )
        trend.append({
            "month": month.strftime("%b %Y"),
            "maintenance_cost": maintenance,
            "contract_cost": monthly_contracts,
            "total_cost": maintenance + monthly_contracts,
        })
    return trend


def health_breakdown(
    assets: Iterable[Asset], records: Iterable[ServiceRecord]
) -> List[Dict]:
    """Per-asset health, last service date and lifetime maintenance cost."""
    records = list(records)
    rows = []
    for asset in assets:
        asset_records = [r for r in records if r.asset_id == asset.id]
        dated = [r for r in asset_records if r.service_date]
        last = max(dated, key=lambda r: r.service_date) if dated else None
        rows.append({
            "asset_name": asset.name,
            "health_status": asset.health_status or HealthStatus.GOOD,
            "last_check": last.service_date.isoformat() if last else "Never",
            "maintenance_cost": sum(r.total_cost or 0 for r in asset_records),
        })
    return rows
