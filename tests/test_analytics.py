#!/usr/bin/env python3
"""Tests for dashboard and cost analytics."""

from datetime import date, timedelta

import pytest

from models import (
    Asset,
    CostType,
    HealthStatus,
    MaintenanceTask,
    ServiceContract,
    ServiceRecord,
)
from models.analytics import cost_metrics, cost_trend, dashboard_stats, health_breakdown

TODAY = date(2025, 6, 15)


@pytest.fixture
def assets():
    return [
        Asset(id="a", name="Car", category="Vehicle", purchase_price=20000.0,
              health_status=HealthStatus.EXCELLENT),
        Asset(id="b", name="Furnace", category="HVAC", purchase_price=5000.0,
              health_status=HealthStatus.GOOD),
        Asset(id="c", name="Mower", category="Yard", health_status=HealthStatus.ATTENTION),
        Asset(id="d", name="Boat", category="Vehicle", health_status=HealthStatus.CRITICAL),
        Asset(id="e", name="Shed", category="Building"),
    ]


@pytest.fixture
def records():
    return [
        ServiceRecord(asset_id="a", service_name="Oil", service_date=date(2025, 6, 1), total_cost=80.0),
        ServiceRecord(asset_id="a", service_name="Tires", service_date=date(2025, 4, 10), total_cost=600.0),
        ServiceRecord(asset_id="b", service_name="Filter", service_date=date(2025, 6, 3), total_cost=20.0),
        ServiceRecord(asset_id="b", service_name="Check", service_date=date(2024, 1, 5)),
    ]


@pytest.fixture
def contracts():
    return [
        ServiceContract(contract_name="HVAC", provider_name="P", cost_type=CostType.MONTHLY, cost_amount=20.0),
        ServiceContract(contract_name="Lawn", provider_name="P", cost_type=CostType.ANNUAL, cost_amount=300.0),
        ServiceContract(contract_name="Old", provider_name="P", cost_type=CostType.MONTHLY,
                        cost_amount=10.0, is_active=False),
    ]


class TestDashboardStats:
    """Tests for dashboard_stats function."""

    def test_health_counts(self, assets):
        stats = dashboard_stats(assets, [], TODAY)
        assert stats.total_assets == 5
        assert stats.healthy_assets == 2
        assert stats.attention_assets == 1
        assert stats.critical_assets == 1

    def test_task_counts(self, assets):
        tasks = [
            MaintenanceTask(task_name="late", next_due_date=TODAY - timedelta(days=1)),
            MaintenanceTask(task_name="today", next_due_date=TODAY),
            MaintenanceTask(task_name="soon", next_due_date=TODAY + timedelta(days=30)),
            MaintenanceTask(task_name="later", next_due_date=TODAY + timedelta(days=31)),
            MaintenanceTask(task_name="nodate"),
            MaintenanceTask(task_name="off", next_due_date=TODAY, is_active=False),
        ]
        stats = dashboard_stats(assets, tasks, TODAY)
        assert stats.overdue_tasks == 1
        assert stats.upcoming_maintenance == 2


class TestCostMetrics:
    """Tests for cost_metrics function."""

    def test_totals(self, assets, records, contracts):
        metrics = cost_metrics(assets, records, contracts)
        assert metrics.total_asset_value == 25000.0
        assert metrics.total_maintenance_cost == 700.0
        assert metrics.total_contract_cost == 20.0 * 12 + 300.0 + 10.0 * 12
        assert metrics.avg_monthly_spend == pytest.approx(700.0 / 12 + 30.0)

    def test_empty(self):
        metrics = cost_metrics([], [], [])
        assert metrics.total_asset_value == 0
        assert metrics.avg_monthly_spend == 0


class TestCostTrend:
    """Tests for cost_trend function."""

    def test_six_months_oldest_first(self, records, contracts):
        trend = cost_trend(records, contracts, TODAY)
        assert [m["month"] for m in trend] == [
            "Jan 2025",
            "Feb 2025",
            "Mar 2025",
            "Apr 2025",
            "May 2025",
            "Jun 2025",
        ]

    def test_monthly_costs(self, records, contracts):
        trend = {m["month"]: m for m in cost_trend(records, contracts, TODAY)}
        assert trend["Jun 2025"]["maintenance_cost"] == 100.0
        assert trend["Apr 2025"]["maintenance_cost"] == 600.0
        assert trend["May 2025"]["maintenance_cost"] == 0
        # Only active monthly contracts count
        assert trend["May 2025"]["contract_cost"] == 20.0
        assert trend["Jun 2025"]["total_cost"] == 120.0

    def test_year_boundary(self):
        trend = cost_trend([], [], date(2025, 2, 10), months=3)
        assert [m["month"] for m in trend] == ["Dec 2024", "Jan 2025", "Feb 2025"]


class TestHealthBreakdown:
    """Tests for health_breakdown function."""

    def test_rows(self, assets, records):
        rows = {r["asset_name"]: r for r in health_breakdown(assets, records)}
        assert rows["Car"]["last_check"] == "2025-06-01"
        assert rows["Car"]["maintenance_cost"] == 680.0
        assert rows["Furnace"]["last_check"] == "2025-06-03"
        assert rows["Mower"]["last_check"] == "Never"
        assert rows["Mower"]["maintenance_cost"] == 0

    def test_default_health_good(self, assets, records):
        rows = {r["asset_name"]: r for r in health_breakdown(assets, records)}
        assert rows["Shed"]["health_status"] == HealthStatus.GOOD
        assert rows["Boat"]["health_status"] == HealthStatus.CRITICAL
